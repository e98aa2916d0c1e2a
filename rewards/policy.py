"""
Purpose: Central configuration for points, cashback and coupons.
What it does:

Stores all tunable reward parameters:

POINTS_PER_RIDE = 100

CASHBACK_RATE = 0.05

MILESTONE_RIDES = 5, 10, 25, 50, 100 -> BONUS = 250, 500, 1000, 2500, 5000

COUPON_CHANCE = 0.30 (post-ride bonus coupon)

COUPON VALIDITY = 30 days (auto-issued) / 60 days (redeemed)

Also holds the default redemption catalog.

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from config import env_float, env_int, env_int_tuple, load_environment, warn_unknown_overrides

from .models import DiscountType, RedemptionOption, RedemptionType


@dataclass(frozen=True)
class RewardsPolicy:
    """
    Central configuration for the rewards ledger.
    """

    # --- Earning ---
    points_per_ride: int = 100
    cashback_rate: float = 0.05

    # Index aligned: reaching milestone_rides[i] completed rides pays milestone_bonus[i].
    milestone_rides: Tuple[int, ...] = (5, 10, 25, 50, 100)
    milestone_bonus: Tuple[int, ...] = (250, 500, 1000, 2500, 5000)

    # --- Post-ride bonus coupon ---
    coupon_chance: float = 0.30
    auto_coupon_validity_days: int = 30
    auto_coupon_choices: Tuple[Tuple[DiscountType, float], ...] = field(
        default_factory=lambda: (
            (DiscountType.PERCENTAGE, 10.0),
            (DiscountType.PERCENTAGE, 15.0),
            (DiscountType.PERCENTAGE, 20.0),
            (DiscountType.FIXED, 5.0),
        )
    )

    # --- Redemption ---
    redeemed_coupon_validity_days: int = 60
    # Minimum ride value for redeemed coupons other than free rides.
    redeemed_coupon_min_ride_value: float = 5.0

    # --- Coupon codes ---
    coupon_code_prefix: str = "WAY"
    coupon_code_length: int = 8
    coupon_code_alphabet: str = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
    max_code_attempts: int = 10

    def milestone_bonus_for(self, completed_rides: int) -> int:
        """Bonus for the ride that brings the user to `completed_rides`."""
        for rides, bonus in zip(self.milestone_rides, self.milestone_bonus):
            if rides == completed_rides:
                return bonus
        return 0

    def validate(self) -> None:
        """
        Basic sanity checks. Call once at startup if you want.
        """
        if self.points_per_ride < 0:
            raise ValueError("points_per_ride must be >= 0")

        if not 0 <= self.cashback_rate <= 1:
            raise ValueError("cashback_rate must be within [0, 1]")

        if len(self.milestone_rides) != len(self.milestone_bonus):
            raise ValueError("milestone_rides and milestone_bonus must have the same length")

        if any(r <= 0 for r in self.milestone_rides) or any(b < 0 for b in self.milestone_bonus):
            raise ValueError("milestones must be > 0 and bonuses >= 0")

        if not 0 <= self.coupon_chance <= 1:
            raise ValueError("coupon_chance must be within [0, 1]")

        if not self.auto_coupon_choices:
            raise ValueError("auto_coupon_choices must not be empty")

        if self.auto_coupon_validity_days <= 0 or self.redeemed_coupon_validity_days <= 0:
            raise ValueError("coupon validity days must be > 0")

        if self.coupon_code_length <= 0 or not self.coupon_code_alphabet:
            raise ValueError("coupon code length and alphabet must be non-empty")

        if self.max_code_attempts < 1:
            raise ValueError("max_code_attempts must be >= 1")


def default_rewards_policy() -> RewardsPolicy:
    p = RewardsPolicy()
    p.validate()
    return p


ENV_OVERRIDES = (
    "REWARDS_POINTS_PER_RIDE",
    "REWARDS_CASHBACK_RATE",
    "REWARDS_MILESTONE_RIDES",
    "REWARDS_MILESTONE_BONUS",
    "REWARDS_COUPON_CHANCE",
    "REWARDS_AUTO_COUPON_DAYS",
    "REWARDS_REDEEMED_COUPON_DAYS",
)


def rewards_policy_from_env() -> RewardsPolicy:
    """
    Default policy with overrides from the environment / .env:
    REWARDS_POINTS_PER_RIDE, REWARDS_CASHBACK_RATE, REWARDS_COUPON_CHANCE,
    REWARDS_MILESTONE_RIDES, REWARDS_MILESTONE_BONUS,
    REWARDS_AUTO_COUPON_DAYS, REWARDS_REDEEMED_COUPON_DAYS.
    """
    load_environment()
    warn_unknown_overrides("REWARDS_", ENV_OVERRIDES)
    base = RewardsPolicy()
    p = RewardsPolicy(
        points_per_ride=env_int("REWARDS_POINTS_PER_RIDE", base.points_per_ride),
        cashback_rate=env_float("REWARDS_CASHBACK_RATE", base.cashback_rate),
        milestone_rides=env_int_tuple("REWARDS_MILESTONE_RIDES", base.milestone_rides),
        milestone_bonus=env_int_tuple("REWARDS_MILESTONE_BONUS", base.milestone_bonus),
        coupon_chance=env_float("REWARDS_COUPON_CHANCE", base.coupon_chance),
        auto_coupon_validity_days=env_int("REWARDS_AUTO_COUPON_DAYS", base.auto_coupon_validity_days),
        redeemed_coupon_validity_days=env_int("REWARDS_REDEEMED_COUPON_DAYS", base.redeemed_coupon_validity_days),
    )
    p.validate()
    return p


# Listed ascending by points within each type. Nothing relies on the order.
REDEMPTION_OPTIONS: List[RedemptionOption] = [
    # Discount coupons
    RedemptionOption("discount-10", "10% Discount Coupon", RedemptionType.DISCOUNT_COUPON, 200, 10,
                     "Get 10% off on your next ride"),
    RedemptionOption("discount-25", "25% Discount Coupon", RedemptionType.DISCOUNT_COUPON, 500, 25,
                     "Get 25% off on your next ride"),
    RedemptionOption("discount-50", "50% Discount Coupon", RedemptionType.DISCOUNT_COUPON, 1000, 50,
                     "Get 50% off on your next ride"),
    RedemptionOption("discount-80", "80% Discount Coupon", RedemptionType.DISCOUNT_COUPON, 2000, 80,
                     "Get 80% off on your next ride"),
    # Cashback
    RedemptionOption("cashback-50", "₹50 Cashback", RedemptionType.CASHBACK, 400, 50,
                     "Get ₹50 added to your wallet"),
    RedemptionOption("cashback-100", "₹100 Cashback", RedemptionType.CASHBACK, 750, 100,
                     "Get ₹100 added to your wallet"),
    RedemptionOption("cashback-250", "₹250 Cashback", RedemptionType.CASHBACK, 1500, 250,
                     "Get ₹250 added to your wallet"),
    RedemptionOption("cashback-500", "₹500 Cashback", RedemptionType.CASHBACK, 3000, 500,
                     "Get ₹500 added to your wallet"),
    # Free rides, high points only
    RedemptionOption("free-ride-small", "Free Ride Up to ₹100", RedemptionType.FREE_RIDE, 5000, 100,
                     "Redeem for a free ride worth up to ₹100"),
    RedemptionOption("free-ride-medium", "Free Ride Up to ₹200", RedemptionType.FREE_RIDE, 8000, 200,
                     "Redeem for a free ride worth up to ₹200"),
    RedemptionOption("free-ride-large", "Free Ride Up to ₹500", RedemptionType.FREE_RIDE, 15000, 500,
                     "Redeem for a free ride worth up to ₹500"),
]


def find_option(option_id: str, catalog: Optional[List[RedemptionOption]] = None) -> Optional[RedemptionOption]:
    for option in catalog if catalog is not None else REDEMPTION_OPTIONS:
        if option.id == option_id:
            return option
    return None
