"""
Rewards / loyalty domain package.

Public API:
- RewardsLedger (earn, redeem, coupons)
- Domain models: RewardTransaction, Coupon, RedemptionOption, results
- RewardsPolicy and the default REDEMPTION_OPTIONS catalog
"""

from .coupons import RandomSource, calculate_discount, generate_coupon_code
from .errors import CouponCodeExhausted, InsufficientPoints, RewardsError
from .ledger import RewardsLedger
from .models import (
    Coupon,
    DiscountType,
    EarnResult,
    RedemptionOption,
    RedemptionResult,
    RedemptionType,
    RewardTransaction,
    TransactionType,
)
from .policy import (
    REDEMPTION_OPTIONS,
    RewardsPolicy,
    default_rewards_policy,
    find_option,
    rewards_policy_from_env,
)

__all__ = [
    "RewardsLedger",
    "RandomSource",
    "calculate_discount",
    "generate_coupon_code",
    "RewardsError",
    "InsufficientPoints",
    "CouponCodeExhausted",
    "Coupon",
    "DiscountType",
    "EarnResult",
    "RedemptionOption",
    "RedemptionResult",
    "RedemptionType",
    "RewardTransaction",
    "TransactionType",
    "REDEMPTION_OPTIONS",
    "RewardsPolicy",
    "default_rewards_policy",
    "find_option",
    "rewards_policy_from_env",
]
