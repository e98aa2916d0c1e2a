"""
Purpose: Owns the rewards state (transactions + coupons) for every user.
What it does:
- append-only transaction log; a user's balance is the sum of their deltas
- earn_for_ride: points, cashback, milestone bonus, optional bonus coupon
- redeem: spend points on a catalog option (coupon or cashback record)
- coupon lifecycle: issue, read-time expiry filter, single use

Concurrency:
All reads and writes go through one re-entrant lock, so balance checks,
appends and the is_used flip are linearizable. Two concurrent
use_coupon(same_id) calls yield exactly one True. Coupons handed out are
frozen snapshots; re-read with get_coupon to see a later state.

Rule: Ledger owns state transitions; it never persists or sends anything.
Callers store the returned records and credit wallets themselves.
"""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional, Set

from .coupons import RandomSource, calculate_discount, generate_coupon_code, system_random
from .errors import CouponCodeExhausted, InsufficientPoints
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
from .policy import REDEMPTION_OPTIONS, RewardsPolicy, default_rewards_policy

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RewardsLedger:
    """
    In-memory rewards ledger.

    The ledger owns the balance: redeem() gates on the sum of the user's
    transactions, not on a number the caller passes in.

    Randomness and time are injected (rng, clock) so both branches of the
    post-ride coupon draw and coupon expiry can be tested deterministically.
    """

    def __init__(
        self,
        policy: Optional[RewardsPolicy] = None,
        *,
        rng: Optional[RandomSource] = None,
        clock: Optional[Clock] = None,
    ):
        self.policy = policy or default_rewards_policy()
        self.rng = rng or system_random()
        self.clock = clock or utc_now

        self._lock = threading.RLock()
        self._transactions: List[RewardTransaction] = []
        self._coupons: Dict[str, Coupon] = {}
        self._codes: Set[str] = set()

    # --- Reads ---

    def balance(self, user_id: str) -> int:
        with self._lock:
            return sum(t.points for t in self._transactions if t.user_id == user_id)

    def transactions(self) -> List[RewardTransaction]:
        """Snapshot of every transaction in append order."""
        with self._lock:
            return list(self._transactions)

    def get_user_transactions(self, user_id: str) -> List[RewardTransaction]:
        """
        Newest first; entries with the same timestamp keep latest-appended first.
        """
        with self._lock:
            mine = [t for t in reversed(self._transactions) if t.user_id == user_id]
        return sorted(mine, key=lambda t: t.created_at, reverse=True)

    def get_coupon(self, coupon_id: str) -> Optional[Coupon]:
        with self._lock:
            return self._coupons.get(coupon_id)

    def get_user_coupons(self, user_id: str) -> List[Coupon]:
        """
        Usable coupons only (not used AND not expired), newest first.
        Expiry is evaluated here, at read time; nothing sweeps in the background.
        """
        now = self.clock()
        with self._lock:
            usable = [
                c for c in reversed(list(self._coupons.values()))
                if c.user_id == user_id and c.is_usable(now)
            ]
        return sorted(usable, key=lambda c: c.created_at, reverse=True)

    def available_options(
        self,
        balance: int,
        catalog: Optional[List[RedemptionOption]] = None,
    ) -> List[RedemptionOption]:
        catalog = REDEMPTION_OPTIONS if catalog is None else catalog
        return [option for option in catalog if option.points_required <= balance]

    # --- Earning ---

    def grant(
        self,
        user_id: str,
        points: int,
        description: str,
        *,
        ride_id: Optional[str] = None,
    ) -> RewardTransaction:
        """
        Credit points outside the ride flow (opening balance, goodwill).
        """
        if points <= 0:
            raise ValueError("granted points must be > 0")
        with self._lock:
            txn = self._append(user_id, TransactionType.EARN, points, description, ride_id=ride_id)
        logger.info(f"Granted {points} points to {user_id}: {description}")
        return txn

    def earn_for_ride(
        self,
        user_id: str,
        ride_price: float,
        total_prior_rides: int,
        *,
        ride_id: Optional[str] = None,
    ) -> EarnResult:
        """
        Rewards for one completed ride.

        points       = policy.points_per_ride
        cashback     = ride_price * cashback_rate, rounded to 2 decimals
        bonus_points = milestone bonus if total_prior_rides + 1 is a milestone
        coupon       = issued when rng.random() < coupon_chance

        Exactly one earn transaction (points + bonus_points) is appended.
        """
        if ride_price < 0:
            raise ValueError("ride_price must be >= 0")
        if total_prior_rides < 0:
            raise ValueError("total_prior_rides must be >= 0")

        policy = self.policy
        points = policy.points_per_ride
        cashback = round(ride_price * policy.cashback_rate, 2)
        bonus_points = policy.milestone_bonus_for(total_prior_rides + 1)

        description = f"Ride completed: +{points} points"
        if bonus_points:
            description += f" (+{bonus_points} milestone bonus for ride #{total_prior_rides + 1})"

        with self._lock:
            #code is reserved before the append: CouponCodeExhausted must leave no transaction
            issued: Optional[Coupon] = None
            code: Optional[str] = None
            if self.rng.random() < policy.coupon_chance:
                discount_type, value = self.rng.choice(policy.auto_coupon_choices)
                code = self._new_code()

            txn = self._append(
                user_id,
                TransactionType.EARN,
                points + bonus_points,
                description,
                cashback=cashback,
                ride_id=ride_id,
            )

            if code is not None:
                issued = self._issue_coupon(
                    user_id,
                    code,
                    discount_type,
                    value,
                    validity_days=policy.auto_coupon_validity_days,
                )

        logger.info(
            f"User {user_id} earned {points + bonus_points} points and {cashback:.2f} cashback"
            + (f", coupon {issued.code}" if issued else "")
        )
        return EarnResult(
            points=points,
            cashback=cashback,
            bonus_points=bonus_points,
            transaction=txn,
            issued_coupon=issued,
        )

    # --- Spending ---

    def redeem(
        self,
        user_id: str,
        option: RedemptionOption,
        current_balance: Optional[int] = None,
    ) -> RedemptionResult:
        """
        Spend points on a catalog option.

        current_balance is the caller's snapshot, for cross-checking only:
        the gate uses the ledger balance and a disagreement is logged.

        On insufficient points nothing is recorded and the result carries
        success=False and the InsufficientPoints error.
        """
        if not isinstance(option, RedemptionOption):
            raise TypeError(f"expected RedemptionOption, got {type(option).__name__}")

        with self._lock:
            balance = self._balance_locked(user_id)
            if current_balance is not None and current_balance != balance:
                logger.warning(
                    f"Balance snapshot for {user_id} is {current_balance}, ledger has {balance}; using ledger"
                )

            try:
                self._ensure_balance(balance, option.points_required)
            except InsufficientPoints as exc:
                logger.info(f"Redemption of {option.id} by {user_id} refused: {exc}")
                return RedemptionResult(success=False, message=str(exc), error=exc)

            mints_coupon = option.type in (RedemptionType.DISCOUNT_COUPON, RedemptionType.FREE_RIDE)
            code = self._new_code() if mints_coupon else None

            cashback = option.value if option.type == RedemptionType.CASHBACK else None
            txn = self._append(
                user_id,
                TransactionType.REDEEM,
                -option.points_required,
                f"Redeemed: {option.title}",
                cashback=cashback,
            )

            coupon: Optional[Coupon] = None
            if code is not None:
                is_free_ride = option.type == RedemptionType.FREE_RIDE
                coupon = self._issue_coupon(
                    user_id,
                    code,
                    DiscountType.FREE_RIDE if is_free_ride else DiscountType.PERCENTAGE,
                    option.value,
                    validity_days=self.policy.redeemed_coupon_validity_days,
                    min_ride_value=None if is_free_ride else self.policy.redeemed_coupon_min_ride_value,
                )

        logger.info(f"User {user_id} redeemed {option.id} for {option.points_required} points")
        if coupon is not None:
            return RedemptionResult(
                success=True,
                message=f"Successfully redeemed {option.title}!",
                coupon=coupon,
                transaction=txn,
            )
        return RedemptionResult(
            success=True,
            message=f"Successfully redeemed {option.title}! ₹{option.value:g} has been added to your wallet.",
            transaction=txn,
        )

    # --- Coupons ---

    def use_coupon(self, coupon_id: str) -> bool:
        """
        Mark a coupon used. False (no-op) when it is unknown, already used
        or expired. Never raises for those cases.
        """
        now = self.clock()
        with self._lock:
            coupon = self._coupons.get(coupon_id)
            if coupon is None or not coupon.is_usable(now):
                return False
            coupon = self._mark_used(coupon, now)
        logger.info(f"Coupon {coupon.code} used by {coupon.user_id}")
        return True

    def apply_coupon(self, coupon_id: str, ride_price: float) -> float:
        """
        Checkout path: compute the discount and consume the coupon in one step.
        Returns 0.0 and leaves the coupon untouched when it cannot be applied
        (unknown, used, expired, or ride below min_ride_value).
        """
        now = self.clock()
        with self._lock:
            coupon = self._coupons.get(coupon_id)
            if coupon is None or not coupon.is_usable(now):
                return 0.0
            if coupon.min_ride_value is not None and ride_price < coupon.min_ride_value:
                return 0.0
            discount = calculate_discount(coupon, ride_price)
            coupon = self._mark_used(coupon, now)
        logger.info(f"Coupon {coupon.code} applied for {discount:.2f} off {ride_price:.2f}")
        return discount

    @staticmethod
    def calculate_discount(coupon: Coupon, ride_price: float) -> float:
        return calculate_discount(coupon, ride_price)

    # --- Internal helpers (call with the lock held) ---

    def _balance_locked(self, user_id: str) -> int:
        return sum(t.points for t in self._transactions if t.user_id == user_id)

    @staticmethod
    def _ensure_balance(balance: int, required: int) -> None:
        if balance < required:
            raise InsufficientPoints(required=required, available=balance)

    def _append(
        self,
        user_id: str,
        kind: TransactionType,
        points: int,
        description: str,
        *,
        cashback: Optional[float] = None,
        ride_id: Optional[str] = None,
    ) -> RewardTransaction:
        txn = RewardTransaction(
            id=f"txn-{uuid.uuid4()}",
            user_id=user_id,
            type=kind,
            points=points,
            description=description,
            created_at=self.clock(),
            cashback=cashback,
            ride_id=ride_id,
        )
        self._transactions.append(txn)
        return txn

    def _new_code(self) -> str:
        for _ in range(self.policy.max_code_attempts):
            code = generate_coupon_code(self.rng, self.policy)
            if code not in self._codes:
                self._codes.add(code)
                return code
            logger.warning(f"Coupon code collision on {code}, retrying")
        raise CouponCodeExhausted(
            f"no unique coupon code after {self.policy.max_code_attempts} attempts"
        )

    def _mark_used(self, coupon: Coupon, now: datetime) -> Coupon:
        used = replace(coupon, is_used=True, used_at=now)
        self._coupons[coupon.id] = used
        return used

    def _issue_coupon(
        self,
        user_id: str,
        code: str,
        discount_type: DiscountType,
        value: float,
        *,
        validity_days: int,
        min_ride_value: Optional[float] = None,
    ) -> Coupon:
        now = self.clock()
        coupon = Coupon(
            id=f"coupon-{uuid.uuid4()}",
            user_id=user_id,
            code=code,
            discount_type=discount_type,
            discount_value=value,
            expires_at=now + timedelta(days=validity_days),
            created_at=now,
            min_ride_value=min_ride_value,
        )
        self._coupons[coupon.id] = coupon
        return coupon
