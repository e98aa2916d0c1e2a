"""
Purpose: Domain models for the rewards/loyalty capability.
What it does:
- RewardTransaction: immutable ledger entry (earn / redeem)
- Coupon: single-use discount instrument with expiry
- RedemptionOption: catalog entry users spend points on
- EarnResult / RedemptionResult: what ledger operations hand back

Rule: No ledger logic here. Models and fail-fast validation only.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class TransactionType(str, Enum):
    EARN = "earn"
    REDEEM = "redeem"


class DiscountType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"
    FREE_RIDE = "free_ride"


class RedemptionType(str, Enum):
    DISCOUNT_COUPON = "discount_coupon"
    CASHBACK = "cashback"
    FREE_RIDE = "free_ride"


@dataclass(frozen=True)
class RewardTransaction:
    """
    One append-only ledger entry. points is signed: positive for earn,
    negative for redeem.
    """
    id: str
    user_id: str
    type: TransactionType
    points: int
    description: str
    created_at: datetime
    cashback: Optional[float] = None
    ride_id: Optional[str] = None


@dataclass(frozen=True)
class Coupon:
    """
    A discount instrument. is_used only ever goes False -> True, and only
    through the ledger (which swaps in a used copy under its lock).
    Callers always hold snapshots.
    """
    id: str
    user_id: str
    code: str
    discount_type: DiscountType
    discount_value: float
    expires_at: datetime
    created_at: datetime
    min_ride_value: Optional[float] = None
    is_used: bool = False
    used_at: Optional[datetime] = None

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now

    def is_usable(self, now: datetime) -> bool:
        return not self.is_used and not self.is_expired(now)


@dataclass(frozen=True)
class RedemptionOption:
    """
    Static catalog entry. A malformed option is a programmer error, so it
    fails on construction rather than producing a nonsensical transaction.
    """
    id: str
    title: str
    type: RedemptionType
    points_required: int
    value: float
    description: str = ""

    def __post_init__(self) -> None:
        try:
            kind = RedemptionType(self.type)
        except ValueError:
            raise ValueError(f"redemption option {self.id!r}: unknown type {self.type!r}") from None
        object.__setattr__(self, "type", kind)

        if isinstance(self.points_required, bool) or not isinstance(self.points_required, int):
            raise ValueError(f"redemption option {self.id!r}: points_required must be an int")
        if self.points_required < 0:
            raise ValueError(f"redemption option {self.id!r}: points_required must be >= 0")
        if self.value < 0:
            raise ValueError(f"redemption option {self.id!r}: value must be >= 0")


@dataclass(frozen=True)
class EarnResult:
    points: int
    cashback: float
    bonus_points: int
    transaction: RewardTransaction
    issued_coupon: Optional[Coupon] = None

    @property
    def total_points(self) -> int:
        return self.points + self.bonus_points


@dataclass(frozen=True)
class RedemptionResult:
    success: bool
    message: str
    coupon: Optional[Coupon] = None
    transaction: Optional[RewardTransaction] = None
    error: Optional[Exception] = None
