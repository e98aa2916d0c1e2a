"""
Purpose: Coupon mechanics that do not touch ledger state.
What it does:
- RandomSource: the injectable randomness seam (coupon draw, code chars,
  auto-coupon rule). random.Random satisfies it; tests pass a fixed source.
- generate_coupon_code: PREFIX + N chars from [A-Z0-9]
- calculate_discount: money off a ride price for a coupon

Codes are best-effort unique only. The ledger checks them against codes it
already issued (see RewardsLedger._new_code).
"""

from __future__ import annotations

import random
from typing import Protocol, Sequence, TypeVar

from .models import Coupon, DiscountType
from .policy import RewardsPolicy

T = TypeVar("T")


class RandomSource(Protocol):
    def random(self) -> float: ...

    def choice(self, seq: Sequence[T]) -> T: ...


def system_random() -> RandomSource:
    """Unseeded source used in production."""
    return random.Random()


def generate_coupon_code(rng: RandomSource, policy: RewardsPolicy) -> str:
    chars = [rng.choice(policy.coupon_code_alphabet) for _ in range(policy.coupon_code_length)]
    return policy.coupon_code_prefix + "".join(chars)


def calculate_discount(coupon: Coupon, ride_price: float) -> float:
    """
    free_ride -> up to discount_value, percentage -> share of price,
    fixed -> up to discount_value. Never more than the ride price.
    """
    if ride_price <= 0:
        return 0.0
    if coupon.discount_type == DiscountType.PERCENTAGE:
        return ride_price * coupon.discount_value / 100.0
    # free_ride and fixed both cap at the ride price
    return min(ride_price, coupon.discount_value)
