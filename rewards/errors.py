"""Exceptions raised by the rewards ledger."""


class RewardsError(Exception):
    """Base class for rewards ledger errors."""
    pass


class InsufficientPoints(RewardsError):
    """
    The user's balance does not cover a redemption. Recoverable and
    user-facing: the ledger is left untouched.
    """

    def __init__(self, required: int, available: int):
        self.required = required
        self.available = available
        super().__init__(f"Insufficient points. You need {required} points.")


class CouponCodeExhausted(RewardsError):
    """No unused coupon code could be generated within the attempt budget."""
    pass
