"""
Purpose: Central configuration for pickup sequencing.

AVERAGE_SPEED_KMH = 30 (turns haversine distance into a rough duration)
SOFT_PASSENGER_CAP = 8 (realistic vehicle capacity; exceeding it only logs)

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

from dataclasses import dataclass

from config import env_float, env_int, load_environment, warn_unknown_overrides


@dataclass(frozen=True)
class SequencingPolicy:
    """
    Central configuration for the driver multi-passenger route.
    """

    # City driving average used for duration estimates (no live traffic).
    average_speed_kmh: float = 30.0

    # Sequencing is O(n^2); above this many passengers we log a warning.
    soft_passenger_cap: int = 8

    def validate(self) -> None:
        if self.average_speed_kmh <= 0:
            raise ValueError("average_speed_kmh must be > 0")

        if self.soft_passenger_cap < 1:
            raise ValueError("soft_passenger_cap must be >= 1")


def default_sequencing_policy() -> SequencingPolicy:
    p = SequencingPolicy()
    p.validate()
    return p


ENV_OVERRIDES = ("SEQUENCING_SPEED_KMH", "SEQUENCING_PASSENGER_CAP")


def sequencing_policy_from_env() -> SequencingPolicy:
    """
    Default policy with overrides from SEQUENCING_SPEED_KMH / SEQUENCING_PASSENGER_CAP.
    """
    load_environment()
    warn_unknown_overrides("SEQUENCING_", ENV_OVERRIDES)
    base = SequencingPolicy()
    p = SequencingPolicy(
        average_speed_kmh=env_float("SEQUENCING_SPEED_KMH", base.average_speed_kmh),
        soft_passenger_cap=env_int("SEQUENCING_PASSENGER_CAP", base.soft_passenger_cap),
    )
    p.validate()
    return p
