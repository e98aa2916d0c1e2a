"""
Purpose: Central configuration for ride matching (single source of truth).
What it does:

Stores all tunable thresholds and weights:

DETOUR_RATIO = 0.3 (pickup + dropoff deviation allowed, as share of the rider's direct trip)

TIMING_WINDOW_MIN = 360

PICKUP_DISTANCE_CAP_KM = 5

WEIGHTS = route 0.4 / timing 0.3 / distance 0.2 / detour 0.1

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from config import env_float, load_environment, warn_unknown_overrides


@dataclass(frozen=True)
class MatchingPolicy:
    """
    Central configuration for ride matching.

    Notes:
    - 'detour_ratio' is the hard filter: a ride whose origin + destination
      deviation exceeds detour_ratio * rider's direct distance is rejected.
    - every other component decays linearly to 0 and never rejects.
    """

    # --- Route similarity (hard filter) ---
    detour_ratio: float = 0.3

    # Rides scoring below this route similarity are dropped as well.
    min_route_similarity: float = 1.0

    # --- Timing ---
    timing_window_minutes: float = 360.0  # 6 hours

    # --- Pickup proximity ---
    pickup_distance_cap_km: float = 5.0

    # --- Detour cost ---
    # Score points lost per extra km the driver drives.
    detour_penalty_per_km: float = 10.0

    # --- Weights (must sum to 1) ---
    route_weight: float = 0.4
    timing_weight: float = 0.3
    distance_weight: float = 0.2
    detour_weight: float = 0.1

    # --- Quality buckets (combined score thresholds) ---
    excellent_threshold: float = 80.0
    good_threshold: float = 60.0
    fair_threshold: float = 40.0

    # --- Fallback wrapper ---
    # Score given to every available ride when nothing matched.
    fallback_neutral_score: float = 50.0

    def validate(self) -> None:
        """
        Basic sanity checks. Call once at startup if you want.
        """
        if self.detour_ratio <= 0:
            raise ValueError("detour_ratio must be > 0")

        if not 0 <= self.min_route_similarity <= 100:
            raise ValueError("min_route_similarity must be within [0, 100]")

        if self.timing_window_minutes <= 0:
            raise ValueError("timing_window_minutes must be > 0")

        if self.pickup_distance_cap_km <= 0:
            raise ValueError("pickup_distance_cap_km must be > 0")

        if self.detour_penalty_per_km < 0:
            raise ValueError("detour_penalty_per_km must be >= 0")

        weights = (self.route_weight, self.timing_weight, self.distance_weight, self.detour_weight)
        if any(w < 0 for w in weights):
            raise ValueError("score weights must be >= 0")
        if not math.isclose(sum(weights), 1.0, abs_tol=1e-9):
            raise ValueError("score weights must sum to 1")

        if not (self.excellent_threshold >= self.good_threshold >= self.fair_threshold):
            raise ValueError("quality thresholds must be excellent >= good >= fair")

        if not 0 <= self.fallback_neutral_score <= 100:
            raise ValueError("fallback_neutral_score must be within [0, 100]")


def default_policy() -> MatchingPolicy:
    """
    Convenience factory for the default policy.
    """
    p = MatchingPolicy()
    p.validate()
    return p


def strict_policy() -> MatchingPolicy:
    """
    Example: tighter matching for dense city centres where many rides exist.
    """
    p = MatchingPolicy(
        detour_ratio=0.2,
        timing_window_minutes=120.0,
        pickup_distance_cap_km=2.0,
    )
    p.validate()
    return p


def relaxed_policy() -> MatchingPolicy:
    """
    Example: looser matching for sparse suburbs or intercity trips.
    """
    p = MatchingPolicy(
        detour_ratio=0.45,
        timing_window_minutes=480.0,
        pickup_distance_cap_km=10.0,
        detour_penalty_per_km=5.0,
    )
    p.validate()
    return p


ENV_OVERRIDES = (
    "MATCH_DETOUR_RATIO",
    "MATCH_TIMING_WINDOW_MIN",
    "MATCH_PICKUP_CAP_KM",
    "MATCH_DETOUR_PENALTY_PER_KM",
    "MATCH_FALLBACK_SCORE",
)


def policy_from_env() -> MatchingPolicy:
    """
    Default policy with overrides from the environment / .env:
    MATCH_DETOUR_RATIO, MATCH_TIMING_WINDOW_MIN, MATCH_PICKUP_CAP_KM,
    MATCH_DETOUR_PENALTY_PER_KM, MATCH_FALLBACK_SCORE.
    """
    load_environment()
    warn_unknown_overrides("MATCH_", ENV_OVERRIDES)
    base = MatchingPolicy()
    p = MatchingPolicy(
        detour_ratio=env_float("MATCH_DETOUR_RATIO", base.detour_ratio),
        timing_window_minutes=env_float("MATCH_TIMING_WINDOW_MIN", base.timing_window_minutes),
        pickup_distance_cap_km=env_float("MATCH_PICKUP_CAP_KM", base.pickup_distance_cap_km),
        detour_penalty_per_km=env_float("MATCH_DETOUR_PENALTY_PER_KM", base.detour_penalty_per_km),
        fallback_neutral_score=env_float("MATCH_FALLBACK_SCORE", base.fallback_neutral_score),
    )
    p.validate()
    return p
