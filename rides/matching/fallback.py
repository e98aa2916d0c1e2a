"""
Purpose: Product-level fallback around the matcher.
When nothing passes the matcher, the search screen still lists every
bookable ride with a neutral score instead of an empty page.

Kept separate from engine.py so match_rides stays honest about what matched.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..models import MatchResult, RideOffer, TripRequest
from .engine import bookable_rides, match_rides
from .policy import MatchingPolicy, default_policy
from .scoring import classify

logger = logging.getLogger(__name__)

FALLBACK_REASON = "Available ride nearby"


def neutral_results(rides: Sequence[RideOffer], policy: MatchingPolicy) -> List[MatchResult]:
    score = policy.fallback_neutral_score
    quality = classify(score, policy)
    return [
        MatchResult(
            ride_id=ride.id,
            score=score,
            route_similarity=0.0,
            timing_score=0.0,
            distance_score=0.0,
            detour_km=0.0,
            detour_cost_score=0.0,
            quality=quality,
            reason=FALLBACK_REASON,
            is_fallback=True,
        )
        for ride in bookable_rides(rides)
    ]


def match_with_fallback(
    request: TripRequest,
    rides: Sequence[RideOffer],
    *,
    policy: Optional[MatchingPolicy] = None,
) -> List[MatchResult]:
    """
    match_rides, or every bookable ride at the neutral score if that is empty.
    Fallback results are flagged with is_fallback=True.
    """
    policy = policy or default_policy()

    matches = match_rides(request, rides, policy=policy)
    if matches:
        return matches

    fallback = neutral_results(rides, policy)
    logger.info(f"No route matches, falling back to {len(fallback)} available rides")
    return fallback
