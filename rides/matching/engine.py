"""
Purpose: The ride matching entry point (single call the search UI makes).
What it does:

- drops rides that are not bookable (status != pending, no seats left)
- scores each remaining ride (scoring.py)
- drops hard-rejected rides and those under the route similarity floor
- returns MatchResults sorted by score, best first

Rule: Engine never invents results. An empty list is a valid answer;
showing "everything" instead is the fallback wrapper's job (fallback.py).
"""

# rides/matching/engine.py

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..models import MatchResult, RideOffer, TripRequest
from .policy import MatchingPolicy, default_policy
from .scoring import score_ride

logger = logging.getLogger(__name__)


def bookable_rides(rides: Sequence[RideOffer]) -> List[RideOffer]:
    """
    Returns only rides still open for booking, in input order.
    """
    return [ride for ride in rides if ride.is_matchable]


def match_rides(
    request: TripRequest,
    rides: Sequence[RideOffer],
    *,
    policy: Optional[MatchingPolicy] = None,
) -> List[MatchResult]:
    """
    Rank candidate rides for a rider request.

    Parameters
    ----------
    request:
        Rider origin/destination/departure.
    rides:
        Candidate rides from the booking system (any status).
    policy:
        MatchingPolicy with weights and caps. Defaults to default_policy().

    Returns
    -------
    MatchResults in descending score. The sort is stable so equal scores
    keep the order the rides were passed in.
    """
    policy = policy or default_policy()

    matches: List[MatchResult] = []
    rejected = 0
    for ride in bookable_rides(rides):
        result = score_ride(request, ride, policy)
        if result is None or result.route_similarity < policy.min_route_similarity:
            rejected += 1
            continue
        matches.append(result)

    matches.sort(key=lambda match: match.score, reverse=True)

    logger.debug(
        f"Matched {len(matches)} of {len(rides)} rides ({rejected} rejected on route)"
    )
    return matches
