"""
Purpose: Score one candidate ride against one rider request (0-100).
What it does:

Computes for a (request, ride) pair:

route_similarity = 100 * (1 - (d(o_r, o_ride) + d(d_r, d_ride)) / (detour_ratio * d(o_r, d_r)))
    HARD FILTER: if the deviation exceeds the allowance the ride is rejected.

timing_score = linear decay over the timing window (0 outside, never rejects)

distance_score = linear decay of pickup distance over the cap (0 beyond)

detour_km = d(ride_o, rider_o) + d(rider_o, ride_d) - d(ride_o, ride_d), floored at 0
detour_cost_score = max(0, 100 - detour_km * penalty)

score = weighted sum, clamped to [0, 100]

Rule: Scoring ranks one pair; it does not filter by status or sort.
"""

# rides/matching/scoring.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from routing.geo_math import distance_km
from routing.models import Coordinate

from ..models import MATCH_REASONS, MatchQuality, MatchResult, RideOffer, TripRequest
from .policy import MatchingPolicy


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def _linear_decay(value: float, cap: float) -> float:
    """100 at 0, falling linearly to 0 at cap; 0 beyond."""
    if value > cap:
        return 0.0
    return _clamp(100.0 * (1.0 - value / cap))


@dataclass(frozen=True)
class RouteAssessment:
    """
    Route similarity plus the inputs that produced it (for diagnostics).
    """
    total_detour_km: float
    max_acceptable_detour_km: float
    similarity: float
    rejected: bool


def route_similarity(
    rider_origin: Coordinate,
    rider_destination: Coordinate,
    ride_origin: Coordinate,
    ride_destination: Coordinate,
    policy: MatchingPolicy,
) -> RouteAssessment:
    origin_detour = distance_km(rider_origin, ride_origin)
    dest_detour = distance_km(rider_destination, ride_destination)
    direct = distance_km(rider_origin, rider_destination)

    max_acceptable = direct * policy.detour_ratio
    total = origin_detour + dest_detour

    #a zero-length trip has no allowance to share
    if max_acceptable <= 0 or total > max_acceptable:
        return RouteAssessment(total, max_acceptable, 0.0, rejected=True)

    similarity = _clamp(100.0 * (1.0 - total / max_acceptable))
    return RouteAssessment(total, max_acceptable, similarity, rejected=False)


def timing_score(rider_departure: datetime, ride_departure: datetime, policy: MatchingPolicy) -> float:
    diff_minutes = abs((rider_departure - ride_departure).total_seconds()) / 60.0
    return _linear_decay(diff_minutes, policy.timing_window_minutes)


def pickup_distance_score(rider_origin: Coordinate, ride_origin: Coordinate, policy: MatchingPolicy) -> float:
    return _linear_decay(distance_km(rider_origin, ride_origin), policy.pickup_distance_cap_km)


def detour_km(rider_origin: Coordinate, ride_origin: Coordinate, ride_destination: Coordinate) -> float:
    """Extra km the driver covers to collect the rider on the way."""
    with_pickup = distance_km(ride_origin, rider_origin) + distance_km(rider_origin, ride_destination)
    return max(0.0, with_pickup - distance_km(ride_origin, ride_destination))


def detour_cost_score(extra_km: float, policy: MatchingPolicy) -> float:
    return max(0.0, 100.0 - extra_km * policy.detour_penalty_per_km)


def classify(score: float, policy: MatchingPolicy) -> MatchQuality:
    if score >= policy.excellent_threshold:
        return MatchQuality.EXCELLENT
    if score >= policy.good_threshold:
        return MatchQuality.GOOD
    if score >= policy.fair_threshold:
        return MatchQuality.FAIR
    return MatchQuality.POSSIBLE


def score_ride(request: TripRequest, ride: RideOffer, policy: MatchingPolicy) -> Optional[MatchResult]:
    """
    Combined compatibility of `ride` for `request`.

    Returns None when the route hard filter rejects the ride. Timing,
    pickup distance and detour cost can each drop to 0 without rejecting.
    """
    route = route_similarity(request.origin, request.destination, ride.origin, ride.destination, policy)
    if route.rejected:
        return None

    timing = timing_score(request.departure_time, ride.departure_time, policy)
    distance = pickup_distance_score(request.origin, ride.origin, policy)
    extra_km = detour_km(request.origin, ride.origin, ride.destination)
    detour = detour_cost_score(extra_km, policy)

    combined = _clamp(
        policy.route_weight * route.similarity
        + policy.timing_weight * timing
        + policy.distance_weight * distance
        + policy.detour_weight * detour
    )
    quality = classify(combined, policy)

    return MatchResult(
        ride_id=ride.id,
        score=combined,
        route_similarity=route.similarity,
        timing_score=timing,
        distance_score=distance,
        detour_km=extra_km,
        detour_cost_score=detour,
        quality=quality,
        reason=MATCH_REASONS[quality],
    )
