"""
Purpose: Domain models for the ride search capability.
What it does:
- Defines the rider's query (TripRequest) and the candidate rides the
  booking system hands us (RideOffer).
- Defines the ranked output (MatchResult) and its quality bucket.

Rule: No scoring logic here. Models and input validation only.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from routing.models import Coordinate


class RideStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class MatchQuality(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POSSIBLE = "possible"


MATCH_REASONS = {
    MatchQuality.EXCELLENT: "Excellent match - Similar route and timing",
    MatchQuality.GOOD: "Good match - Route alignment is strong",
    MatchQuality.FAIR: "Fair match - Some detour required",
    MatchQuality.POSSIBLE: "Possible match - Consider alternatives",
}


def _require_aware(name: str, value: datetime) -> None:
    if value.tzinfo is None or value.tzinfo.utcoffset(value) is None:
        raise ValueError(f"{name} must be timezone-aware")


@dataclass(frozen=True)
class TripRequest:
    """
    A rider's search. Built per query and thrown away afterwards.
    """
    origin: Coordinate
    destination: Coordinate
    departure_time: datetime
    origin_label: str = ""
    destination_label: str = ""

    def __post_init__(self) -> None:
        _require_aware("departure_time", self.departure_time)


@dataclass(frozen=True)
class RideOffer:
    """
    A driver's published ride. Owned by the booking system, read-only here.
    Only PENDING offers with seats left are matchable.
    """
    id: str
    driver_id: str
    origin: Coordinate
    destination: Coordinate
    departure_time: datetime
    seats_remaining: int
    price_per_seat: float
    status: RideStatus = RideStatus.PENDING
    origin_label: str = ""
    destination_label: str = ""

    def __post_init__(self) -> None:
        _require_aware("departure_time", self.departure_time)
        if self.seats_remaining < 0:
            raise ValueError(f"ride {self.id}: seats_remaining must be >= 0")
        if self.price_per_seat < 0:
            raise ValueError(f"ride {self.id}: price_per_seat must be >= 0")
        if isinstance(self.status, str) and not isinstance(self.status, RideStatus):
            object.__setattr__(self, "status", RideStatus(self.status))

    @property
    def is_matchable(self) -> bool:
        return self.status == RideStatus.PENDING and self.seats_remaining > 0


@dataclass(frozen=True)
class MatchResult:
    """
    Score of one ride against one request, with the sub-scores kept for
    explainability. Produced fresh per query, never mutated.
    """
    ride_id: str
    score: float
    route_similarity: float
    timing_score: float
    distance_score: float
    detour_km: float
    detour_cost_score: float
    quality: MatchQuality
    reason: str
    is_fallback: bool = False
