"""
Purpose: Core data models for the routing domain.
What it does:
Defines coordinates and the shapes produced by pickup sequencing,
without depending on any map provider or ORM.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Tuple

LatLng = Tuple[float, float]


class InvalidCoordinate(ValueError):
    """Raised when a lat/lng pair falls outside WGS-84 bounds."""
    pass


@dataclass(frozen=True)
class Coordinate:
    """
    A WGS-84 point in degrees. Validated on construction so scoring code
    never has to deal with malformed input.
    """
    lat: float
    lng: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.lat) and math.isfinite(self.lng)):
            raise InvalidCoordinate(f"coordinate must be finite, got ({self.lat}, {self.lng})")
        if not -90.0 <= self.lat <= 90.0:
            raise InvalidCoordinate(f"lat must be within [-90, 90], got {self.lat}")
        if not -180.0 <= self.lng <= 180.0:
            raise InvalidCoordinate(f"lng must be within [-180, 180], got {self.lng}")

    @classmethod
    def from_tuple(cls, point: LatLng) -> Coordinate:
        lat, lng = point
        return cls(lat=float(lat), lng=float(lng))

    def as_tuple(self) -> LatLng:
        return (self.lat, self.lng)


@dataclass(frozen=True)
class PassengerPickup:
    """A confirmed passenger waiting at a pickup point."""
    id: str
    pickup: Coordinate


@dataclass(frozen=True)
class RouteLeg:
    """One hop of a driver route. passenger_id is None for the final leg."""
    passenger_id: str | None
    start: Coordinate
    end: Coordinate
    distance_km: float
    duration_min: float


@dataclass(frozen=True)
class PickupPlan:
    """
    Output of pickup sequencing (what the driver multi-passenger view renders).
    """
    passenger_ids: List[str]
    waypoints: List[Coordinate]
    legs: List[RouteLeg] = field(default_factory=list)
    total_distance_km: float = 0.0
    total_duration_min: float = 0.0
