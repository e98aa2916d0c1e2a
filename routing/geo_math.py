"""
Purpose: Great-circle distance math shared by matching and sequencing.
Haversine over a spherical earth is the proxy for road distance everywhere
in this repo (no routing engine is consulted).
"""

from __future__ import annotations

import math

from .models import Coordinate

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    Haversine distance in kilometres between two lat/lng pairs (degrees).

    Uses the atan2 form, and clamps the intermediate term into [0, 1] so
    rounding near antipodal points cannot produce NaN.
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)

    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    a = min(1.0, max(0.0, a))

    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_km(a: Coordinate, b: Coordinate) -> float:
    """Distance between two coordinates. Symmetric, 0 for identical points."""
    if a == b:
        return 0.0
    return haversine_km(a.lat, a.lng, b.lat, b.lng)
