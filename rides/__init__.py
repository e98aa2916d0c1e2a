"""
Rides domain package.

Public API:
- Domain models: TripRequest, RideOffer, RideStatus, MatchResult, MatchQuality
- Impact estimates: estimate_impact
- Matching entry points live in rides.matching
"""
from routing.models import Coordinate

from .impact import ImpactEstimate, co2_savings_kg, estimate_impact, fuel_savings_liters
from .models import MatchQuality, MatchResult, RideOffer, RideStatus, TripRequest

__all__ = [
    "Coordinate",
    "TripRequest",
    "RideOffer",
    "RideStatus",
    "MatchResult",
    "MatchQuality",
    "ImpactEstimate",
    "co2_savings_kg",
    "fuel_savings_liters",
    "estimate_impact",
]
