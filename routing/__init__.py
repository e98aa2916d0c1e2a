#Marks routing as a package.
#Re-exports the public APIs (distance math, pickup sequencing) so other
#modules import from routing without knowing internal file names.
#No business logic.

from .models import Coordinate, InvalidCoordinate, PassengerPickup, PickupPlan, RouteLeg
from .geo_math import EARTH_RADIUS_KM, distance_km, haversine_km
from .policy import SequencingPolicy, default_sequencing_policy, sequencing_policy_from_env
from .pickup_sequencer import sequence_pickups

__all__ = [
    "Coordinate",
    "InvalidCoordinate",
    "PassengerPickup",
    "PickupPlan",
    "RouteLeg",
    "EARTH_RADIUS_KM",
    "distance_km",
    "haversine_km",
    "SequencingPolicy",
    "default_sequencing_policy",
    "sequencing_policy_from_env",
    "sequence_pickups",
]
