"""
Purpose: Order pickups for a driver carrying several confirmed passengers.
What it does:
- starts at the driver's position
- repeatedly visits the closest unvisited pickup (haversine)
- finishes at the driver's final destination
- reports per-leg and cumulative distance/duration

This is a greedy nearest-neighbour heuristic. It gives a reasonable route,
NOT a minimal one: it is not a TSP solver and can be beaten by an exhaustive
search on some inputs.

Rule: pure function over by-value inputs, no shared state.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .geo_math import distance_km
from .models import Coordinate, PassengerPickup, PickupPlan, RouteLeg
from .policy import SequencingPolicy, default_sequencing_policy

logger = logging.getLogger(__name__)


def _leg(
    passenger_id: Optional[str],
    start: Coordinate,
    end: Coordinate,
    policy: SequencingPolicy,
) -> RouteLeg:
    km = distance_km(start, end)
    return RouteLeg(
        passenger_id=passenger_id,
        start=start,
        end=end,
        distance_km=km,
        duration_min=km / policy.average_speed_kmh * 60.0,
    )


def sequence_pickups(
    driver_start: Coordinate,
    passengers: Sequence[PassengerPickup],
    final_destination: Coordinate,
    *,
    policy: Optional[SequencingPolicy] = None,
) -> PickupPlan:
    """
    Greedy nearest-neighbour pickup order.

    Ties (equal distance from the current position) go to the passenger
    listed first in `passengers`, so output is reproducible.

    Returns:
        PickupPlan with passenger ids in visiting order, the full waypoint
        list [driver_start, *pickups, final_destination], the legs and totals.
    """
    policy = policy or default_sequencing_policy()

    seen_ids = set()
    for passenger in passengers:
        if passenger.id in seen_ids:
            raise ValueError(f"duplicate passenger id {passenger.id!r}")
        seen_ids.add(passenger.id)

    if len(passengers) > policy.soft_passenger_cap:
        logger.warning(
            f"Sequencing {len(passengers)} passengers, above soft cap of {policy.soft_passenger_cap}"
        )

    unvisited: List[PassengerPickup] = list(passengers)
    order: List[str] = []
    waypoints: List[Coordinate] = [driver_start]
    legs: List[RouteLeg] = []
    current = driver_start

    while unvisited:
        nearest_index = 0
        min_distance = float("inf")
        for index, passenger in enumerate(unvisited):
            d = distance_km(current, passenger.pickup)
            #strict < keeps the first-seen passenger on ties
            if d < min_distance:
                min_distance = d
                nearest_index = index

        nearest = unvisited.pop(nearest_index)
        legs.append(_leg(nearest.id, current, nearest.pickup, policy))
        order.append(nearest.id)
        waypoints.append(nearest.pickup)
        current = nearest.pickup

    legs.append(_leg(None, current, final_destination, policy))
    waypoints.append(final_destination)

    plan = PickupPlan(
        passenger_ids=order,
        waypoints=waypoints,
        legs=legs,
        total_distance_km=sum(leg.distance_km for leg in legs),
        total_duration_min=sum(leg.duration_min for leg in legs),
    )
    logger.debug(
        f"Sequenced {len(order)} pickups: {plan.total_distance_km:.2f} km, {plan.total_duration_min:.1f} min"
    )
    return plan
