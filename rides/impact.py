"""
Environmental savings of shared rides. Every passenger who rides along is
counted as one car kept off the road for the shared distance.
"""

from __future__ import annotations

from dataclasses import dataclass

CO2_KG_PER_CAR_KM = 0.21
FUEL_LITERS_PER_100_KM = 8.0


@dataclass(frozen=True)
class ImpactEstimate:
    distance_km: float
    passengers: int
    co2_saved_kg: float
    fuel_saved_liters: float


def co2_savings_kg(distance_km: float, passengers: int) -> float:
    return distance_km * CO2_KG_PER_CAR_KM * passengers


def fuel_savings_liters(distance_km: float, passengers: int) -> float:
    return (distance_km / 100.0) * FUEL_LITERS_PER_100_KM * passengers


def estimate_impact(distance_km: float, passengers: int) -> ImpactEstimate:
    if distance_km < 0:
        raise ValueError("distance_km must be >= 0")
    if passengers < 0:
        raise ValueError("passengers must be >= 0")
    return ImpactEstimate(
        distance_km=distance_km,
        passengers=passengers,
        co2_saved_kg=co2_savings_kg(distance_km, passengers),
        fuel_saved_liters=fuel_savings_liters(distance_km, passengers),
    )
