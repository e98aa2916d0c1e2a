"""
Purpose: CSV plumbing for simulations and demos.
What it does:
- generate_mock_rides: realistic ride offers around a city centre (numpy RNG)
- load_ride_offers: CSV -> List[RideOffer]
- write_match_results: List[MatchResult] -> CSV

Rule: I/O lives here and in scripts/, never in matching or rewards.
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from routing.models import Coordinate

from .models import MatchResult, RideOffer, RideStatus

logger = logging.getLogger(__name__)

# Centre of New Delhi
CENTER_LAT = 28.6139
CENTER_LNG = 77.2090

RIDE_COLUMNS = [
    "ride_id",
    "driver_id",
    "origin",
    "origin_lat",
    "origin_lng",
    "destination",
    "dest_lat",
    "dest_lng",
    "departure_time",
    "available_seats",
    "status",
    "price_per_seat",
]


def generate_mock_rides(
    num_rides: int = 200,
    output_file: Optional[str] = "mock_rides.csv",
    *,
    center: Optional[Coordinate] = None,
    now: Optional[datetime] = None,
    seed: Optional[int] = None,
) -> pd.DataFrame:
    """
    Generates ride offers scattered around `center` departing within the next
    12 hours. Most rides are pending with seats; a few are full, active or
    cancelled so the bookable filter has something to do.
    """
    rng = np.random.default_rng(seed)
    center = center or Coordinate(CENTER_LAT, CENTER_LNG)
    now = now or datetime.now(timezone.utc)

    data = []
    for ride_index in range(num_rides):
        # Origins within ~5km of the centre, destinations 5-15km further out
        origin_lat = center.lat + rng.uniform(-0.05, 0.05)
        origin_lng = center.lng + rng.uniform(-0.05, 0.05)
        dest_lat = origin_lat + rng.choice([-1, 1]) * rng.uniform(0.05, 0.12)
        dest_lng = origin_lng + rng.choice([-1, 1]) * rng.uniform(0.05, 0.12)

        data.append({
            "ride_id": f"r_{str(ride_index + 1).zfill(5)}",
            "driver_id": f"d_{int(rng.integers(0, 16**8)):08x}",
            "origin": f"Pickup point {ride_index + 1}",
            "origin_lat": np.round(origin_lat, 6),
            "origin_lng": np.round(origin_lng, 6),
            "destination": f"Drop point {ride_index + 1}",
            "dest_lat": np.round(dest_lat, 6),
            "dest_lng": np.round(dest_lng, 6),
            "departure_time": (now + timedelta(minutes=int(rng.integers(0, 720)))).isoformat(),
            "available_seats": int(rng.choice([0, 1, 2, 3, 4], p=[0.1, 0.3, 0.3, 0.2, 0.1])),
            "status": str(rng.choice(
                [s.value for s in RideStatus], p=[0.85, 0.05, 0.05, 0.05]
            )),
            "price_per_seat": np.round(rng.uniform(50.0, 400.0), 2),
        })

    df = pd.DataFrame(data, columns=RIDE_COLUMNS)
    if output_file:
        df.to_csv(output_file, index=False)
        logger.info(f"Generated {num_rides} rides into '{output_file}'")
    return df


def rides_from_frame(df: pd.DataFrame) -> List[RideOffer]:
    missing = [column for column in RIDE_COLUMNS if column not in df.columns]
    if missing:
        raise ValueError(f"rides CSV is missing columns: {', '.join(missing)}")

    rides: List[RideOffer] = []
    for _, row in df.iterrows():
        departure = pd.Timestamp(row["departure_time"])
        if departure.tzinfo is None:
            departure = departure.tz_localize("UTC")
        rides.append(
            RideOffer(
                id=str(row["ride_id"]),
                driver_id=str(row["driver_id"]),
                origin=Coordinate(float(row["origin_lat"]), float(row["origin_lng"])),
                destination=Coordinate(float(row["dest_lat"]), float(row["dest_lng"])),
                departure_time=departure.to_pydatetime(),
                seats_remaining=int(row["available_seats"]),
                price_per_seat=float(row["price_per_seat"]),
                status=RideStatus(str(row["status"])),
                origin_label=str(row["origin"]),
                destination_label=str(row["destination"]),
            )
        )
    return rides


def load_ride_offers(path: str, limit: Optional[int] = None) -> List[RideOffer]:
    df = pd.read_csv(path)
    if limit is not None:
        df = df.head(limit)
    rides = rides_from_frame(df)
    logger.info(f"Loaded {len(rides)} rides from '{path}'")
    return rides


def write_match_results(matches: Sequence[MatchResult], path: str) -> pd.DataFrame:
    rows = []
    for rank, match in enumerate(matches, 1):
        row = asdict(match)
        row["quality"] = match.quality.value
        row["rank"] = rank
        rows.append(row)

    columns = ["rank"] + [name for name in MatchResult.__dataclass_fields__]
    df = pd.DataFrame(rows, columns=columns)
    df.to_csv(path, index=False)
    return df
