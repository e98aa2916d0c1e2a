from datetime import datetime, timedelta, timezone

import pandas as pd
import pytest

from rides.dataset import RIDE_COLUMNS, generate_mock_rides, load_ride_offers, write_match_results
from rides.matching import match_with_fallback
from rides.models import RideOffer, RideStatus, TripRequest
from routing.models import Coordinate

NOW = datetime(2026, 6, 1, 7, 30, tzinfo=timezone.utc)


@pytest.fixture
def rides_csv(tmp_path):
    path = tmp_path / "rides.csv"
    generate_mock_rides(num_rides=60, output_file=str(path), now=NOW, seed=42)
    return path


def test_generated_csv_has_expected_shape(rides_csv):
    df = pd.read_csv(rides_csv)

    assert list(df.columns) == RIDE_COLUMNS
    assert len(df) == 60
    assert df["ride_id"].is_unique
    assert set(df["status"]).issubset({s.value for s in RideStatus})


def test_same_seed_generates_same_rides(tmp_path):
    a = generate_mock_rides(num_rides=10, output_file=None, now=NOW, seed=3)
    b = generate_mock_rides(num_rides=10, output_file=None, now=NOW, seed=3)

    pd.testing.assert_frame_equal(a, b)
    assert a["driver_id"].str.match(r"^d_[0-9a-f]{8}$").all()


def test_load_ride_offers_builds_valid_offers(rides_csv):
    rides = load_ride_offers(str(rides_csv))

    assert len(rides) == 60
    for ride in rides:
        assert isinstance(ride, RideOffer)
        assert ride.departure_time.tzinfo is not None
        assert NOW <= ride.departure_time <= NOW + timedelta(hours=12)
        assert ride.seats_remaining >= 0

    assert len(load_ride_offers(str(rides_csv), limit=5)) == 5


def test_missing_columns_are_reported(tmp_path):
    path = tmp_path / "broken.csv"
    pd.DataFrame({"ride_id": ["r1"]}).to_csv(path, index=False)

    with pytest.raises(ValueError, match="missing columns"):
        load_ride_offers(str(path))


def test_write_match_results_ranks_rows(rides_csv, tmp_path):
    rides = load_ride_offers(str(rides_csv))
    request = TripRequest(
        origin=Coordinate(28.6139, 77.2090),
        destination=Coordinate(28.7039, 77.2990),
        departure_time=NOW + timedelta(hours=1),
    )
    matches = match_with_fallback(request, rides)
    out = tmp_path / "results.csv"

    df = write_match_results(matches, str(out))
    reread = pd.read_csv(out)

    assert len(reread) == len(matches) == len(df)
    assert list(reread["rank"]) == list(range(1, len(matches) + 1))
    assert list(reread["ride_id"]) == [m.ride_id for m in matches]
    assert set(reread["quality"]).issubset({"excellent", "good", "fair", "possible"})
