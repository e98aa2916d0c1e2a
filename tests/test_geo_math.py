import math

import pytest

from routing.geo_math import EARTH_RADIUS_KM, distance_km, haversine_km
from routing.models import Coordinate, InvalidCoordinate


@pytest.fixture
def delhi_pairs():
    return [
        (Coordinate(28.60, 77.20), Coordinate(28.70, 77.30)),
        (Coordinate(28.61, 77.21), Coordinate(28.69, 77.29)),
        (Coordinate(-17.824858, 31.053028), Coordinate(52.517037, 13.388860)),
        (Coordinate(0.0, 179.9), Coordinate(0.0, -179.9)),
    ]


def test_distance_is_zero_for_identical_points():
    point = Coordinate(28.6139, 77.2090)
    assert distance_km(point, point) == 0.0
    assert haversine_km(28.6139, 77.2090, 28.6139, 77.2090) == 0.0


def test_distance_is_symmetric(delhi_pairs):
    for a, b in delhi_pairs:
        assert distance_km(a, b) == pytest.approx(distance_km(b, a), abs=1e-12)


def test_known_distance_in_delhi():
    # 0.1 deg north and 0.1 deg east of central Delhi is roughly 14.8 km
    d = distance_km(Coordinate(28.60, 77.20), Coordinate(28.70, 77.30))
    assert d == pytest.approx(14.79, abs=0.05)


def test_distance_along_meridian_matches_arc_length():
    d = distance_km(Coordinate(10.0, 20.0), Coordinate(11.0, 20.0))
    assert d == pytest.approx(EARTH_RADIUS_KM * math.radians(1.0), rel=1e-9)


def test_antipodal_points_do_not_produce_nan():
    d = distance_km(Coordinate(0.0, 0.0), Coordinate(0.0, 180.0))
    assert not math.isnan(d)
    assert d == pytest.approx(math.pi * EARTH_RADIUS_KM, rel=1e-9)

    pole_to_pole = distance_km(Coordinate(90.0, 0.0), Coordinate(-90.0, 0.0))
    assert pole_to_pole == pytest.approx(math.pi * EARTH_RADIUS_KM, rel=1e-9)


def test_tiny_separation_is_small_and_positive():
    d = distance_km(Coordinate(10.0, 10.0), Coordinate(10.0, 10.0000001))
    assert 0.0 < d < 1e-4


@pytest.mark.parametrize(
    "lat,lng",
    [(90.0001, 0.0), (-91.0, 0.0), (0.0, 180.5), (0.0, -181.0), (float("nan"), 0.0), (0.0, float("inf"))],
)
def test_invalid_coordinates_fail_at_construction(lat, lng):
    with pytest.raises(InvalidCoordinate):
        Coordinate(lat, lng)


def test_invalid_coordinate_is_a_value_error():
    with pytest.raises(ValueError):
        Coordinate.from_tuple((100.0, 0.0))
