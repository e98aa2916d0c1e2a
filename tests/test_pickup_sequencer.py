import logging

import pytest

from routing.geo_math import EARTH_RADIUS_KM
from routing.models import Coordinate, PassengerPickup
from routing.pickup_sequencer import sequence_pickups
from routing.policy import SequencingPolicy, sequencing_policy_from_env

KM_PER_DEGREE = EARTH_RADIUS_KM * 3.141592653589793 / 180.0


@pytest.fixture
def equator_passengers():
    # All pickups on the equator east of the driver, listed out of order
    return [
        PassengerPickup("far", Coordinate(0.0, 0.3)),
        PassengerPickup("near", Coordinate(0.0, 0.1)),
        PassengerPickup("mid", Coordinate(0.0, 0.2)),
    ]


def test_visits_nearest_pickup_first(equator_passengers):
    plan = sequence_pickups(Coordinate(0.0, 0.0), equator_passengers, Coordinate(0.0, 0.4))

    assert plan.passenger_ids == ["near", "mid", "far"]

    # waypoints are start, pickups in order, destination
    assert plan.waypoints[0] == Coordinate(0.0, 0.0)
    assert plan.waypoints[-1] == Coordinate(0.0, 0.4)
    assert [w.lng for w in plan.waypoints[1:-1]] == [0.1, 0.2, 0.3]


def test_totals_add_up_over_legs(equator_passengers):
    plan = sequence_pickups(Coordinate(0.0, 0.0), equator_passengers, Coordinate(0.0, 0.4))

    # 3 pickup legs + final leg to destination
    assert len(plan.legs) == 4
    assert plan.legs[-1].passenger_id is None

    assert plan.total_distance_km == pytest.approx(0.4 * KM_PER_DEGREE, rel=1e-6)
    assert plan.total_distance_km == pytest.approx(sum(leg.distance_km for leg in plan.legs))

    # 30 km/h default
    assert plan.total_duration_min == pytest.approx(plan.total_distance_km / 30.0 * 60.0)


def test_ties_go_to_first_listed_passenger():
    passengers = [
        PassengerPickup("north", Coordinate(0.1, 0.0)),
        PassengerPickup("south", Coordinate(-0.1, 0.0)),
    ]
    plan = sequence_pickups(Coordinate(0.0, 0.0), passengers, Coordinate(0.0, 1.0))
    assert plan.passenger_ids == ["north", "south"]

    plan_reversed = sequence_pickups(Coordinate(0.0, 0.0), list(reversed(passengers)), Coordinate(0.0, 1.0))
    assert plan_reversed.passenger_ids == ["south", "north"]


def test_same_input_gives_same_plan(equator_passengers):
    first = sequence_pickups(Coordinate(0.0, 0.0), equator_passengers, Coordinate(0.0, 0.4))
    second = sequence_pickups(Coordinate(0.0, 0.0), equator_passengers, Coordinate(0.0, 0.4))
    assert first == second


def test_no_passengers_goes_straight_to_destination():
    plan = sequence_pickups(Coordinate(0.0, 0.0), [], Coordinate(0.0, 0.1))

    assert plan.passenger_ids == []
    assert plan.waypoints == [Coordinate(0.0, 0.0), Coordinate(0.0, 0.1)]
    assert len(plan.legs) == 1
    assert plan.total_distance_km == pytest.approx(0.1 * KM_PER_DEGREE, rel=1e-6)


def test_faster_policy_shortens_duration(equator_passengers):
    slow = sequence_pickups(Coordinate(0.0, 0.0), equator_passengers, Coordinate(0.0, 0.4))
    fast = sequence_pickups(
        Coordinate(0.0, 0.0),
        equator_passengers,
        Coordinate(0.0, 0.4),
        policy=SequencingPolicy(average_speed_kmh=60.0),
    )
    assert fast.total_distance_km == pytest.approx(slow.total_distance_km)
    assert fast.total_duration_min == pytest.approx(slow.total_duration_min / 2)


def test_duplicate_passenger_ids_are_rejected():
    passengers = [
        PassengerPickup("p1", Coordinate(0.0, 0.1)),
        PassengerPickup("p1", Coordinate(0.0, 0.2)),
    ]
    with pytest.raises(ValueError):
        sequence_pickups(Coordinate(0.0, 0.0), passengers, Coordinate(0.0, 0.3))


def test_warns_above_soft_passenger_cap(caplog):
    passengers = [PassengerPickup(f"p{i}", Coordinate(0.0, 0.01 * (i + 1))) for i in range(9)]

    with caplog.at_level(logging.WARNING, logger="routing.pickup_sequencer"):
        plan = sequence_pickups(Coordinate(0.0, 0.0), passengers, Coordinate(0.0, 0.5))

    assert len(plan.passenger_ids) == 9
    assert "soft cap" in caplog.text


def test_invalid_speed_policy_fails_validation():
    with pytest.raises(ValueError):
        SequencingPolicy(average_speed_kmh=0).validate()


def test_sequencing_policy_from_env(monkeypatch):
    monkeypatch.setenv("SEQUENCING_SPEED_KMH", "45")

    assert sequencing_policy_from_env().average_speed_kmh == 45.0
