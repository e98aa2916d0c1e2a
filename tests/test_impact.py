import pytest

from rides.impact import co2_savings_kg, estimate_impact, fuel_savings_liters


def test_savings_scale_with_distance_and_passengers():
    assert co2_savings_kg(10.0, 2) == pytest.approx(4.2)
    assert fuel_savings_liters(50.0, 3) == pytest.approx(12.0)


def test_no_passengers_saves_nothing():
    impact = estimate_impact(25.0, 0)
    assert impact.co2_saved_kg == 0.0
    assert impact.fuel_saved_liters == 0.0


def test_negative_inputs_are_rejected():
    with pytest.raises(ValueError):
        estimate_impact(-1.0, 1)
    with pytest.raises(ValueError):
        estimate_impact(1.0, -1)


def test_rides_package_exports_resolve():
    import rides

    assert len(rides.__all__) == len(set(rides.__all__))
    for name in rides.__all__:
        assert hasattr(rides, name), name
