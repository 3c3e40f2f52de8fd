"""Distance and proximity helper tests."""
import pytest

from accessx.services.location_service import LocationService


def test_distance_between_known_points():
    # Bangalore to Chennai, roughly 290 km
    distance = LocationService.calculate_distance(12.9716, 77.5946, 13.0827, 80.2707)
    assert distance == pytest.approx(290000, rel=0.02)


def test_same_point_is_zero():
    assert LocationService.calculate_distance(10.0, 20.0, 10.0, 20.0) == pytest.approx(0.0)


def test_is_within_proximity():
    near = LocationService.is_within_proximity(12.9716, 77.5946, 12.9720, 77.5950)
    assert near['is_valid'] is True
    assert near['distance'] < 100

    far = LocationService.is_within_proximity(12.9716, 77.5946, 12.9816, 77.5946, max_distance_meters=500)
    assert far['is_valid'] is False
    assert far['distance'] == pytest.approx(1112, abs=5)


@pytest.mark.parametrize('meters,text', [(50, '50m'), (999.4, '999m'), (1200, '1.2km'), (15340, '15.3km')])
def test_format_distance(meters, text):
    assert LocationService.format_distance(meters) == text
