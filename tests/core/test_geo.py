"""Unit tests for geographic calculations.

Pure function tests - no mocks needed, fast execution.
"""

from datetime import datetime, timezone

import pytest

from disaster_alerts.core.alert import Alert, Location, Severity
from disaster_alerts.core.geo import (
    BoundingBox,
    Observer,
    bounds_around,
    calculate_distance,
    distance_to_alert,
    is_alert_nearby,
    make_observer,
    round_km,
)


@pytest.fixture
def sample_alert():
    """Create a sample alert in Kochi for testing."""
    return Alert(
        id="test",
        title="Flood warning",
        description="Heavy rain",
        category="Flood",
        severity=Severity.HIGH,
        location=Location(latitude=9.9312, longitude=76.2673),
        start_time=datetime(2024, 7, 1, tzinfo=timezone.utc),
        source="NASA EONET",
    )


class TestCalculateDistance:
    """Tests for calculate_distance() Haversine implementation."""

    def test_same_point_returns_zero(self):
        """Distance from point to itself should be zero."""
        assert calculate_distance(9.9312, 76.2673, 9.9312, 76.2673) == 0.0

    def test_one_degree_of_longitude_at_equator(self):
        """(0,0) to (0,1) is about 111.19 km."""
        distance = calculate_distance(0.0, 0.0, 0.0, 1.0)
        assert distance == pytest.approx(111.19, abs=0.5)

    def test_one_degree_of_latitude(self):
        """(0,0) to (1,0) is the same arc length on a sphere."""
        distance = calculate_distance(0.0, 0.0, 1.0, 0.0)
        assert distance == pytest.approx(111.19, abs=0.5)

    def test_known_distance_delhi_to_mumbai(self):
        """Delhi to Mumbai should be approximately 1150 km."""
        distance = calculate_distance(28.6139, 77.2090, 19.0760, 72.8777)
        assert distance == pytest.approx(1150, rel=0.02)

    def test_symmetric(self):
        """Distance should be the same in both directions."""
        d1 = calculate_distance(28.6139, 77.2090, 19.0760, 72.8777)
        d2 = calculate_distance(19.0760, 72.8777, 28.6139, 77.2090)
        assert d1 == d2

    def test_antipodal_points(self):
        """Opposite sides of the globe are half the circumference apart."""
        distance = calculate_distance(0.0, 0.0, 0.0, 180.0)
        assert distance == pytest.approx(20015.09, abs=0.5)


class TestRoundKm:
    """Tests for round_km()."""

    def test_rounds_half_up(self):
        assert round_km(2.5) == 3.0
        assert round_km(3.5) == 4.0

    def test_rounds_down_below_half(self):
        assert round_km(100.01) == 100.0

    def test_returns_float(self):
        assert isinstance(round_km(42.4), float)


class TestMakeObserver:
    """Tests for make_observer()."""

    def test_both_coordinates(self):
        assert make_observer(9.9, 76.2) == Observer(latitude=9.9, longitude=76.2)

    def test_zero_coordinates_are_a_valid_observer(self):
        assert make_observer(0.0, 0.0) == Observer(latitude=0.0, longitude=0.0)

    def test_missing_coordinate_returns_none(self):
        assert make_observer(None, 76.2) is None
        assert make_observer(9.9, None) is None
        assert make_observer(None, None) is None


class TestBoundingBox:
    """Tests for BoundingBox dataclass."""

    def test_bbox_param_is_lon_lat_order(self):
        box = BoundingBox(
            min_latitude=7.0,
            max_latitude=37.0,
            min_longitude=68.0,
            max_longitude=97.0,
        )
        assert box.to_bbox_param() == "68.0,7.0,97.0,37.0"


class TestBoundsAround:
    """Tests for bounds_around()."""

    def test_five_degree_box(self):
        box = bounds_around(Observer(latitude=10.0, longitude=76.0))
        assert box == BoundingBox(
            min_latitude=5.0,
            max_latitude=15.0,
            min_longitude=71.0,
            max_longitude=81.0,
        )

    def test_custom_width(self):
        box = bounds_around(Observer(latitude=0.0, longitude=0.0), degrees=1.5)
        assert box.min_latitude == -1.5
        assert box.max_longitude == 1.5


class TestIsAlertNearby:
    """Tests for is_alert_nearby() predicate."""

    def test_alert_within_radius(self, sample_alert):
        # Ernakulam is a few km from Kochi
        assert is_alert_nearby(sample_alert, 9.98, 76.28, radius_km=100) is True

    def test_alert_outside_radius(self, sample_alert):
        # Delhi is far away
        assert is_alert_nearby(sample_alert, 28.61, 77.21, radius_km=100) is False

    def test_default_radius_is_100km(self, sample_alert):
        # Roughly 1 degree of latitude north of the alert (~111 km)
        assert is_alert_nearby(sample_alert, 10.9312, 76.2673) is False
        assert is_alert_nearby(sample_alert, 10.5, 76.2673) is True

    def test_same_point_is_nearby_with_zero_radius(self, sample_alert):
        assert is_alert_nearby(sample_alert, 9.9312, 76.2673, radius_km=0) is True


class TestDistanceToAlert:
    """Tests for distance_to_alert()."""

    def test_matches_calculate_distance(self, sample_alert):
        observer = Observer(latitude=28.61, longitude=77.21)
        assert distance_to_alert(observer, sample_alert) == calculate_distance(
            28.61, 77.21, 9.9312, 76.2673,
        )
