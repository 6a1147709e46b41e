"""Unit tests for the Alert data model."""

import dataclasses
from datetime import datetime, timezone

import pytest

from disaster_alerts.core.alert import Alert, Location, Severity


def make_alert(**overrides):
    fields = dict(
        id="EONET_1",
        title="Wildfire",
        description="Wildfire",
        category="Fire",
        severity=Severity.MEDIUM,
        location=Location(latitude=12.0, longitude=77.0),
        start_time=datetime(2024, 3, 1, tzinfo=timezone.utc),
        source="NASA EONET",
    )
    fields.update(overrides)
    return Alert(**fields)


class TestSeverity:
    """Tests for the Severity enum."""

    def test_total_order(self):
        assert Severity.LOW < Severity.MEDIUM < Severity.HIGH < Severity.CRITICAL

    def test_max_is_critical(self):
        assert max([Severity.LOW, Severity.CRITICAL, Severity.HIGH]) is Severity.CRITICAL

    def test_rank_puts_critical_first(self):
        assert Severity.CRITICAL.rank == 0
        assert Severity.HIGH.rank == 1
        assert Severity.MEDIUM.rank == 2
        assert Severity.LOW.rank == 3

    def test_value_round_trips_from_string(self):
        assert Severity("high") is Severity.HIGH

    def test_compares_equal_to_its_string(self):
        assert Severity.CRITICAL == "critical"


class TestAlert:
    """Tests for the Alert dataclass."""

    def test_defaults(self):
        alert = make_alert()
        assert alert.distance == 0.0
        assert alert.end_time is None
        assert alert.affected_areas == ()
        assert alert.location.address is None

    def test_is_frozen(self):
        alert = make_alert()
        with pytest.raises(dataclasses.FrozenInstanceError):
            alert.distance = 12.0

    def test_with_distance_returns_new_alert(self):
        alert = make_alert()
        moved = alert.with_distance(42.0)

        assert moved.distance == 42.0
        assert alert.distance == 0.0
        assert moved.id == alert.id

    def test_coordinates(self):
        assert make_alert().coordinates == (12.0, 77.0)
