"""Unit tests for display formatting.

Pure function tests - no mocks needed.
"""

from datetime import datetime, timedelta, timezone

import pytest

from disaster_alerts.core.alert import Alert, Location, Severity
from disaster_alerts.core.formatter import (
    format_alert_summary,
    format_distance,
    format_time_ago,
    get_category_icon,
    get_severity_color,
)


NOW = datetime(2024, 7, 15, 12, 0, 0, tzinfo=timezone.utc)


class TestGetSeverityColor:
    """Tests for get_severity_color()."""

    @pytest.mark.parametrize("severity,color", [
        (Severity.LOW, "#4CAF50"),
        (Severity.MEDIUM, "#FF9800"),
        (Severity.HIGH, "#FF5722"),
        (Severity.CRITICAL, "#D32F2F"),
    ])
    def test_colors(self, severity, color):
        assert get_severity_color(severity) == color

    def test_accepts_plain_string(self):
        assert get_severity_color("critical") == "#D32F2F"


class TestGetCategoryIcon:
    """Tests for get_category_icon()."""

    def test_known_categories(self):
        assert get_category_icon("Earthquake") == "🌍"
        assert get_category_icon("Fire") == "🔥"
        assert get_category_icon("Volcano") == "🌋"

    def test_unknown_category_gets_warning_sign(self):
        assert get_category_icon("Manmade") == "⚠️"


class TestFormatDistance:
    """Tests for format_distance()."""

    @pytest.mark.parametrize("km,expected", [
        (0.5, "500m away"),
        (0.042, "42m away"),
        (0.0, "0m away"),
        (1.0, "1.0km away"),
        (3.2, "3.2km away"),
        (5.3, "5.3km away"),
        (9.94, "9.9km away"),
        (10.0, "10km away"),
        (42, "42km away"),
        (120.4, "120km away"),
        (120.5, "121km away"),
    ])
    def test_formats(self, km, expected):
        assert format_distance(km) == expected


class TestFormatTimeAgo:
    """Tests for format_time_ago()."""

    def test_minutes(self):
        assert format_time_ago(NOW - timedelta(minutes=5), NOW) == "5 minutes ago"

    def test_singular_minute(self):
        assert format_time_ago(NOW - timedelta(minutes=1), NOW) == "1 minute ago"

    def test_zero_minutes(self):
        assert format_time_ago(NOW - timedelta(seconds=30), NOW) == "0 minutes ago"

    def test_hour_boundary(self):
        assert format_time_ago(NOW - timedelta(minutes=59), NOW) == "59 minutes ago"
        assert format_time_ago(NOW - timedelta(minutes=60), NOW) == "1 hour ago"

    def test_day_boundary(self):
        assert format_time_ago(NOW - timedelta(hours=23), NOW) == "23 hours ago"
        assert format_time_ago(NOW - timedelta(hours=24), NOW) == "1 day ago"

    def test_week_boundary_falls_back_to_date(self):
        assert format_time_ago(NOW - timedelta(days=6), NOW) == "6 days ago"
        week_ago = NOW - timedelta(days=7)
        assert format_time_ago(week_ago, NOW) == week_ago.strftime("%x")

    def test_future_time_counts_as_now(self):
        assert format_time_ago(NOW + timedelta(minutes=10), NOW) == "0 minutes ago"

    def test_naive_datetime_treated_as_utc(self):
        naive = datetime(2024, 7, 15, 10, 0, 0)
        assert format_time_ago(naive, NOW) == "2 hours ago"


class TestFormatAlertSummary:
    """Tests for format_alert_summary()."""

    def _alert(self, distance):
        return Alert(
            id="us1",
            title="M 6.1 - 30 km S of Shillong",
            description="",
            category="Earthquake",
            severity=Severity.HIGH,
            location=Location(25.3, 91.9),
            start_time=NOW,
            source="USGS",
            distance=distance,
        )

    def test_includes_distance_when_known(self):
        assert format_alert_summary(self._alert(42.0)) == (
            "🌍 [HIGH] M 6.1 - 30 km S of Shillong (USGS) - 42km away"
        )

    def test_omits_distance_when_unknown(self):
        assert format_alert_summary(self._alert(0.0)) == (
            "🌍 [HIGH] M 6.1 - 30 km S of Shillong (USGS)"
        )
