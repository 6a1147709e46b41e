"""Tests for the HTTP API handlers.

Requests are built with Flask's test request context; the aggregator is mocked.
"""

import json
from datetime import datetime, timezone
from unittest.mock import AsyncMock, Mock

import pytest
from flask import Flask, request

from disaster_alerts.aggregator import AggregationResult, AlertAggregator
from disaster_alerts.api_handler import alert_to_dict, get_alerts, get_regional_alerts
from disaster_alerts.core.alert import Alert, Location, Severity
from disaster_alerts.core.config import Config
from disaster_alerts.shell.feed_client import FeedResult


NOW = datetime(2024, 7, 15, 6, 0, 0, tzinfo=timezone.utc)

app = Flask(__name__)


def make_alert(alert_id, title, severity=Severity.HIGH, distance=0.0, address=None):
    return Alert(
        id=alert_id,
        title=title,
        description=title,
        category="Flood",
        severity=severity,
        location=Location(latitude=9.43, longitude=76.33, address=address),
        start_time=NOW,
        source="NASA EONET",
        distance=distance,
    )


def make_aggregator(alerts=None, config=None):
    aggregator = Mock(spec=AlertAggregator)
    aggregator.config = config or Config()
    aggregator.fetch_alerts = AsyncMock(return_value=AggregationResult(
        alerts=alerts if alerts is not None else [],
        sources={
            "NASA EONET": FeedResult(source="NASA EONET", success=True, status_code=200),
            "USGS": FeedResult.failure("USGS", "USGS API error: 503", 503),
        },
        fetched_at=NOW,
    ))
    return aggregator


def call(handler, query="", method="GET", aggregator=None):
    with app.test_request_context(f"/{query}", method=method):
        return handler(request, aggregator)


class TestAlertToDict:
    """Tests for alert_to_dict()."""

    def test_shape(self):
        data = alert_to_dict(make_alert("EONET_1", "Flooding", distance=56.0))

        assert data["id"] == "EONET_1"
        assert data["severity"] == "high"
        assert data["location"] == {"latitude": 9.43, "longitude": 76.33, "address": None}
        assert data["start_time"] == "2024-07-15T06:00:00+00:00"
        assert data["end_time"] is None
        assert data["affected_areas"] == []
        assert data["display"] == {
            "color": "#FF5722",
            "icon": "🌊",
            "distance": "56km away",
        }


class TestGetAlerts:
    """Tests for get_alerts()."""

    def test_returns_ranked_alerts(self):
        aggregator = make_aggregator([make_alert("EONET_1", "Flooding", distance=56.0)])

        response = call(get_alerts, "?lat=9.93&lon=76.26&radius=250", aggregator=aggregator)

        assert response.status_code == 200
        assert response.headers["Access-Control-Allow-Origin"] == "*"
        body = json.loads(response.get_data(as_text=True))
        assert body["count"] == 1
        assert body["alerts"][0]["id"] == "EONET_1"
        assert body["observer"] == {"latitude": 9.93, "longitude": 76.26}
        assert body["radius_km"] == 250.0
        assert body["fetched_at"] == "2024-07-15T06:00:00+00:00"
        assert body["sources"]["USGS"] == {
            "success": False, "status_code": 503, "error": "USGS API error: 503",
        }
        aggregator.fetch_alerts.assert_awaited_once_with(9.93, 76.26, 250.0)

    def test_defaults_without_params(self):
        aggregator = make_aggregator()

        response = call(get_alerts, aggregator=aggregator)

        body = json.loads(response.get_data(as_text=True))
        assert body["observer"] is None
        assert body["radius_km"] == 500.0
        aggregator.fetch_alerts.assert_awaited_once_with(None, None, 500.0)

    @pytest.mark.parametrize("query", [
        "?lat=9.93",
        "?lon=76.26",
        "?lat=abc&lon=76",
        "?lat=95&lon=76",
        "?lat=9&lon=190",
        "?radius=0",
        "?radius=-5",
        "?radius=50000",
    ])
    def test_bad_params(self, query):
        aggregator = make_aggregator()

        response = call(get_alerts, query, aggregator=aggregator)

        assert response.status_code == 400
        assert "error" in json.loads(response.get_data(as_text=True))
        aggregator.fetch_alerts.assert_not_called()

    def test_preflight(self):
        response = call(get_alerts, method="OPTIONS", aggregator=make_aggregator())

        assert response.status_code == 204
        assert response.headers["Access-Control-Allow-Methods"] == "GET, OPTIONS"


class TestGetRegionalAlerts:
    """Tests for get_regional_alerts()."""

    def test_filters_to_region(self):
        alerts = [
            make_alert("near", "Flooding", distance=56.0),
            make_alert("named", "Storm warning for Kerala", distance=280.0),
            make_alert("other", "Wildfire in Wayanad", distance=230.0),
        ]
        aggregator = make_aggregator(alerts)

        response = call(
            get_regional_alerts,
            "?state=Kerala&city=Kochi&lat=9.93&lon=76.26",
            aggregator=aggregator,
        )

        assert response.status_code == 200
        body = json.loads(response.get_data(as_text=True))
        assert [a["id"] for a in body["alerts"]] == ["near", "named"]
        assert body["region"] == {"state": "Kerala", "city": "Kochi"}
        assert body["radius_km"] == 300.0
        aggregator.fetch_alerts.assert_awaited_once_with(9.93, 76.26, 300.0)

    @pytest.mark.parametrize("query", ["", "?state=Kerala", "?city=Kochi", "?state=&city=Kochi"])
    def test_requires_state_and_city(self, query):
        aggregator = make_aggregator()

        response = call(get_regional_alerts, query, aggregator=aggregator)

        assert response.status_code == 400
        aggregator.fetch_alerts.assert_not_called()

    def test_preflight(self):
        response = call(get_regional_alerts, method="OPTIONS", aggregator=make_aggregator())
        assert response.status_code == 204
