"""Functional Core - Pure functions with no side effects.

This module contains all business logic as pure functions:
- Alert data model
- Provider record normalization and severity classification
- Geo/distance calculations
- Ranking and radius filtering
- Regional relevance filtering
- Display formatting
- Provider circuit state

All functions here are deterministic and have no I/O.
"""

from disaster_alerts.core.alert import Alert, Category, Location, Severity
from disaster_alerts.core.geo import (
    BoundingBox,
    Observer,
    calculate_distance,
    is_alert_nearby,
)
from disaster_alerts.core.normalizer import (
    classify_magnitude,
    parse_eonet_events,
    parse_usgs_features,
)
from disaster_alerts.core.ranking import filter_by_radius, rank_alerts, sort_alerts
from disaster_alerts.core.regional import filter_regional
from disaster_alerts.core.formatter import (
    format_distance,
    format_time_ago,
    get_category_icon,
    get_severity_color,
)
from disaster_alerts.core.circuit import CircuitConfig, CircuitState

__all__ = [
    # Alert
    "Alert",
    "Category",
    "Location",
    "Severity",
    # Geo
    "BoundingBox",
    "Observer",
    "calculate_distance",
    "is_alert_nearby",
    # Normalizer
    "classify_magnitude",
    "parse_eonet_events",
    "parse_usgs_features",
    # Ranking
    "filter_by_radius",
    "rank_alerts",
    "sort_alerts",
    # Regional
    "filter_regional",
    # Formatter
    "format_distance",
    "format_time_ago",
    "get_category_icon",
    "get_severity_color",
    # Circuit
    "CircuitConfig",
    "CircuitState",
]
