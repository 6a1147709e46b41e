"""Provider record normalization - Pure functions.

Maps NASA EONET events and USGS GeoJSON features into the common Alert
shape, including each provider's severity classification.

Both mappers are total: missing or malformed fields fall back to safe
defaults (empty string, the fetch timestamp, coordinate 0,0) so one bad
record never aborts a batch.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Any

from disaster_alerts.core.alert import (
    SOURCE_EONET,
    SOURCE_USGS,
    Alert,
    Category,
    Location,
    Severity,
)
from disaster_alerts.core.geo import Observer, calculate_distance, round_km


logger = logging.getLogger(__name__)


EONET_CATEGORY_MAP: dict[str, str] = {
    "Wildfires": Category.FIRE,
    "Severe Storms": Category.STORM,
    "Floods": Category.FLOOD,
    "Drought": Category.DROUGHT,
    "Earthquakes": Category.EARTHQUAKE,
    "Volcanoes": Category.VOLCANO,
    "Landslides": Category.LANDSLIDE,
    "Sea and Lake Ice": Category.ICE,
    "Snow": Category.SNOW,
    "Dust and Haze": Category.DUST_STORM,
}

EONET_SEVERITY_MAP: dict[str, Severity] = {
    "Earthquakes": Severity.CRITICAL,
    "Volcanoes": Severity.CRITICAL,
    "Severe Storms": Severity.HIGH,
    "Floods": Severity.HIGH,
    "Wildfires": Severity.MEDIUM,
    "Landslides": Severity.MEDIUM,
}

# Inclusive lower bounds, checked highest first
MAGNITUDE_THRESHOLDS: tuple[tuple[float, Severity], ...] = (
    (7.0, Severity.CRITICAL),
    (6.0, Severity.HIGH),
    (4.5, Severity.MEDIUM),
)


def map_eonet_category(category_title: str) -> str:
    """Map an EONET category title to the common vocabulary.

    Pure function. Unmapped titles pass through unchanged.
    """
    return EONET_CATEGORY_MAP.get(category_title, category_title)


def classify_eonet_severity(category_title: str) -> Severity:
    """Classify an EONET event by its category title.

    Pure function.
    """
    return EONET_SEVERITY_MAP.get(category_title, Severity.LOW)


def classify_magnitude(magnitude: float) -> Severity:
    """Classify an earthquake by magnitude.

    Pure function.

    Args:
        magnitude: Earthquake magnitude

    Returns:
        critical >= 7.0, high >= 6.0, medium >= 4.5, else low
    """
    for threshold, severity in MAGNITUDE_THRESHOLDS:
        if magnitude >= threshold:
            return severity
    return Severity.LOW


def namespaced_id(source_prefix: str, raw_id: str) -> str:
    """Prefix an id with its source, e.g. ``usgs:us7000abcd``."""
    return f"{source_prefix}:{raw_id}"


def _as_float(value: Any, default: float = 0.0) -> float:
    if isinstance(value, bool):
        return default
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(result) or math.isinf(result):
        return default
    return result


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _first_mapping(items: Any) -> dict[str, Any]:
    if isinstance(items, (list, tuple)) and items and isinstance(items[0], dict):
        return items[0]
    return {}


def _point(coordinates: Any) -> tuple[float, float]:
    """Extract (longitude, latitude) from a GeoJSON coordinate array.

    Polygons and other nested arrays are reduced to their first vertex.
    """
    while (
        isinstance(coordinates, (list, tuple))
        and coordinates
        and isinstance(coordinates[0], (list, tuple))
    ):
        coordinates = coordinates[0]

    if not isinstance(coordinates, (list, tuple)) or len(coordinates) < 2:
        return (0.0, 0.0)

    return (_as_float(coordinates[0]), _as_float(coordinates[1]))


def _parse_iso(value: Any, default: datetime | None) -> datetime | None:
    if not isinstance(value, str) or not value:
        return default
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return default
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_epoch_ms(value: Any, default: datetime) -> datetime:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    try:
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return default


def _format_number(value: float) -> str:
    """Render whole numbers without a trailing ``.0``."""
    if value.is_integer():
        return str(int(value))
    return str(value)


def parse_eonet_event(
    event: dict[str, Any],
    observer: Observer | None = None,
    fetched_at: datetime | None = None,
    namespace_ids: bool = False,
) -> Alert | None:
    """Parse a single EONET event into an Alert.

    Pure function.

    Args:
        event: Event dict from the EONET ``events`` array
        observer: When given, distance is computed immediately
        fetched_at: Fallback timestamp for events without a date
        namespace_ids: Prefix the id with ``eonet:``

    Returns:
        Alert, or None if the record is not a JSON object
    """
    if not isinstance(event, dict):
        return None

    fallback_time = fetched_at or datetime.now(timezone.utc)

    category_title = _as_text(_first_mapping(event.get("categories")).get("title")) or "Unknown"
    geometry = _first_mapping(event.get("geometry"))
    longitude, latitude = _point(geometry.get("coordinates"))

    title = _as_text(event.get("title"))
    raw_id = _as_text(event.get("id"))

    sources = event.get("sources")
    affected_areas: tuple[str, ...] = ()
    if isinstance(sources, list):
        affected_areas = tuple(
            _as_text(s.get("id")) for s in sources
            if isinstance(s, dict) and s.get("id") is not None
        )

    distance = 0.0
    if observer is not None:
        distance = round_km(calculate_distance(
            observer.latitude, observer.longitude, latitude, longitude,
        ))

    return Alert(
        id=namespaced_id("eonet", raw_id) if namespace_ids else raw_id,
        title=title,
        description=_as_text(event.get("description")) or title,
        category=map_eonet_category(category_title),
        severity=classify_eonet_severity(category_title),
        location=Location(latitude=latitude, longitude=longitude),
        start_time=_parse_iso(geometry.get("date"), fallback_time),
        end_time=_parse_iso(event.get("closed"), None),
        source=SOURCE_EONET,
        affected_areas=affected_areas,
        distance=distance,
    )


def parse_usgs_feature(
    feature: dict[str, Any],
    fetched_at: datetime | None = None,
    namespace_ids: bool = False,
) -> Alert | None:
    """Parse a single USGS GeoJSON feature into an Alert.

    Pure function. Distance is always left at 0 here; it is computed
    during ranking.

    Args:
        feature: GeoJSON feature dict from the USGS API
        fetched_at: Fallback timestamp for features without a time
        namespace_ids: Prefix the id with ``usgs:``

    Returns:
        Alert, or None if the record is not a JSON object
    """
    if not isinstance(feature, dict):
        return None

    fallback_time = fetched_at or datetime.now(timezone.utc)

    props = feature.get("properties")
    if not isinstance(props, dict):
        props = {}
    geometry = feature.get("geometry")
    if not isinstance(geometry, dict):
        geometry = {}
    coords = geometry.get("coordinates")
    if not isinstance(coords, (list, tuple)):
        coords = []

    longitude, latitude = _point(coords)
    depth = _as_float(coords[2]) if len(coords) >= 3 else 0.0

    raw_mag = props.get("mag")
    magnitude = _as_float(raw_mag)
    if raw_mag is None:
        mag_text = "unknown"
    else:
        mag_text = _format_number(magnitude)

    place = props.get("place")
    raw_id = _as_text(feature.get("id"))

    return Alert(
        id=namespaced_id("usgs", raw_id) if namespace_ids else raw_id,
        title=_as_text(props.get("title")),
        description=(
            f"Magnitude {mag_text} earthquake at depth "
            f"{int(math.floor(depth + 0.5))} km"
        ),
        category=Category.EARTHQUAKE,
        severity=classify_magnitude(magnitude),
        location=Location(
            latitude=latitude,
            longitude=longitude,
            address=_as_text(place) if place is not None else None,
        ),
        start_time=_parse_epoch_ms(props.get("time"), fallback_time),
        source=SOURCE_USGS,
        distance=0.0,
    )


def parse_eonet_events(
    payload: dict[str, Any],
    observer: Observer | None = None,
    fetched_at: datetime | None = None,
    namespace_ids: bool = False,
) -> list[Alert]:
    """Parse an EONET response into Alerts, in feed order.

    Pure function: non-object records are skipped.
    """
    events = payload.get("events") if isinstance(payload, dict) else None
    if not isinstance(events, list):
        return []

    alerts = []
    for event in events:
        alert = parse_eonet_event(event, observer, fetched_at, namespace_ids)
        if alert is None:
            logger.debug("Skipping malformed EONET event: %r", event)
            continue
        alerts.append(alert)
    return alerts


def parse_usgs_features(
    payload: dict[str, Any],
    fetched_at: datetime | None = None,
    namespace_ids: bool = False,
) -> list[Alert]:
    """Parse a USGS FeatureCollection into Alerts, in feed order.

    Pure function: non-object features are skipped.
    """
    features = payload.get("features") if isinstance(payload, dict) else None
    if not isinstance(features, list):
        return []

    alerts = []
    for feature in features:
        alert = parse_usgs_feature(feature, fetched_at, namespace_ids)
        if alert is None:
            logger.debug("Skipping malformed USGS feature: %r", feature)
            continue
        alerts.append(alert)
    return alerts
