"""Web API Handler - Serves ranked disaster alerts.

This module provides HTTP endpoints for the mobile client.
Part of the imperative shell - handles HTTP I/O.
"""

import asyncio
import json
import logging
from datetime import datetime
from typing import Any

from flask import Request, Response

from disaster_alerts.aggregator import AggregationResult, AlertAggregator
from disaster_alerts.core.alert import Alert
from disaster_alerts.core.config import Config
from disaster_alerts.core.formatter import (
    format_distance,
    get_category_icon,
    get_severity_color,
)
from disaster_alerts.core.regional import filter_regional

logger = logging.getLogger(__name__)

# Upper bound on the radius a caller may request (km)
MAX_RADIUS_KM = 20000.0


class BadRequest(ValueError):
    """Raised for query parameters that cannot be used."""


def _cors_headers() -> dict[str, str]:
    """Generate CORS headers for the response.

    The feeds are public, so any origin may read them.
    """
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": "GET, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type",
        "Access-Control-Max-Age": "3600",
    }


def json_response(data: dict[str, Any], status: int = 200) -> Response:
    """Create a JSON response with CORS headers."""
    response = Response(
        json.dumps(data, default=str, ensure_ascii=False),
        status=status,
        mimetype="application/json",
    )
    for key, value in _cors_headers().items():
        response.headers[key] = value
    return response


def _preflight_response() -> Response:
    response = Response("", status=204)
    for key, value in _cors_headers().items():
        response.headers[key] = value
    return response


def _float_arg(request: Request, name: str, default: float | None = None) -> float | None:
    """Read an optional float query parameter."""
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise BadRequest(f"Parameter '{name}' must be a number, got '{raw}'") from e


def _observer_args(request: Request) -> tuple[float | None, float | None]:
    """Read lat/lon, which must be given together and be in range."""
    latitude = _float_arg(request, "lat")
    longitude = _float_arg(request, "lon")

    if (latitude is None) != (longitude is None):
        raise BadRequest("Parameters 'lat' and 'lon' must be given together")
    if latitude is not None and not -90 <= latitude <= 90:
        raise BadRequest(f"Latitude {latitude} out of range [-90, 90]")
    if longitude is not None and not -180 <= longitude <= 180:
        raise BadRequest(f"Longitude {longitude} out of range [-180, 180]")

    return latitude, longitude


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def alert_to_dict(alert: Alert) -> dict[str, Any]:
    """Convert Alert dataclass to a JSON-serializable dict."""
    return {
        "id": alert.id,
        "title": alert.title,
        "description": alert.description,
        "category": alert.category,
        "severity": alert.severity.value,
        "location": {
            "latitude": alert.location.latitude,
            "longitude": alert.location.longitude,
            "address": alert.location.address,
        },
        "start_time": alert.start_time.isoformat(),
        "end_time": _isoformat(alert.end_time),
        "source": alert.source,
        "affected_areas": list(alert.affected_areas),
        "distance": alert.distance,
        "display": {
            "color": get_severity_color(alert.severity),
            "icon": get_category_icon(alert.category),
            "distance": format_distance(alert.distance),
        },
    }


def _sources_to_dict(result: AggregationResult) -> dict[str, Any]:
    return {
        name: {
            "success": r.success,
            "status_code": r.status_code,
            "error": r.error,
        }
        for name, r in result.sources.items()
    }


def get_alerts(
    request: Request,
    aggregator: AlertAggregator | None = None,
) -> Response:
    """API endpoint: Get ranked alerts near a point.

    Query params:
        lat, lon: Observer position (optional, both or neither)
        radius: Radius in km (default from config)

    Returns:
        JSON with ranked alerts and per-source status
    """
    if request.method == "OPTIONS":
        return _preflight_response()

    aggregator = aggregator or AlertAggregator()

    try:
        latitude, longitude = _observer_args(request)
        radius_km = _float_arg(request, "radius", aggregator.config.default_radius_km)
        if not 0 < radius_km <= MAX_RADIUS_KM:
            raise BadRequest(f"Radius {radius_km} out of range (0, {MAX_RADIUS_KM:.0f}]")
    except BadRequest as e:
        return json_response({"error": str(e)}, status=400)

    result = asyncio.run(aggregator.fetch_alerts(latitude, longitude, radius_km))

    return json_response({
        "alerts": [alert_to_dict(a) for a in result.alerts],
        "count": len(result.alerts),
        "observer": (
            {"latitude": latitude, "longitude": longitude}
            if latitude is not None else None
        ),
        "radius_km": radius_km,
        "sources": _sources_to_dict(result),
        "fetched_at": _isoformat(result.fetched_at),
    })


def get_regional_alerts(
    request: Request,
    aggregator: AlertAggregator | None = None,
) -> Response:
    """API endpoint: Get alerts relevant to a state and city.

    Query params:
        state: Region name (required)
        city: Locality name (required)
        lat, lon: Observer position (optional, both or neither)

    Returns:
        JSON with matching alerts and per-source status
    """
    if request.method == "OPTIONS":
        return _preflight_response()

    aggregator = aggregator or AlertAggregator()
    config: Config = aggregator.config

    state = (request.args.get("state") or "").strip()
    city = (request.args.get("city") or "").strip()

    try:
        if not state or not city:
            raise BadRequest("Parameters 'state' and 'city' are required")
        latitude, longitude = _observer_args(request)
    except BadRequest as e:
        return json_response({"error": str(e)}, status=400)

    result = asyncio.run(aggregator.fetch_alerts(
        latitude,
        longitude,
        config.regional_radius_km,
    ))
    alerts = filter_regional(
        result.alerts,
        state,
        city,
        proximity_km=config.regional_proximity_km,
    )

    return json_response({
        "region": {"state": state, "city": city},
        "alerts": [alert_to_dict(a) for a in alerts],
        "count": len(alerts),
        "observer": (
            {"latitude": latitude, "longitude": longitude}
            if latitude is not None else None
        ),
        "radius_km": config.regional_radius_km,
        "sources": _sources_to_dict(result),
        "fetched_at": _isoformat(result.fetched_at),
    })
