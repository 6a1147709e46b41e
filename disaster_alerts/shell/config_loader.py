"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

Models (Config, CircuitConfig) are defined in the core package.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from disaster_alerts.core.circuit import CircuitConfig
from disaster_alerts.core.config import Config
from disaster_alerts.core.geo import BoundingBox


logger = logging.getLogger(__name__)


_TRUE_VALUES = {"1", "true", "yes", "on"}


def _resolve_value(value: Any) -> Any:
    """Resolve a ``${VAR}`` placeholder from the environment.

    Non-string values and plain strings are returned unchanged. An unset
    variable leaves the placeholder in place.
    """
    if not isinstance(value, str):
        return value

    if value.startswith("${") and value.endswith("}"):
        var_name = value[2:-1]
        env_value = os.environ.get(var_name)
        if env_value:
            return env_value
        logger.warning("Environment variable %s not set", var_name)

    return value


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_VALUES
    return bool(value)


def _parse_bounds(data: dict[str, Any]) -> BoundingBox:
    """Parse a bounding box from config data."""
    return BoundingBox(
        min_latitude=float(_resolve_value(data["min_latitude"])),
        max_latitude=float(_resolve_value(data["max_latitude"])),
        min_longitude=float(_resolve_value(data["min_longitude"])),
        max_longitude=float(_resolve_value(data["max_longitude"])),
    )


def _parse_bounds_string(value: str) -> BoundingBox | None:
    """Parse ``min_lat,max_lat,min_lon,max_lon``; None if malformed."""
    try:
        parts = [float(p.strip()) for p in value.split(",")]
    except ValueError:
        logger.warning("Ignoring malformed bounds: %s", value)
        return None

    if len(parts) != 4:
        logger.warning("Ignoring bounds without 4 values: %s", value)
        return None

    return BoundingBox(
        min_latitude=parts[0],
        max_latitude=parts[1],
        min_longitude=parts[2],
        max_longitude=parts[3],
    )


def _parse_circuit(data: dict[str, Any]) -> CircuitConfig:
    """Parse circuit breaker settings from config data."""
    defaults = CircuitConfig()
    return CircuitConfig(
        failure_threshold=int(_resolve_value(
            data.get("failure_threshold", defaults.failure_threshold)
        )),
        cooldown_seconds=int(_resolve_value(
            data.get("cooldown_seconds", defaults.cooldown_seconds)
        )),
    )


def load_config_from_dict(data: dict[str, Any]) -> Config:
    """Load configuration from a dictionary.

    This is a pure-ish function (only env var expansion has side effects).

    Args:
        data: Configuration dictionary

    Returns:
        Parsed Config object

    Raises:
        ValueError: If a value has the wrong type
    """
    defaults = Config()

    feeds = data.get("feeds", {}) or {}
    eonet = feeds.get("eonet", {}) or {}
    usgs = feeds.get("usgs", {}) or {}
    ranking = data.get("ranking", {}) or {}

    default_bounds = defaults.default_bounds
    if "default_bounds" in data:
        try:
            default_bounds = _parse_bounds(data["default_bounds"])
        except KeyError as e:
            raise ValueError(f"default_bounds missing key: {e}") from e

    try:
        return Config(
            eonet_url=_resolve_value(eonet.get("url", defaults.eonet_url)),
            usgs_url=_resolve_value(usgs.get("url", defaults.usgs_url)),
            default_bounds=default_bounds,
            observer_box_degrees=float(_resolve_value(
                eonet.get("observer_box_degrees", defaults.observer_box_degrees)
            )),
            eonet_status=str(_resolve_value(eonet.get("status", defaults.eonet_status))),
            eonet_days=int(_resolve_value(eonet.get("days", defaults.eonet_days))),
            min_magnitude=float(_resolve_value(
                usgs.get("min_magnitude", defaults.min_magnitude)
            )),
            lookback_days=int(_resolve_value(
                usgs.get("lookback_days", defaults.lookback_days)
            )),
            default_radius_km=float(_resolve_value(
                ranking.get("default_radius_km", defaults.default_radius_km)
            )),
            regional_radius_km=float(_resolve_value(
                ranking.get("regional_radius_km", defaults.regional_radius_km)
            )),
            regional_proximity_km=float(_resolve_value(
                ranking.get("regional_proximity_km", defaults.regional_proximity_km)
            )),
            request_timeout_seconds=float(_resolve_value(
                data.get("request_timeout_seconds", defaults.request_timeout_seconds)
            )),
            namespace_ids=_as_bool(_resolve_value(
                data.get("namespace_ids", defaults.namespace_ids)
            )),
            circuit=_parse_circuit(data.get("circuit", {}) or {}),
        )
    except (TypeError, AttributeError) as e:
        raise ValueError(f"Invalid configuration: {e}") from e


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses CONFIG_PATH env var or default.

    Returns:
        Parsed Config object

    Raises:
        yaml.YAMLError: If config file is invalid YAML
        ValueError: If config values have the wrong type
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", "config/config.yaml")

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return Config()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return Config()

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")

    config = load_config_from_dict(data)

    logger.info(
        "Loaded config: radius %.0f km, min magnitude %.1f, timeout %.0fs",
        config.default_radius_km,
        config.min_magnitude,
        config.request_timeout_seconds,
    )

    return config


def load_config_from_env() -> Config:
    """Load configuration from environment variables.

    Useful for simple deployments without a YAML file.

    Environment variables:
        EONET_URL: EONET events endpoint
        USGS_URL: USGS query endpoint
        MIN_MAGNITUDE: Minimum magnitude requested from USGS
        LOOKBACK_DAYS: How far back to fetch earthquakes
        DEFAULT_RADIUS_KM: Radius used when callers give none
        REQUEST_TIMEOUT: Per-provider timeout in seconds
        DEFAULT_BOUNDS: Comma-separated bounds (min_lat,max_lat,min_lon,max_lon)
        NAMESPACE_IDS: Prefix alert ids with their source ("true"/"false")

    Returns:
        Config object from environment
    """
    defaults = Config()

    bounds = defaults.default_bounds
    bounds_str = os.environ.get("DEFAULT_BOUNDS")
    if bounds_str:
        bounds = _parse_bounds_string(bounds_str) or bounds

    return Config(
        eonet_url=os.environ.get("EONET_URL", defaults.eonet_url),
        usgs_url=os.environ.get("USGS_URL", defaults.usgs_url),
        default_bounds=bounds,
        min_magnitude=float(os.environ.get("MIN_MAGNITUDE", defaults.min_magnitude)),
        lookback_days=int(os.environ.get("LOOKBACK_DAYS", defaults.lookback_days)),
        default_radius_km=float(
            os.environ.get("DEFAULT_RADIUS_KM", defaults.default_radius_km)
        ),
        request_timeout_seconds=float(
            os.environ.get("REQUEST_TIMEOUT", defaults.request_timeout_seconds)
        ),
        namespace_ids=_as_bool(os.environ.get("NAMESPACE_IDS", "false")),
    )
