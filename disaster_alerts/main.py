"""Cloud Function Entry Points.

This module provides the entry points for Google Cloud Functions.
They are thin wrappers that load configuration and invoke the API handlers.
"""

import logging
import os

import functions_framework
from flask import Request, Response

from disaster_alerts import api_handler
from disaster_alerts.aggregator import AlertAggregator
from disaster_alerts.core.config import Config, validate_config
from disaster_alerts.shell.config_loader import load_config, load_config_from_env


# Configure logging
log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _get_config() -> Config:
    """Load configuration from file or environment."""
    config_path = os.environ.get("CONFIG_PATH")

    if config_path:
        config = load_config(config_path)
    elif os.environ.get("EONET_URL") or os.environ.get("USGS_URL"):
        # Simple env-based config
        config = load_config_from_env()
    else:
        # Try default config path
        config = load_config()

    validation = validate_config(config)
    for issue in validation.critical_errors:
        logger.error("Config %s: %s", issue.field, issue.message)
    for issue in validation.warnings:
        logger.warning("Config %s: %s", issue.field, issue.message)

    if not validation.valid:
        logger.error("Invalid configuration, falling back to defaults")
        return Config()

    return config


def _internal_error() -> Response:
    return api_handler.json_response(
        {"error": "Failed to load disaster alerts"},
        status=500,
    )


@functions_framework.http
def alerts(request: Request) -> Response:
    """HTTP Cloud Function: ranked alerts near a point."""
    try:
        aggregator = AlertAggregator(_get_config())
        return api_handler.get_alerts(request, aggregator)
    except Exception:
        logger.exception("Unexpected error serving alerts")
        return _internal_error()


@functions_framework.http
def regional_alerts(request: Request) -> Response:
    """HTTP Cloud Function: alerts relevant to a state and city."""
    try:
        aggregator = AlertAggregator(_get_config())
        return api_handler.get_regional_alerts(request, aggregator)
    except Exception:
        logger.exception("Unexpected error serving regional alerts")
        return _internal_error()
