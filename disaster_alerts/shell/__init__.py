"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with external systems:
- NASA EONET client (HTTP)
- USGS API client (HTTP)
- Configuration loading (environment/files)

Keep this layer thin and simple. All business logic should be in core.
"""

from disaster_alerts.shell.feed_client import FeedResult
from disaster_alerts.shell.eonet_client import EONETClient
from disaster_alerts.shell.usgs_client import USGSClient
from disaster_alerts.shell.config_loader import load_config, Config

__all__ = [
    "FeedResult",
    "EONETClient",
    "USGSClient",
    "load_config",
    "Config",
]
