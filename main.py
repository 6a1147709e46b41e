"""Cloud Function Entry Point - Root Module.

This is the root-level entry point for Google Cloud Functions.
It imports from the disaster_alerts package.
"""

from disaster_alerts.main import (
    alerts,
    regional_alerts,
)

__all__ = [
    "alerts",
    "regional_alerts",
]
