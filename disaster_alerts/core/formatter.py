"""Display formatting - Pure functions.

This module turns alerts into the strings and colors a presentation layer
shows. All functions are pure with no side effects.
"""

import math
from datetime import datetime, timezone

from disaster_alerts.core.alert import Alert, Severity


SEVERITY_COLORS: dict[Severity, str] = {
    Severity.LOW: "#4CAF50",       # Green
    Severity.MEDIUM: "#FF9800",    # Orange
    Severity.HIGH: "#FF5722",      # Deep Orange
    Severity.CRITICAL: "#D32F2F",  # Red
}

CATEGORY_ICONS: dict[str, str] = {
    "Earthquake": "🌍",
    "Flood": "🌊",
    "Fire": "🔥",
    "Storm": "⛈️",
    "Cyclone": "🌀",
    "Tsunami": "🌊",
    "Landslide": "⛰️",
    "Drought": "☀️",
    "Volcano": "🌋",
    "Snow": "❄️",
    "Dust Storm": "💨",
    "Ice": "🧊",
}

DEFAULT_ICON = "⚠️"


def get_severity_color(severity: Severity) -> str:
    """Get the display color (hex) for a severity tier.

    Pure function.
    """
    return SEVERITY_COLORS[Severity(severity)]


def get_category_icon(category: str) -> str:
    """Get an emoji for a category, or a warning sign if unknown.

    Pure function.
    """
    return CATEGORY_ICONS.get(category, DEFAULT_ICON)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_distance(distance_km: float) -> str:
    """Format a distance for display.

    Pure function.

    Examples:
        0.5  -> "500m away"
        5.3  -> "5.3km away"
        42   -> "42km away"
    """
    if distance_km < 1:
        return f"{_round_half_up(distance_km * 1000)}m away"
    if distance_km < 10:
        return f"{distance_km:.1f}km away"
    return f"{_round_half_up(distance_km)}km away"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'} ago"


def format_time_ago(when: datetime, now: datetime | None = None) -> str:
    """Describe how long ago a timestamp was.

    Pure function (given ``now``).

    Args:
        when: Timestamp to describe (naive values are treated as UTC)
        now: Reference time, defaults to the current UTC time

    Returns:
        "N minutes ago" under an hour, "N hours ago" under a day,
        "N days ago" under a week, else the locale's date format
    """
    if now is None:
        now = datetime.now(timezone.utc)
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    seconds = max((now - when).total_seconds(), 0.0)
    minutes = int(seconds // 60)
    hours = int(seconds // 3600)
    days = int(seconds // 86400)

    if minutes < 60:
        return _plural(minutes, "minute")
    if hours < 24:
        return _plural(hours, "hour")
    if days < 7:
        return _plural(days, "day")
    return when.strftime("%x")


def format_alert_summary(alert: Alert) -> str:
    """Format a one-line summary of an alert.

    Pure function.

    Args:
        alert: Alert to summarize

    Returns:
        One-line summary string
    """
    icon = get_category_icon(alert.category)
    line = f"{icon} [{alert.severity.value.upper()}] {alert.title} ({alert.source})"
    if alert.distance:
        line += f" - {format_distance(alert.distance)}"
    return line
