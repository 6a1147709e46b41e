"""Geographic calculations - Pure functions.

This module provides distance and boundary calculations for alert locations.
All functions are pure with no side effects.
"""

import math
from dataclasses import dataclass

from disaster_alerts.core.alert import Alert


# Earth's radius in kilometers
EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class BoundingBox:
    """Geographic bounding box.

    Attributes:
        min_latitude: Southern boundary
        max_latitude: Northern boundary
        min_longitude: Western boundary
        max_longitude: Eastern boundary
    """
    min_latitude: float
    max_latitude: float
    min_longitude: float
    max_longitude: float

    def to_bbox_param(self) -> str:
        """Render as ``lon_min,lat_min,lon_max,lat_max`` (EONET bbox order)."""
        return ",".join(
            str(v) for v in (
                self.min_longitude,
                self.min_latitude,
                self.max_longitude,
                self.max_latitude,
            )
        )


@dataclass(frozen=True)
class Observer:
    """The point alerts are measured from (usually the user's position)."""
    latitude: float
    longitude: float


# Continental default region (India): 68E..97E, 7N..37N
DEFAULT_BOUNDS = BoundingBox(
    min_latitude=7.0,
    max_latitude=37.0,
    min_longitude=68.0,
    max_longitude=97.0,
)


def make_observer(latitude: float | None, longitude: float | None) -> Observer | None:
    """Build an Observer, or None unless both coordinates are given.

    Pure function.
    """
    if latitude is None or longitude is None:
        return None
    return Observer(latitude=float(latitude), longitude=float(longitude))


def calculate_distance(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
) -> float:
    """Calculate distance between two points using Haversine formula.

    Pure function.

    Args:
        lat1: Latitude of first point
        lon1: Longitude of first point
        lat2: Latitude of second point
        lon2: Longitude of second point

    Returns:
        Distance in kilometers
    """
    # Convert to radians
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    # Haversine formula
    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def round_km(distance_km: float) -> float:
    """Round a distance to the nearest whole kilometre, halves rounding up.

    Pure function. Returned as a float so it can keep flowing through
    arithmetic and comparisons.
    """
    return float(math.floor(distance_km + 0.5))


def distance_to_alert(observer: Observer, alert: Alert) -> float:
    """Unrounded distance in km from an observer to an alert.

    Pure function.
    """
    return calculate_distance(observer.latitude, observer.longitude, *alert.coordinates)


def is_alert_nearby(
    alert: Alert,
    latitude: float,
    longitude: float,
    radius_km: float = 100.0,
) -> bool:
    """Check if an alert lies within a radius of a point.

    Pure function.

    Args:
        alert: Alert to check
        latitude: Reference point latitude
        longitude: Reference point longitude
        radius_km: Radius in kilometers (inclusive)

    Returns:
        True if the alert is within the radius
    """
    return calculate_distance(latitude, longitude, *alert.coordinates) <= radius_km


def bounds_around(observer: Observer, degrees: float = 5.0) -> BoundingBox:
    """Square box of +/- ``degrees`` around an observer.

    Pure function. The box is not clamped to valid coordinate ranges.
    """
    return BoundingBox(
        min_latitude=observer.latitude - degrees,
        max_latitude=observer.latitude + degrees,
        min_longitude=observer.longitude - degrees,
        max_longitude=observer.longitude + degrees,
    )
