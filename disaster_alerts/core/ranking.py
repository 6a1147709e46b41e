"""Alert ranking - Pure functions.

Attaches observer distances, applies the radius filter and produces the
stable severity-then-distance ordering used by every consumer.
"""

import logging

from disaster_alerts.core.alert import Alert
from disaster_alerts.core.geo import Observer, distance_to_alert, round_km


logger = logging.getLogger(__name__)


DEFAULT_RADIUS_KM = 500.0


def attach_distances(alerts: list[Alert], observer: Observer) -> list[Alert]:
    """Recompute every alert's distance from the observer.

    Pure function. Any distance set earlier is overwritten. Distances are
    rounded to the nearest whole kilometre.
    """
    return [
        alert.with_distance(round_km(distance_to_alert(observer, alert)))
        for alert in alerts
    ]


def filter_by_radius(alerts: list[Alert], radius_km: float) -> list[Alert]:
    """Keep alerts whose whole-kilometre distance is within the radius.

    Pure function. The boundary is inclusive.
    """
    return [a for a in alerts if round_km(a.distance) <= radius_km]


def sort_alerts(alerts: list[Alert]) -> list[Alert]:
    """Sort by severity (critical first), then distance ascending.

    Pure function. The sort is stable: alerts with equal severity and
    distance keep their input order.
    """
    return sorted(alerts, key=lambda a: (a.severity.rank, a.distance))


def rank_alerts(
    alerts: list[Alert],
    observer: Observer | None = None,
    radius_km: float = DEFAULT_RADIUS_KM,
) -> list[Alert]:
    """Rank a merged alert list.

    Pure function that never raises: any internal failure is logged and
    yields an empty list.

    Args:
        alerts: Merged alerts from all providers
        observer: Observer point; when None no distances are computed and
            no radius filtering happens
        radius_km: Maximum distance in kilometers

    Returns:
        Ranked, filtered alerts (possibly empty)
    """
    try:
        ranked = list(alerts)
        if observer is not None:
            ranked = attach_distances(ranked, observer)
            ranked = filter_by_radius(ranked, radius_km)
        return sort_alerts(ranked)
    except Exception:
        logger.exception("Failed to rank %d alerts", len(alerts) if alerts else 0)
        return []
