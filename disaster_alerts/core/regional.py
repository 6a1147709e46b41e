"""Regional relevance filtering - Pure functions."""

from disaster_alerts.core.alert import Alert
from disaster_alerts.core.geo import Observer
from disaster_alerts.core.ranking import attach_distances


REGIONAL_PROXIMITY_KM = 200.0


def mentions_region(alert: Alert, *names: str) -> bool:
    """Check if the alert's title or address mentions any of the names.

    Pure function. Matching is a case-insensitive substring test; empty
    names never match.
    """
    haystacks = [alert.title.lower()]
    if alert.location.address:
        haystacks.append(alert.location.address.lower())

    for name in names:
        needle = (name or "").strip().lower()
        if not needle:
            continue
        if any(needle in text for text in haystacks):
            return True

    return False


def filter_regional(
    alerts: list[Alert],
    state: str,
    city: str,
    observer: Observer | None = None,
    proximity_km: float = REGIONAL_PROXIMITY_KM,
) -> list[Alert]:
    """Narrow a ranked list to alerts relevant to a region.

    Pure function. An alert is kept if it is close (distance within
    ``proximity_km``) OR its title/address mentions the state or city, so
    region-wide advisories survive even when their point is far away.

    Args:
        alerts: Ranked alerts (order is preserved)
        state: Region name, e.g. "Kerala"
        city: Locality name, e.g. "Kochi"
        observer: When given, distances are recomputed from it first
        proximity_km: Inclusive distance threshold

    Returns:
        The matching alerts, in input order
    """
    if observer is not None:
        alerts = attach_distances(alerts, observer)

    return [
        a for a in alerts
        if a.distance <= proximity_km or mentions_region(a, state, city)
    ]
