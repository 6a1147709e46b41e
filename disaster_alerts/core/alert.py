"""Alert data model - Pure data structures.

Every provider record is normalized into this one immutable shape.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum


SOURCE_EONET = "NASA EONET"
SOURCE_USGS = "USGS"


class Severity(str, Enum):
    """Severity tier of an alert, total-ordered low < medium < high < critical."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        """Sort rank: critical first (0), low last (3)."""
        return _SEVERITY_RANK[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank


_SEVERITY_RANK = {
    Severity.CRITICAL: 0,
    Severity.HIGH: 1,
    Severity.MEDIUM: 2,
    Severity.LOW: 3,
}


class Category:
    """Common category vocabulary shared by all providers."""

    FIRE = "Fire"
    STORM = "Storm"
    FLOOD = "Flood"
    DROUGHT = "Drought"
    EARTHQUAKE = "Earthquake"
    VOLCANO = "Volcano"
    LANDSLIDE = "Landslide"
    ICE = "Ice"
    SNOW = "Snow"
    DUST_STORM = "Dust Storm"
    CYCLONE = "Cyclone"
    TSUNAMI = "Tsunami"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class Location:
    """Where an alert applies.

    Attributes:
        latitude: Decimal degrees (0 when the provider gave no geometry)
        longitude: Decimal degrees (0 when the provider gave no geometry)
        address: Free-text place description (optional)
    """
    latitude: float = 0.0
    longitude: float = 0.0
    address: str | None = None


@dataclass(frozen=True)
class Alert:
    """Immutable disaster alert.

    Attributes:
        id: Source-provided identifier, unique within one fetch cycle
        title: Human-readable headline
        description: Human-readable detail
        category: Common category (or the raw provider string if unmapped)
        severity: Severity tier
        location: Event location
        start_time: Event onset (UTC)
        source: Provider that produced the record
        end_time: Event end, when the provider reports one
        affected_areas: Provider-specific identifiers, carried through unmodified
        distance: Kilometres from the observer (0 when no observer is known)
    """
    id: str
    title: str
    description: str
    category: str
    severity: Severity
    location: Location
    start_time: datetime
    source: str
    end_time: datetime | None = None
    affected_areas: tuple[str, ...] = field(default_factory=tuple)
    distance: float = 0.0

    @property
    def coordinates(self) -> tuple[float, float]:
        """Return (latitude, longitude) tuple."""
        return (self.location.latitude, self.location.longitude)

    def with_distance(self, distance_km: float) -> "Alert":
        """Return a copy of this alert with its distance replaced."""
        return replace(self, distance=distance_km)
