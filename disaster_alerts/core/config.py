"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

from dataclasses import dataclass, field

from disaster_alerts.core.circuit import CircuitConfig
from disaster_alerts.core.geo import DEFAULT_BOUNDS, BoundingBox


EONET_API_URL = "https://eonet.gsfc.nasa.gov/api/v3/events"
USGS_API_URL = "https://earthquake.usgs.gov/fdsnws/event/1/query"


@dataclass
class Config:
    """Application configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        eonet_url: NASA EONET events endpoint
        usgs_url: USGS FDSN event query endpoint
        default_bounds: Region queried when no observer is known (and always
            for the seismic feed)
        observer_box_degrees: Half-width of the satellite box around an observer
        eonet_status: EONET event status filter
        eonet_days: EONET lookback window in days
        min_magnitude: Minimum magnitude requested from USGS
        lookback_days: USGS lookback window in days
        default_radius_km: Radius used when the caller gives none
        regional_radius_km: Radius fetched before regional filtering
        regional_proximity_km: Distance under which an alert counts as regional
        request_timeout_seconds: Per-provider timeout
        namespace_ids: Prefix alert ids with their source
        circuit: Circuit breaker tuning
    """
    eonet_url: str = EONET_API_URL
    usgs_url: str = USGS_API_URL
    default_bounds: BoundingBox = DEFAULT_BOUNDS
    observer_box_degrees: float = 5.0
    eonet_status: str = "open"
    eonet_days: int = 30
    min_magnitude: float = 3.0
    lookback_days: int = 30
    default_radius_km: float = 500.0
    regional_radius_km: float = 300.0
    regional_proximity_km: float = 200.0
    request_timeout_seconds: float = 10.0
    namespace_ids: bool = False
    circuit: CircuitConfig = field(default_factory=CircuitConfig)


@dataclass
class ValidationError:
    """A configuration validation error.

    Attributes:
        field: The field that has an error
        message: Human-readable error description
        severity: 'error' or 'warning'
    """
    field: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    """Result of validating configuration.

    Attributes:
        valid: True if no errors (warnings are OK)
        errors: List of validation errors/warnings
    """
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationError]:
        """Get only warnings."""
        return [e for e in self.errors if e.severity == "warning"]

    @property
    def critical_errors(self) -> list[ValidationError]:
        """Get only critical errors."""
        return [e for e in self.errors if e.severity == "error"]


def validate_coordinates(lat: float, lon: float, field_name: str) -> list[ValidationError]:
    """Validate latitude/longitude coordinates.

    Pure function.

    Args:
        lat: Latitude value
        lon: Longitude value
        field_name: Name of the field for error messages

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not -90 <= lat <= 90:
        errors.append(ValidationError(
            field=field_name,
            message=f"Latitude {lat} out of range [-90, 90]",
        ))

    if not -180 <= lon <= 180:
        errors.append(ValidationError(
            field=field_name,
            message=f"Longitude {lon} out of range [-180, 180]",
        ))

    return errors


def validate_bounds(bounds: BoundingBox, field_name: str) -> list[ValidationError]:
    """Validate a bounding box.

    Pure function.
    """
    errors = []

    errors.extend(validate_coordinates(
        bounds.min_latitude, bounds.min_longitude,
        f"{field_name}.min",
    ))
    errors.extend(validate_coordinates(
        bounds.max_latitude, bounds.max_longitude,
        f"{field_name}.max",
    ))

    if bounds.min_latitude > bounds.max_latitude:
        errors.append(ValidationError(
            field=field_name,
            message=f"min_latitude ({bounds.min_latitude}) > max_latitude ({bounds.max_latitude})",
        ))

    if bounds.min_longitude > bounds.max_longitude:
        errors.append(ValidationError(
            field=field_name,
            message=f"min_longitude ({bounds.min_longitude}) > max_longitude ({bounds.max_longitude})",
        ))

    return errors


def _require_positive(value: float, field_name: str) -> list[ValidationError]:
    if value <= 0:
        return [ValidationError(
            field=field_name,
            message=f"Must be positive, got {value}",
        )]
    return []


def validate_config(config: Config) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []

    errors.extend(validate_bounds(config.default_bounds, "default_bounds"))

    for name in (
        "observer_box_degrees",
        "eonet_days",
        "lookback_days",
        "default_radius_km",
        "regional_radius_km",
        "regional_proximity_km",
        "request_timeout_seconds",
    ):
        errors.extend(_require_positive(getattr(config, name), name))

    if not 0 <= config.min_magnitude <= 10:
        errors.append(ValidationError(
            field="min_magnitude",
            message=f"Magnitude {config.min_magnitude} out of range [0, 10]",
        ))

    if config.circuit.failure_threshold < 0:
        errors.append(ValidationError(
            field="circuit.failure_threshold",
            message=f"Must not be negative, got {config.circuit.failure_threshold}",
        ))

    if config.circuit.cooldown_seconds < 0:
        errors.append(ValidationError(
            field="circuit.cooldown_seconds",
            message=f"Must not be negative, got {config.circuit.cooldown_seconds}",
        ))

    if config.regional_proximity_km > config.regional_radius_km:
        errors.append(ValidationError(
            field="regional_proximity_km",
            message=(
                f"regional_proximity_km ({config.regional_proximity_km}) exceeds "
                f"regional_radius_km ({config.regional_radius_km}); "
                "alerts between the two are never fetched"
            ),
            severity="warning",
        ))

    if config.request_timeout_seconds > 30:
        errors.append(ValidationError(
            field="request_timeout_seconds",
            message=(
                f"Timeout of {config.request_timeout_seconds}s will stall "
                "aggregation when a feed hangs"
            ),
            severity="warning",
        ))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )
