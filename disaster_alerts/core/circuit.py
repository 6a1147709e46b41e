"""Provider circuit breaker - Pure functions.

Tracks whether a feed provider should be skipped after repeated failures.
The state is an explicit value owned by the caller and threaded through
each aggregation call; nothing here is stored at module level.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True)
class CircuitConfig:
    """Circuit breaker tuning.

    Attributes:
        failure_threshold: Consecutive failures that open the circuit (0 = never)
        cooldown_seconds: How long an open circuit skips the provider
    """
    failure_threshold: int = 3
    cooldown_seconds: int = 300


@dataclass(frozen=True)
class CircuitState:
    """Failure history of one provider.

    Attributes:
        consecutive_failures: Failures since the last success
        opened_at: When the circuit opened (None while closed)
    """
    consecutive_failures: int = 0
    opened_at: datetime | None = None


def is_open(state: CircuitState, config: CircuitConfig, now: datetime) -> bool:
    """Check if the provider should be skipped right now.

    Pure function. An open circuit becomes half-open once the cool-down has
    elapsed, letting one attempt through.
    """
    if state.opened_at is None:
        return False
    return now - state.opened_at < timedelta(seconds=config.cooldown_seconds)


def record_success(state: CircuitState) -> CircuitState:
    """Return a closed state after a successful fetch.

    Pure function - returns new state without modifying input.
    """
    return CircuitState()


def record_failure(
    state: CircuitState,
    config: CircuitConfig,
    now: datetime,
) -> CircuitState:
    """Record a failed fetch and return the updated state.

    Pure function - returns new state without modifying input.

    Args:
        state: Current state
        config: Circuit configuration
        now: Time of the failure

    Returns:
        New state; opened (or re-opened) once the threshold is reached
    """
    failures = state.consecutive_failures + 1

    if config.failure_threshold > 0 and failures >= config.failure_threshold:
        return CircuitState(consecutive_failures=failures, opened_at=now)

    return CircuitState(consecutive_failures=failures, opened_at=None)
