"""Circuit breaker state primitives."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class CircuitState(StrEnum):
    """Circuit breaker state values."""

    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


@dataclass(frozen=True, slots=True)
class BreakerStats:
    """Point-in-time view of breaker statistics useful for metrics/logging.

    Attributes:
        total: Outcomes currently held in the sliding window.
        failures: Failed outcomes currently held in the sliding window.
        failure_rate: ``failures / total``, or ``0.0`` for an empty window.
        last_opened_at: Timestamp of the most recent transition into ``OPEN``.
            Survives a later close; cleared only by ``reset()``.
        total_opens: Lifetime count of transitions into ``OPEN``.
        current_streak: Consecutive identical outcomes while ``CLOSED``.
            Positive for successes, negative for failures.
    """

    total: int
    failures: int
    failure_rate: float
    last_opened_at: datetime | None
    total_opens: int
    current_streak: int

    def as_dict(self) -> dict[str, object]:
        """Return the stats keyed by their exported field names."""
        return {
            "total": self.total,
            "failures": self.failures,
            "failureRate": self.failure_rate,
            "lastOpenedAt": self.last_opened_at,
            "totalOpens": self.total_opens,
            "currentStreak": self.current_streak,
        }
