"""Core circuit breaker implementation."""

import threading
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime

from breakerbox.circuit_breaker.exceptions import CircuitOpenError
from breakerbox.circuit_breaker.metrics import BreakerListener
from breakerbox.circuit_breaker.state import BreakerStats, CircuitState
from breakerbox.circuit_breaker.window import SlidingWindow

_StateChange = tuple[CircuitState, CircuitState]


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class BreakerConfig:
    """Circuit breaker configuration values.

    Attributes:
        failure_threshold: Failure rate (``0.0``-``1.0``) of a full window at
            or above which the circuit opens.
        window_size: Number of recent ``CLOSED`` outcomes kept for evaluation.
        timeout: Seconds to stay ``OPEN`` before admitting half-open probes.
        success_threshold: Consecutive half-open successes required to close.
    """

    failure_threshold: float = 0.5
    window_size: int = 10
    timeout: float = 30.0
    success_threshold: int = 1

    def __post_init__(self) -> None:
        if not 0.0 <= self.failure_threshold <= 1.0:
            raise ValueError("failure_threshold must be between 0.0 and 1.0")
        if self.window_size < 0:
            raise ValueError("window_size must be >= 0")
        if self.timeout < 0:
            raise ValueError("timeout must be >= 0")
        if self.success_threshold < 1:
            raise ValueError("success_threshold must be >= 1")


class CircuitBreaker:
    """Sliding-window circuit breaker guarding one downstream dependency.

    The breaker never performs the protected call. Callers consult
    ``allows_request()`` first, run the call themselves, then report exactly one
    outcome through ``record_success()`` or ``record_failure()``.

    The ``OPEN -> HALF_OPEN`` move is evaluated lazily by ``allows_request()``
    and ``get_state()``; there is no background timer. Every public operation
    runs under one instance lock, so a single breaker may be shared between
    threads.
    """

    def __init__(
        self,
        name: str = "default",
        *,
        config: BreakerConfig | None = None,
        listeners: Sequence[BreakerListener] | None = None,
    ) -> None:
        """Build a circuit breaker in the ``CLOSED`` state.

        Args:
            name: Breaker name used in listener events and errors.
            config: Breaker behavior configuration. Defaults to
                ``BreakerConfig()``.
            listeners: Optional listener hooks for breaker events.
        """
        self.name = name
        self.config = BreakerConfig() if config is None else config
        self._listeners = tuple(listeners) if listeners is not None else ()
        self._lock = threading.Lock()
        self._window = SlidingWindow(self.config.window_size)
        self._state = CircuitState.CLOSED
        self._opened_at: datetime | None = None
        self._half_open_successes = 0
        self._last_opened_at: datetime | None = None
        self._total_opens = 0
        self._current_streak = 0

    def __repr__(self) -> str:
        return f"CircuitBreaker(name={self.name!r}, state={self._state.value!r})"

    def _emit_state_changes(self, changes: Sequence[_StateChange]) -> None:
        for old, new in changes:
            if old == new:
                continue
            for listener in self._listeners:
                try:
                    listener.on_state_change(self.name, old, new)
                except Exception:
                    continue

    def _emit_request_rejected(self) -> None:
        for listener in self._listeners:
            try:
                listener.on_request_rejected(self.name)
            except Exception:
                continue

    # Transition helpers below expect ``self._lock`` to be held.

    def _cooldown_elapsed(self, now: datetime) -> bool:
        if self._opened_at is None:
            return False
        elapsed = (now - self._opened_at).total_seconds()
        return elapsed >= self.config.timeout

    def _refresh_state(self, now: datetime) -> list[_StateChange]:
        if self._state == CircuitState.OPEN and self._cooldown_elapsed(now):
            self._state = CircuitState.HALF_OPEN
            self._half_open_successes = 0
            return [(CircuitState.OPEN, CircuitState.HALF_OPEN)]
        return []

    def _trip(self, now: datetime) -> _StateChange:
        # Window and streak survive; they are cleared when the circuit closes.
        old = self._state
        self._state = CircuitState.OPEN
        self._opened_at = now
        self._last_opened_at = now
        self._total_opens += 1
        self._half_open_successes = 0
        return (old, CircuitState.OPEN)

    def _close(self) -> _StateChange:
        old = self._state
        self._state = CircuitState.CLOSED
        self._opened_at = None
        self._half_open_successes = 0
        self._current_streak = 0
        self._window.clear()
        return (old, CircuitState.CLOSED)

    def _evaluate_threshold(self, now: datetime) -> list[_StateChange]:
        if not self._window.is_saturated:
            return []
        if self._window.failure_rate >= self.config.failure_threshold:
            return [self._trip(now)]
        return []

    def _retry_after(self, now: datetime) -> float:
        if self._state != CircuitState.OPEN or self._opened_at is None:
            return 0.0
        elapsed = (now - self._opened_at).total_seconds()
        return max(self.config.timeout - elapsed, 0.0)

    def _admit(self) -> tuple[bool, float]:
        with self._lock:
            now = _utcnow()
            changes = self._refresh_state(now)
            allowed = self._state != CircuitState.OPEN
            retry_after = self._retry_after(now)
        self._emit_state_changes(changes)
        if not allowed:
            self._emit_request_rejected()
        return allowed, retry_after

    def allows_request(self) -> bool:
        """Return whether a request may be sent to the protected dependency.

        ``CLOSED`` and ``HALF_OPEN`` admit requests; ``OPEN`` rejects them.
        """
        allowed, _ = self._admit()
        return allowed

    def check_request(self) -> None:
        """Raise instead of returning ``False`` when the request is rejected.

        Raises:
            CircuitOpenError: When the circuit is open.
        """
        allowed, retry_after = self._admit()
        if not allowed:
            raise CircuitOpenError(self.name, retry_after=retry_after)

    def record_success(self) -> None:
        """Record a successful call to the protected dependency."""
        with self._lock:
            now = _utcnow()
            if self._state == CircuitState.OPEN:
                # Stale report; no traffic reaches the dependency while open.
                changes: list[_StateChange] = []
            elif self._state == CircuitState.HALF_OPEN:
                self._half_open_successes += 1
                changes = []
                if self._half_open_successes >= self.config.success_threshold:
                    changes.append(self._close())
            else:
                self._window.record(True)
                self._current_streak = (
                    self._current_streak + 1 if self._current_streak >= 0 else 1
                )
                # A success can still open the circuit when old failures
                # keep the full window at or above the threshold.
                changes = self._evaluate_threshold(now)
        self._emit_state_changes(changes)

    def record_failure(self) -> None:
        """Record a failed call to the protected dependency."""
        with self._lock:
            now = _utcnow()
            if self._state == CircuitState.OPEN:
                changes: list[_StateChange] = []
            elif self._state == CircuitState.HALF_OPEN:
                changes = [self._trip(now)]
            else:
                self._window.record(False)
                self._current_streak = (
                    self._current_streak - 1 if self._current_streak <= 0 else -1
                )
                changes = self._evaluate_threshold(now)
        self._emit_state_changes(changes)

    def get_state(self) -> CircuitState:
        """Return the current state after applying any due half-open move."""
        with self._lock:
            changes = self._refresh_state(_utcnow())
            state = self._state
        self._emit_state_changes(changes)
        return state

    @property
    def state(self) -> CircuitState:
        return self.get_state()

    def is_closed(self) -> bool:
        return self.get_state() == CircuitState.CLOSED

    def is_open(self) -> bool:
        return self.get_state() == CircuitState.OPEN

    def is_half_open(self) -> bool:
        return self.get_state() == CircuitState.HALF_OPEN

    def retry_after(self) -> float:
        """Return seconds until an open circuit admits probes, else ``0.0``."""
        with self._lock:
            return self._retry_after(_utcnow())

    def force_open(self) -> None:
        """Open the circuit regardless of the recorded outcomes."""
        with self._lock:
            change = self._trip(_utcnow())
        self._emit_state_changes([change])

    def force_close(self) -> None:
        """Close the circuit regardless of its current state."""
        with self._lock:
            change = self._close()
        self._emit_state_changes([change])

    def reset(self) -> None:
        """Return the breaker to its initial state, clearing all statistics."""
        with self._lock:
            old = self._state
            self._state = CircuitState.CLOSED
            self._window.clear()
            self._opened_at = None
            self._half_open_successes = 0
            self._last_opened_at = None
            self._total_opens = 0
            self._current_streak = 0
        self._emit_state_changes([(old, CircuitState.CLOSED)])

    def get_stats(self) -> BreakerStats:
        """Return a statistics snapshot without mutating the breaker."""
        with self._lock:
            return BreakerStats(
                total=self._window.total,
                failures=self._window.failures,
                failure_rate=self._window.failure_rate,
                last_opened_at=self._last_opened_at,
                total_opens=self._total_opens,
                current_streak=self._current_streak,
            )
