"""Observability hooks for circuit breakers."""

from typing import Protocol

from breakerbox.circuit_breaker.state import CircuitState
from breakerbox.logging import StructuredLogger, log_info, log_warning


class BreakerListener(Protocol):
    """Listener protocol for circuit breaker events.

    Notes:
        ``on_state_change(OPEN -> HALF_OPEN)`` is emitted by the first query
        that observes the elapsed cooldown, since there is no background timer.
    """

    def on_state_change(
        self, name: str, old: CircuitState, new: CircuitState
    ) -> None:
        """Handle circuit state transitions."""

    def on_request_rejected(self, name: str) -> None:
        """Handle a request rejected while the circuit is open."""


class LoggingBreakerListener:
    """Emit breaker events as structured log records."""

    def __init__(self, logger: StructuredLogger) -> None:
        self._logger = logger

    def on_state_change(
        self, name: str, old: CircuitState, new: CircuitState
    ) -> None:
        if new == CircuitState.OPEN:
            log_warning(
                self._logger,
                "circuit_breaker.state_changed",
                breaker=name,
                old_state=str(old),
                new_state=str(new),
            )
            return
        log_info(
            self._logger,
            "circuit_breaker.state_changed",
            breaker=name,
            old_state=str(old),
            new_state=str(new),
        )

    def on_request_rejected(self, name: str) -> None:
        log_info(self._logger, "circuit_breaker.request_rejected", breaker=name)
