"""Framework-agnostic, in-process circuit breaker.

This package implements the circuit breaker pattern from *Release It!* with a
sliding failure-rate window.

Key behavior notes:
  - The breaker never performs the protected call. Callers ask
    ``allows_request()`` and report one outcome per admitted call.
  - ``OPEN -> HALF_OPEN`` is evaluated lazily on the next state query once the
    timeout has elapsed; no timer thread is started.
  - Outcomes reported while ``OPEN`` are ignored.
  - State lives in memory only and is never shared between processes.
"""

from breakerbox.circuit_breaker.breaker import BreakerConfig, CircuitBreaker
from breakerbox.circuit_breaker.exceptions import (
    CircuitBreakerError,
    CircuitOpenError,
)
from breakerbox.circuit_breaker.metrics import BreakerListener, LoggingBreakerListener
from breakerbox.circuit_breaker.state import BreakerStats, CircuitState
from breakerbox.circuit_breaker.window import SlidingWindow

__all__ = [
    "BreakerConfig",
    "BreakerListener",
    "BreakerStats",
    "CircuitBreaker",
    "CircuitBreakerError",
    "CircuitOpenError",
    "CircuitState",
    "LoggingBreakerListener",
    "SlidingWindow",
]
