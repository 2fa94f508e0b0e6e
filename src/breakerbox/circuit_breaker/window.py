"""Bounded record of recent call outcomes."""

from collections import deque


class SlidingWindow:
    """FIFO of call outcomes (``True`` = success) with a fixed capacity.

    The oldest outcome is evicted once the capacity is exceeded. A window with
    capacity ``0`` never holds anything, so its failure rate is always ``0.0``.
    """

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError("size must be >= 0")
        self.size = size
        self._outcomes: deque[bool] = deque()

    def __len__(self) -> int:
        return len(self._outcomes)

    def record(self, success: bool) -> None:
        """Append one outcome, evicting the oldest ones beyond capacity."""
        self._outcomes.append(success)
        while len(self._outcomes) > self.size:
            self._outcomes.popleft()

    def clear(self) -> None:
        self._outcomes.clear()

    @property
    def total(self) -> int:
        return len(self._outcomes)

    @property
    def failures(self) -> int:
        return sum(1 for success in self._outcomes if not success)

    @property
    def failure_rate(self) -> float:
        total = self.total
        if total == 0:
            return 0.0
        return self.failures / total

    @property
    def is_saturated(self) -> bool:
        """Whether enough outcomes are held to evaluate the failure threshold."""
        return len(self._outcomes) >= self.size
