"""Startup grace period latch."""

import time
from collections.abc import Callable

Clock = Callable[[], float]


class WarmupGate:
    """Stays closed for a fixed grace period after construction.

    Openness is computed from elapsed time on every call, so there is no
    flag to flip and nothing to synchronize. Once open it stays open as long
    as the clock is monotonic.
    """

    def __init__(self, grace_seconds: float, clock: Clock = time.monotonic) -> None:
        if grace_seconds < 0:
            raise ValueError(f"grace_seconds must be >= 0, got {grace_seconds}")
        self._clock = clock
        self._started_at = clock()
        self._grace = grace_seconds

    @property
    def grace_seconds(self) -> float:
        return self._grace

    def elapsed(self) -> float:
        """Seconds since the gate was created."""
        return self._clock() - self._started_at

    def remaining(self) -> float:
        """Seconds left until the gate opens (0 when open)."""
        return max(0.0, self._grace - self.elapsed())

    def is_open(self) -> bool:
        return self.elapsed() >= self._grace
