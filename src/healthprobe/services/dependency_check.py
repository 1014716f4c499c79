"""Timeout-bounded dependency checks."""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from healthprobe.core.exceptions import (
    CheckError,
    CheckFailureError,
    CheckTimeoutError,
    InvalidCheckError,
)
from healthprobe.models.health import CheckOutcome, HealthStatus
from healthprobe.utils.logging import get_logger

logger = get_logger(__name__)

Probe = Callable[[], Awaitable[bool]]

# Timed-out probe tasks still unwinding; held so they are not garbage collected
_detached: set[asyncio.Future] = set()


def _detach(task: asyncio.Future) -> None:
    """Cancel a timed-out probe without waiting for it to finish."""
    task.cancel()
    _detached.add(task)
    task.add_done_callback(_reap)


def _reap(task: asyncio.Future) -> None:
    _detached.discard(task)
    if not task.cancelled() and task.exception() is not None:
        logger.debug("Abandoned probe raised during cleanup", error=str(task.exception()))


@dataclass(frozen=True)
class DependencyCheck:
    """A named probe of one external resource, bounded by a timeout.

    The probe is a zero-argument coroutine function returning True when the
    resource is available. Anything else - False, a raised error, or no
    answer before the deadline - is reported as DOWN.
    """

    name: str
    probe: Probe
    timeout: float

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise InvalidCheckError(repr(self.name), "name must not be empty")
        if not callable(self.probe):
            raise InvalidCheckError(self.name, "probe must be callable")
        if self.timeout <= 0:
            raise InvalidCheckError(self.name, f"timeout must be positive, got {self.timeout}")

    async def run(self) -> CheckOutcome:
        """Invoke the probe and normalize every result into an outcome.

        Never raises for probe failures. At the deadline the probe task is
        cancelled and abandoned; its cleanup runs on without delaying the
        outcome.
        """
        try:
            task = asyncio.ensure_future(self.probe())
        except Exception as e:
            error: CheckError = CheckFailureError(self.name, str(e) or type(e).__name__)
        else:
            try:
                done, _ = await asyncio.wait({task}, timeout=self.timeout)
            except asyncio.CancelledError:
                task.cancel()
                raise

            if not done:
                _detach(task)
                error = CheckTimeoutError(self.name, self.timeout)
            elif task.cancelled():
                error = CheckFailureError(self.name, "probe cancelled")
            elif (exc := task.exception()) is not None:
                error = CheckFailureError(self.name, str(exc) or type(exc).__name__)
            elif task.result() is True:
                return CheckOutcome(name=self.name, status=HealthStatus.UP)
            else:
                error = CheckFailureError(self.name, "probe returned false")

        logger.warning("Dependency check failed", check=self.name, detail=error.message)
        return CheckOutcome(
            name=self.name,
            status=HealthStatus.DOWN,
            error_detail=error.message,
        )
