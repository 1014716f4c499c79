"""Readiness aggregation over the registered dependency checks."""

import asyncio

from healthprobe.models.health import CheckOutcome, HealthStatus, ReadinessVerdict
from healthprobe.services.registry import CheckRegistry
from healthprobe.services.warmup import WarmupGate
from healthprobe.utils.logging import LoggerMixin


class ReadinessAggregator(LoggerMixin):
    """Combines the warm-up gate with every dependency check.

    The verdict is UP only when the gate is open and every check is UP.
    There is no quorum and no retry: a single DOWN check, timeouts included,
    makes the service not ready for this evaluation.
    """

    def __init__(self, registry: CheckRegistry, gate: WarmupGate) -> None:
        self.registry = registry
        self.gate = gate

    async def evaluate(self) -> ReadinessVerdict:
        """Run all checks concurrently and reduce them to one verdict."""
        results = await asyncio.gather(*(check.run() for check in self.registry))
        outcomes: dict[str, CheckOutcome] = {outcome.name: outcome for outcome in results}

        warmed_up = self.gate.is_open()
        ready = warmed_up and all(outcome.is_up for outcome in results)
        verdict = ReadinessVerdict(
            status=HealthStatus.from_bool(ready),
            warmed_up=warmed_up,
            outcomes=outcomes,
        )

        if not ready:
            self.logger.info(
                "Service not ready",
                warmed_up=warmed_up,
                warmup_remaining=round(self.gate.remaining(), 3),
                failures=verdict.failures,
            )
        return verdict
