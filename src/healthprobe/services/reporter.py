"""Builds the liveness, readiness and composite health documents."""

from datetime import datetime, timezone

from healthprobe.core.exceptions import HandlerFailureError
from healthprobe.models.health import HealthStatus, ProbeKind, ProbeResult
from healthprobe.services.aggregator import ReadinessAggregator
from healthprobe.services.process_info import ProcessInfo
from healthprobe.utils.logging import get_logger

logger = get_logger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class HealthReporter:
    """Read-only view over the aggregator plus process metadata.

    None of the three reports raises: failures in building a document are
    turned into a DOWN result carrying the error message.
    """

    def __init__(
        self,
        service: str,
        version: str,
        aggregator: ReadinessAggregator,
        process_info: ProcessInfo | None = None,
    ) -> None:
        self.service = service
        self.version = version
        self.aggregator = aggregator
        self.process_info = process_info or ProcessInfo()

    def liveness(self) -> ProbeResult:
        """UP whenever this code runs; DOWN only if the response cannot be built."""
        try:
            return ProbeResult(
                status=HealthStatus.UP,
                timestamp=_now(),
                service=self.service,
                check=ProbeKind.LIVENESS,
            )
        except Exception as e:
            return self._failure(ProbeKind.LIVENESS, e)

    async def readiness(self) -> ProbeResult:
        """Readiness verdict with the per-check breakdown."""
        try:
            verdict = await self.aggregator.evaluate()
            return ProbeResult(
                status=verdict.status,
                timestamp=_now(),
                service=self.service,
                check=ProbeKind.READINESS,
                checks=verdict.checks,
            )
        except Exception as e:
            return self._failure(ProbeKind.READINESS, e)

    async def report(self) -> ProbeResult:
        """Composite health: readiness plus version, uptime and memory."""
        result = ProbeResult(
            status=HealthStatus.DOWN,
            timestamp=_now(),
            service=self.service,
            check=ProbeKind.HEALTH,
            version=self.version,
        )
        try:
            verdict = await self.aggregator.evaluate()
            result.checks = verdict.checks
            result.uptime = self.process_info.uptime()
            result.memory = self.process_info.memory()
            result.status = verdict.status
        except Exception as e:
            # Partial body: whatever was gathered before the failure stays.
            failure = self._wrap(ProbeKind.HEALTH, e)
            result.status = HealthStatus.DOWN
            result.error = failure.reason
        return result

    def _wrap(self, kind: ProbeKind, exc: Exception) -> HandlerFailureError:
        failure = exc if isinstance(exc, HandlerFailureError) else HandlerFailureError(kind.value, str(exc))
        logger.exception("Probe handler failed", check=kind.value, error=failure.reason)
        return failure

    def _failure(self, kind: ProbeKind, exc: Exception) -> ProbeResult:
        failure = self._wrap(kind, exc)
        return ProbeResult(
            status=HealthStatus.DOWN,
            timestamp=_now(),
            service=self.service,
            check=kind,
            error=failure.reason,
        )
