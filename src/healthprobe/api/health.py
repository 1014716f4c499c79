"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from healthprobe.core.dependencies import HealthReporterDep, SettingsDep
from healthprobe.models.health import HealthStatus, ProbeKind, ProbeResult
from healthprobe.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Health"])


def _respond(result: ProbeResult, service: str) -> JSONResponse:
    """Serialize a probe result, falling back to a minimal 503 body."""
    try:
        return JSONResponse(status_code=result.http_status, content=result.to_body())
    except Exception as e:
        logger.exception("Failed to serialize probe response", check=str(result.check))
        return JSONResponse(
            status_code=503,
            content={
                "status": HealthStatus.DOWN.value,
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "service": service,
                "check": ProbeKind(result.check).value,
                "error": str(e),
            },
        )


@router.get("/live", response_model=ProbeResult)
async def liveness_check(reporter: HealthReporterDep, settings: SettingsDep) -> JSONResponse:
    """
    Liveness probe.

    UP whenever the process can serve this request, regardless of
    dependencies. Used by orchestrators to decide whether to restart.
    """
    return _respond(reporter.liveness(), settings.service_name)


@router.get("/ready", response_model=ProbeResult)
async def readiness_check(reporter: HealthReporterDep, settings: SettingsDep) -> JSONResponse:
    """
    Readiness probe.

    UP only after warm-up and when every dependency check passes; 503 with
    the per-check breakdown otherwise.
    """
    return _respond(await reporter.readiness(), settings.service_name)


@router.get("", response_model=ProbeResult)
async def health_check(reporter: HealthReporterDep, settings: SettingsDep) -> JSONResponse:
    """
    Composite health.

    Readiness plus version, uptime in seconds and memory in megabytes.
    """
    return _respond(await reporter.report(), settings.service_name)
