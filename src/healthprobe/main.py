"""healthprobe - Probe Server Main Application."""

from collections.abc import Iterable
from contextlib import asynccontextmanager
from typing import AsyncGenerator
from uuid import uuid4

import httpx
import uvicorn
from fastapi import FastAPI, Request, Response
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from healthprobe import __version__
from healthprobe.api.router import api_router
from healthprobe.config import Settings, get_settings
from healthprobe.services.aggregator import ReadinessAggregator
from healthprobe.services.checks import profile_checks
from healthprobe.services.dependency_check import DependencyCheck
from healthprobe.services.process_info import ProcessInfo
from healthprobe.services.registry import CheckRegistry
from healthprobe.services.reporter import HealthReporter
from healthprobe.services.warmup import Clock, WarmupGate
from healthprobe.utils.logging import get_logger, probe_request_context, setup_logging

logger = get_logger(__name__)


def _create_engine(settings: Settings) -> AsyncEngine | None:
    """Storage engine for API profiles, None when no DSN is configured."""
    if not settings.is_api or not settings.storage_dsn:
        return None
    return create_async_engine(settings.storage_dsn)


def create_app(
    settings: Settings | None = None,
    checks: Iterable[DependencyCheck] | None = None,
    clock: Clock | None = None,
) -> FastAPI:
    """Create and configure the probe server.

    Args:
        settings: Settings to use instead of the cached environment settings
        checks: Dependency checks to register instead of the profile's checks
        clock: Monotonic clock for the warm-up gate and uptime
    """
    settings = settings or get_settings()
    extra_checks = list(checks) if checks is not None else None

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        setup_logging(settings.log_level, json_logs=settings.json_logs)
        logger.info(
            "Starting probe server",
            service=settings.service_name,
            profile=settings.service_profile,
            env=settings.env,
        )

        http_client: httpx.AsyncClient | None = None
        engine: AsyncEngine | None = None
        if extra_checks is None:
            if settings.is_ui:
                http_client = httpx.AsyncClient(timeout=settings.backend_timeout_seconds)
            engine = _create_engine(settings)
            registered = profile_checks(settings, http_client=http_client, engine=engine)
        else:
            registered = extra_checks

        # An injected clock drives both the gate and uptime
        timer_kwargs = {"clock": clock} if clock is not None else {}
        registry = CheckRegistry(registered)
        gate = WarmupGate(settings.warmup_grace_seconds, **timer_kwargs)
        aggregator = ReadinessAggregator(registry, gate)

        app.state.settings = settings
        app.state.health_reporter = HealthReporter(
            service=settings.service_name,
            version=settings.service_version,
            aggregator=aggregator,
            process_info=ProcessInfo(**timer_kwargs),
        )
        logger.info(
            "Probe server started",
            checks=registry.names,
            warmup_grace_seconds=gate.grace_seconds,
            evaluation_bound_seconds=registry.max_timeout,
        )

        yield

        logger.info("Shutting down probe server...")
        if http_client is not None:
            await http_client.aclose()
        if engine is not None:
            await engine.dispose()
        logger.info("Probe server shutdown complete")

    app = FastAPI(
        title=f"{settings.service_name} health",
        description="Liveness, readiness and composite health probes",
        version=__version__,
        docs_url="/api/docs" if settings.env != "production" else None,
        redoc_url=None,
        openapi_url="/api/openapi.json" if settings.env != "production" else None,
        lifespan=lifespan,
    )

    @app.middleware("http")
    async def request_context(request: Request, call_next) -> Response:
        with probe_request_context(
            service=settings.service_name,
            request_id=request.headers.get("x-request-id") or uuid4().hex,
            probe=request.url.path,
        ):
            return await call_next(request)

    app.include_router(api_router)

    return app


# Create app instance
app = create_app()


def main() -> None:
    """Main entry point for running the probe server."""
    settings = get_settings()

    uvicorn.run(
        "healthprobe.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
