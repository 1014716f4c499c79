"""Concrete dependency probes used by the four service profiles."""

import asyncio
from pathlib import Path

import httpx
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from healthprobe.config import Settings
from healthprobe.core.exceptions import ConfigurationError
from healthprobe.services.dependency_check import DependencyCheck

DATABASE_CHECK = "database"
BACKEND_CHECK = "backend_connectivity"
STATIC_ASSETS_CHECK = "static_assets"


def http_health_check(
    name: str,
    client: httpx.AsyncClient,
    url: str,
    timeout: float,
) -> DependencyCheck:
    """GET a downstream service's health endpoint; any non-2xx is DOWN."""

    async def probe() -> bool:
        response = await client.get(url, timeout=timeout)
        if not response.is_success:
            raise httpx.HTTPStatusError(
                f"{url} answered {response.status_code}",
                request=response.request,
                response=response,
            )
        return True

    return DependencyCheck(name=name, probe=probe, timeout=timeout)


def storage_check(name: str, engine: AsyncEngine, timeout: float) -> DependencyCheck:
    """Round-trip a trivial query over the storage connection pool."""

    async def probe() -> bool:
        async with engine.connect() as connection:
            await connection.execute(text("SELECT 1"))
        return True

    return DependencyCheck(name=name, probe=probe, timeout=timeout)


def static_assets_check(name: str, static_dir: Path, timeout: float = 1.0) -> DependencyCheck:
    """The UI build directory exists and has an index page."""

    def _exists() -> bool:
        return static_dir.is_dir() and (static_dir / "index.html").is_file()

    async def probe() -> bool:
        return await asyncio.to_thread(_exists)

    return DependencyCheck(name=name, probe=probe, timeout=timeout)


def profile_checks(
    settings: Settings,
    *,
    http_client: httpx.AsyncClient | None = None,
    engine: AsyncEngine | None = None,
) -> list[DependencyCheck]:
    """Checks registered for the configured service profile."""
    checks: list[DependencyCheck] = []

    if settings.is_api:
        if engine is None:
            raise ConfigurationError(
                f"{settings.service_profile} requires a storage DSN",
                details={"profile": settings.service_profile},
            )
        checks.append(storage_check(DATABASE_CHECK, engine, settings.storage_timeout_seconds))

    if settings.is_ui:
        if http_client is None:
            raise ConfigurationError(
                f"{settings.service_profile} requires an HTTP client",
                details={"profile": settings.service_profile},
            )
        url = f"{settings.backend_url.rstrip('/')}/health"
        checks.append(http_health_check(BACKEND_CHECK, http_client, url, settings.backend_timeout_seconds))
        if settings.static_dir is not None:
            checks.append(static_assets_check(STATIC_ASSETS_CHECK, settings.static_dir))

    return checks
