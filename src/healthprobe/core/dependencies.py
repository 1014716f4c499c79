"""
healthprobe FastAPI Dependencies

Provides dependency injection functions for FastAPI routes.
"""

from typing import Annotated

from fastapi import Depends, Request

from healthprobe.config import Settings
from healthprobe.services.reporter import HealthReporter


def get_app_settings(request: Request) -> Settings:
    """Get the settings the app was created with."""
    return request.app.state.settings


SettingsDep = Annotated[Settings, Depends(get_app_settings)]


def get_health_reporter(request: Request) -> HealthReporter:
    """Get the health reporter from app state."""
    return request.app.state.health_reporter


HealthReporterDep = Annotated[HealthReporter, Depends(get_health_reporter)]
