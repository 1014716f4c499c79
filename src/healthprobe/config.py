"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ServiceProfile = Literal["admin-api", "admin-ui", "user-api", "user-ui"]

API_PROFILES: frozenset[str] = frozenset({"admin-api", "user-api"})
UI_PROFILES: frozenset[str] = frozenset({"admin-ui", "user-ui"})


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="HEALTHPROBE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    env: Literal["development", "production", "testing"] = "production"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    json_logs: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # Service identity
    service_profile: ServiceProfile = "user-api"
    service_name: str = Field(default="", description="Reported service name (defaults to the profile)")
    service_version: str = Field(default="", description="Reported version (defaults to the package version)")

    # Warm-up
    warmup_grace_seconds: float = Field(
        default=2.0, ge=0.0, le=600.0, description="Seconds after start before readiness can be UP"
    )

    # Backend API (UI profiles)
    backend_url: str = "http://localhost:3001"
    backend_timeout_seconds: float = Field(default=3.0, gt=0.0, le=60.0)

    # Storage (API profiles)
    storage_dsn: str | None = Field(default=None, description="SQLAlchemy async DSN")
    storage_timeout_seconds: float = Field(default=2.0, gt=0.0, le=60.0)

    # Static assets (UI profiles)
    static_dir: Path | None = None

    @model_validator(mode="after")
    def fill_identity_defaults(self) -> "Settings":
        """Default the reported name and version when left empty."""
        if not self.service_name:
            self.service_name = self.service_profile
        if not self.service_version:
            from healthprobe import __version__

            self.service_version = __version__
        return self

    @property
    def is_api(self) -> bool:
        """Whether this instance runs one of the API services."""
        return self.service_profile in API_PROFILES

    @property
    def is_ui(self) -> bool:
        """Whether this instance runs one of the UI services."""
        return self.service_profile in UI_PROFILES


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
