"""Health probe models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class HealthStatus(str, Enum):
    """Probe verdict."""

    UP = "UP"
    DOWN = "DOWN"

    @classmethod
    def from_bool(cls, ok: bool) -> "HealthStatus":
        return cls.UP if ok else cls.DOWN


class ProbeKind(str, Enum):
    """Which of the three probes produced a result."""

    LIVENESS = "liveness"
    READINESS = "readiness"
    HEALTH = "health"


class CheckOutcome(BaseModel):
    """Result of a single dependency check."""

    model_config = ConfigDict(frozen=True)

    name: str
    status: HealthStatus
    error_detail: str | None = None

    @property
    def is_up(self) -> bool:
        return self.status is HealthStatus.UP


class ReadinessVerdict(BaseModel):
    """Aggregated readiness over all registered checks and the warm-up gate."""

    model_config = ConfigDict(frozen=True)

    status: HealthStatus
    warmed_up: bool
    outcomes: dict[str, CheckOutcome] = Field(default_factory=dict)

    @property
    def checks(self) -> dict[str, HealthStatus]:
        """Per-check status breakdown, one entry per registered check."""
        return {name: outcome.status for name, outcome in self.outcomes.items()}

    @property
    def failures(self) -> dict[str, str]:
        """Error details of DOWN checks."""
        return {
            name: outcome.error_detail or "down"
            for name, outcome in self.outcomes.items()
            if not outcome.is_up
        }


class MemoryUsage(BaseModel):
    """Process memory in whole megabytes."""

    used: int = Field(ge=0)
    total: int = Field(ge=0)


class ProbeResult(BaseModel):
    """Body returned by /health/live, /health/ready and /health."""

    status: HealthStatus
    timestamp: str
    service: str
    check: ProbeKind
    checks: dict[str, HealthStatus] | None = None
    version: str | None = None
    uptime: float | None = None
    memory: MemoryUsage | None = None
    error: str | None = None

    @property
    def http_status(self) -> int:
        """200 when UP, 503 otherwise."""
        return 200 if self.status is HealthStatus.UP else 503

    def to_body(self) -> dict:
        """JSON body with unset optional fields omitted."""
        return self.model_dump(mode="json", exclude_none=True)
