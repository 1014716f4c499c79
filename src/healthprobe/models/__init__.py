"""healthprobe data models."""

from healthprobe.models.health import (
    CheckOutcome,
    HealthStatus,
    MemoryUsage,
    ProbeKind,
    ProbeResult,
    ReadinessVerdict,
)

__all__ = [
    "CheckOutcome",
    "HealthStatus",
    "MemoryUsage",
    "ProbeKind",
    "ProbeResult",
    "ReadinessVerdict",
]
