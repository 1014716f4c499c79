"""
healthprobe Custom Exceptions

Defines application-specific exceptions for consistent error handling.
"""

from typing import Any


class HealthProbeError(Exception):
    """Base exception for all healthprobe errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(HealthProbeError):
    """Raised when there's a configuration problem."""

    pass


class InvalidCheckError(ConfigurationError):
    """Raised when a dependency check is declared with invalid parameters."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(
            f"Invalid dependency check {name!r}: {reason}",
            details={"name": name, "reason": reason},
        )
        self.name = name
        self.reason = reason


class DuplicateCheckError(ConfigurationError):
    """Raised when two dependency checks share the same name."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Dependency check registered twice: {name}",
            details={"name": name},
        )
        self.name = name


# =============================================================================
# Check Errors
# =============================================================================


class CheckError(HealthProbeError):
    """Base exception for dependency check failures.

    These never leave a DependencyCheck; they only describe why an outcome
    is DOWN.
    """

    pass


class CheckTimeoutError(CheckError):
    """Raised when a probe does not resolve within its timeout."""

    def __init__(self, name: str, timeout: float) -> None:
        super().__init__(
            f"timeout after {round(timeout * 1000)}ms",
            details={"name": name, "timeout": timeout},
        )
        self.name = name
        self.timeout = timeout


class CheckFailureError(CheckError):
    """Raised when a probe resolves false or raises."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(reason, details={"name": name, "reason": reason})
        self.name = name
        self.reason = reason


# =============================================================================
# Handler Errors
# =============================================================================


class HandlerFailureError(HealthProbeError):
    """Raised when a probe response cannot be built or serialized."""

    def __init__(self, check: str, reason: str) -> None:
        super().__init__(
            f"Failed to build {check} response: {reason}",
            details={"check": check, "reason": reason},
        )
        self.check = check
        self.reason = reason
