"""Immutable registry of dependency checks."""

from collections.abc import Iterable, Iterator

from healthprobe.core.exceptions import DuplicateCheckError
from healthprobe.services.dependency_check import DependencyCheck


class CheckRegistry:
    """Ordered, read-only set of DependencyChecks built once at startup."""

    def __init__(self, checks: Iterable[DependencyCheck] = ()) -> None:
        self._checks: tuple[DependencyCheck, ...] = tuple(checks)
        seen: set[str] = set()
        for check in self._checks:
            if check.name in seen:
                raise DuplicateCheckError(check.name)
            seen.add(check.name)

    def __iter__(self) -> Iterator[DependencyCheck]:
        return iter(self._checks)

    def __len__(self) -> int:
        return len(self._checks)

    @property
    def names(self) -> list[str]:
        return [check.name for check in self._checks]

    @property
    def max_timeout(self) -> float:
        """Upper bound on one evaluation's wall-clock time."""
        return max((check.timeout for check in self._checks), default=0.0)
