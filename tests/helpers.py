"""Test doubles for clocks and dependency probes."""

import asyncio

from healthprobe.services.dependency_check import DependencyCheck


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_check(name: str, result: bool | Exception = True, delay: float = 0.0, timeout: float = 1.0) -> DependencyCheck:
    """Build a check whose probe sleeps for `delay` then returns or raises `result`."""

    async def probe() -> bool:
        if delay:
            await asyncio.sleep(delay)
        if isinstance(result, Exception):
            raise result
        return result

    return DependencyCheck(name=name, probe=probe, timeout=timeout)


def hanging_check(name: str, timeout: float) -> DependencyCheck:
    """Build a check whose probe never resolves."""

    async def probe() -> bool:
        await asyncio.Event().wait()
        return True

    return DependencyCheck(name=name, probe=probe, timeout=timeout)
