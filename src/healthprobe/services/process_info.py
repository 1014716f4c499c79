"""Process uptime and memory accessors."""

import time

import psutil

from healthprobe.models.health import MemoryUsage
from healthprobe.services.warmup import Clock

BYTES_PER_MB = 1024 * 1024


class ProcessInfo:
    """Reads uptime and memory for the running process."""

    def __init__(self, clock: Clock | None = None, process: psutil.Process | None = None) -> None:
        self._process = process or psutil.Process()
        if clock is None:
            # Wall clock against the OS-reported process start
            self._clock: Clock = time.time
            self._started_at = self._process.create_time()
        else:
            self._clock = clock
            self._started_at = clock()

    def uptime(self) -> float:
        """Seconds since the process started (since construction with an injected clock)."""
        return self._clock() - self._started_at

    def memory(self) -> MemoryUsage:
        """Resident memory as used, virtual size as total, rounded to whole MB."""
        info = self._process.memory_info()
        used = round(info.rss / BYTES_PER_MB)
        total = round(info.vms / BYTES_PER_MB)
        return MemoryUsage(used=used, total=max(used, total))
