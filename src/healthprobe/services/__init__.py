"""healthprobe services."""

from healthprobe.services.aggregator import ReadinessAggregator
from healthprobe.services.dependency_check import DependencyCheck
from healthprobe.services.process_info import ProcessInfo
from healthprobe.services.registry import CheckRegistry
from healthprobe.services.reporter import HealthReporter
from healthprobe.services.warmup import WarmupGate

__all__ = [
    "CheckRegistry",
    "DependencyCheck",
    "HealthReporter",
    "ProcessInfo",
    "ReadinessAggregator",
    "WarmupGate",
]
