"""
healthprobe - Service Health Probes

Liveness, readiness and composite health reporting for the admin and
user services, with bounded-time dependency checks.
"""

from importlib.metadata import version

__version__ = version("healthprobe")
