"""Docker IO reporter - cgroup v2 block I/O metrics for Docker containers."""

from __future__ import annotations

from docker_io_reporter.core.config import HostPaths, ReporterConfig
from docker_io_reporter.monitoring.collector import collect_all

__version__ = "0.1.0"

__all__ = [
    "collect_all",
    "HostPaths",
    "ReporterConfig",
    "__version__",
]
