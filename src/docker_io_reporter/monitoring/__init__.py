"""Monitoring module - cgroup v2 block I/O collection for Docker containers.

Pipeline pieces:
- cgroups: io.stat / io.pressure parsing and cgroup path lookup
- devices: major:minor to device name resolution
- formatter: rendering of records as metric samples
- docker_runtime: container enumeration and inspection
- collector: per-container collection and the full cycle
"""

from __future__ import annotations

from docker_io_reporter.monitoring.base import (
    ContainerIdentity,
    IoPressureRecord,
    IoStatRecord,
    MetricSample,
    MetricsBuffer,
)
from docker_io_reporter.monitoring.cgroups import (
    cgroup_path_for_pid,
    parse_io_pressure,
    parse_io_stat,
)
from docker_io_reporter.monitoring.collector import (
    ContainerInspector,
    collect_all,
    collect_for_container,
    container_display_name,
    run_cycle,
)
from docker_io_reporter.monitoring.devices import DeviceResolver, resolve_device_name
from docker_io_reporter.monitoring.docker_runtime import DockerRuntime, RuntimeAPI
from docker_io_reporter.monitoring.formatter import format_iopressure, format_iostat

__all__ = [
    "cgroup_path_for_pid",
    "collect_all",
    "collect_for_container",
    "container_display_name",
    "ContainerIdentity",
    "ContainerInspector",
    "DeviceResolver",
    "DockerRuntime",
    "format_iopressure",
    "format_iostat",
    "IoPressureRecord",
    "IoStatRecord",
    "MetricSample",
    "MetricsBuffer",
    "parse_io_pressure",
    "parse_io_stat",
    "resolve_device_name",
    "run_cycle",
    "RuntimeAPI",
]
