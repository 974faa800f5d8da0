"""Per-container collection and the full collection cycle.

A cycle lists every container the runtime knows about and, one container
at a time, reads its cgroup I/O accounting and renders it. Containers are
processed sequentially so output order is deterministic for a given
container list.

Failure scopes:
- A container without a display name is skipped silently.
- Any ContainerCollectionError drops that container's samples, is logged,
  and the cycle continues.
- EnumerationError (the runtime could not list containers) fails the cycle.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from docker_io_reporter.core.config import HostPaths, ReporterConfig
from docker_io_reporter.core.constants import IO_PRESSURE_FILE, IO_STAT_FILE
from docker_io_reporter.core.errors import (
    ContainerCollectionError,
    ContainerNameError,
    InspectionError,
)
from docker_io_reporter.monitoring.base import ContainerIdentity, MetricSample, MetricsBuffer
from docker_io_reporter.monitoring.cgroups import (
    cgroup_path_for_pid,
    parse_io_pressure,
    parse_io_stat,
    read_stat_file,
)
from docker_io_reporter.monitoring.devices import DeviceResolver
from docker_io_reporter.monitoring.docker_runtime import DockerRuntime, RuntimeAPI
from docker_io_reporter.monitoring.formatter import format_iopressure, format_iostat

logger = logging.getLogger(__name__)


def container_display_name(summary: Mapping[str, Any]) -> str:
    """Get the display name of a listed container.

    Docker reports names with a leading slash ("/web"); a single leading
    slash is stripped.

    Raises:
        ContainerNameError: If the container has no name
    """
    names = summary.get("Names") or []
    if not names or not names[0]:
        raise ContainerNameError("Container has no name")

    full_name = names[0]
    name = full_name[1:] if full_name.startswith("/") else full_name
    if not name:
        raise ContainerNameError("Container has no name")
    return name


class ContainerInspector:
    """Collects I/O samples for single containers.

    Args:
        runtime: Container runtime used to look up process ids
        paths: Host filesystem locations
    """

    def __init__(self, runtime: RuntimeAPI, paths: HostPaths | None = None) -> None:
        self._runtime = runtime
        self._paths = paths or HostPaths()
        self._devices = DeviceResolver(self._paths.device_registry)

    def _get_pid(self, name: str) -> int:
        inspected = self._runtime.inspect_container(name)
        state = inspected.get("State") or {}
        pid = state.get("Pid")
        # Docker reports Pid 0 for containers that are not running
        if not pid:
            raise InspectionError("Error reading container pid", container=name)
        return int(pid)

    def collect(self, identity: ContainerIdentity) -> list[MetricSample]:
        """Collect io.stat and io.pressure samples for one container.

        Nothing is returned for a container that fails partway through.

        Raises:
            ContainerCollectionError: Any per-container failure, tagged with
                the container name
        """
        name = identity.name
        try:
            pid = self._get_pid(name)
            logger.debug(f"Container {name} state PID: {pid}")

            cgroup_path = cgroup_path_for_pid(
                pid, proc_root=self._paths.proc_root, cgroup_root=self._paths.cgroup_root
            )

            iostat = read_stat_file(cgroup_path, IO_STAT_FILE)
            iopressure = read_stat_file(cgroup_path, IO_PRESSURE_FILE)

            samples = format_iostat(name, parse_io_stat(iostat), self._devices.resolve)
            samples.extend(format_iopressure(name, parse_io_pressure(iopressure)))
        except ContainerCollectionError as e:
            if e.container is None:
                e.container = name
            raise

        return samples


def collect_for_container(
    identity: ContainerIdentity, runtime: RuntimeAPI, paths: HostPaths | None = None
) -> list[MetricSample]:
    """Collect samples for one container. See ContainerInspector.collect."""
    return ContainerInspector(runtime, paths).collect(identity)


def collect_all(runtime: RuntimeAPI, paths: HostPaths | None = None) -> MetricsBuffer:
    """Run one full collection cycle.

    Args:
        runtime: Container runtime to enumerate and inspect
        paths: Host filesystem locations

    Returns:
        A fresh buffer holding the samples of every container that succeeded

    Raises:
        EnumerationError: If the runtime cannot list containers
    """
    buffer = MetricsBuffer()
    inspector = ContainerInspector(runtime, paths)

    containers = runtime.list_containers()
    failed = 0
    for summary in containers:
        try:
            identity = ContainerIdentity(name=container_display_name(summary), summary=summary)
        except ContainerNameError:
            continue

        logger.debug(f"Container with name: {identity.name}")

        try:
            buffer.extend(inspector.collect(identity))
        except ContainerCollectionError as e:
            failed += 1
            logger.error(f"Error processing container: {e}")

    logger.debug(
        f"Collected {len(buffer)} samples from {len(containers)} containers ({failed} failed)"
    )
    return buffer


RuntimeFactory = Callable[[ReporterConfig], RuntimeAPI]


def docker_runtime_factory(config: ReporterConfig) -> RuntimeAPI:
    """Connect to the Docker daemon named by the configuration."""
    return DockerRuntime.from_env(config.docker_base_url, config.docker_timeout)


def run_cycle(
    config: ReporterConfig, runtime_factory: RuntimeFactory = docker_runtime_factory
) -> MetricsBuffer:
    """Connect to the runtime, run one collection cycle and disconnect.

    Every call opens its own runtime connection; nothing is shared between
    cycles.

    Raises:
        EnumerationError: If the runtime is unreachable or cannot list containers
    """
    runtime = runtime_factory(config)
    try:
        return collect_all(runtime, config.paths)
    finally:
        runtime.close()
