"""Shared fixtures: a fake host tree and a fake container runtime."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import pytest

from docker_io_reporter.core.config import HostPaths, ReporterConfig
from docker_io_reporter.core.errors import EnumerationError, InspectionError


class FakeHost:
    """Builds /proc, cgroup and /sys/dev/block trees under a temp dir."""

    def __init__(self, root: Path) -> None:
        self.paths = HostPaths(
            proc_root=root / "proc",
            cgroup_root=root / "cgroup",
            device_registry=root / "dev" / "block",
        )
        for path in (self.paths.proc_root, self.paths.cgroup_root, self.paths.device_registry):
            path.mkdir(parents=True)

    def add_device(self, major_minor: str, name: str) -> None:
        target = f"../../devices/pci0000:00/0000:00:1f.2/block/{name}"
        os.symlink(target, self.paths.device_registry / major_minor)

    def add_process(self, pid: int, cgroup_content: str) -> None:
        proc_dir = self.paths.proc_root / str(pid)
        proc_dir.mkdir()
        (proc_dir / "cgroup").write_text(cgroup_content)

    def add_container(
        self,
        pid: int,
        io_stat: str | None = "",
        io_pressure: str | None = "",
        scope: str | None = None,
    ) -> Path:
        scope = scope or f"system.slice/docker-{pid}.scope"
        self.add_process(pid, f"0::/{scope}\n")
        cgroup_dir = self.paths.cgroup_root / scope
        cgroup_dir.mkdir(parents=True)
        if io_stat is not None:
            (cgroup_dir / "io.stat").write_text(io_stat)
        if io_pressure is not None:
            (cgroup_dir / "io.pressure").write_text(io_pressure)
        return cgroup_dir


class FakeRuntime:
    """In-memory RuntimeAPI: container name -> pid (None for no pid)."""

    def __init__(self, containers: dict[str, int | None] | None = None) -> None:
        self.containers = dict(containers or {})
        self.extra_summaries: list[dict[str, Any]] = []
        self.list_error: Exception | None = None
        self.closed = False

    def list_containers(self) -> list[dict[str, Any]]:
        if self.list_error is not None:
            raise self.list_error
        summaries = [{"Names": [f"/{name}"]} for name in self.containers]
        return summaries + self.extra_summaries

    def inspect_container(self, name: str) -> dict[str, Any]:
        if name not in self.containers:
            raise InspectionError("No such container", container=name)
        pid = self.containers[name]
        return {"State": {"Pid": 0 if pid is None else pid}}

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_host(tmp_path: Path) -> FakeHost:
    return FakeHost(tmp_path / "host")


@pytest.fixture
def fake_runtime() -> FakeRuntime:
    return FakeRuntime()


@pytest.fixture
def reporter_config(fake_host: FakeHost) -> ReporterConfig:
    return ReporterConfig(paths=fake_host.paths)


@pytest.fixture
def failing_runtime() -> FakeRuntime:
    runtime = FakeRuntime()
    runtime.list_error = EnumerationError("Cannot connect to Docker")
    return runtime
