"""Shared constants for the Docker IO reporter."""

from __future__ import annotations

from pathlib import Path

# Metric name prefixes; the raw io.stat / io.pressure key is appended as-is.
IOSTAT_METRIC_PREFIX = "docker_iostat_"
IOPRESSURE_METRIC_PREFIX = "docker_iopressure_"

# /proc/<pid>/cgroup on a cgroup v2 only host is a single line "0::/<path>"
UNIFIED_HIERARCHY_MARKER = "0::/"

DEFAULT_PROC_ROOT = Path("/proc")
DEFAULT_CGROUP_ROOT = Path("/sys/fs/cgroup")
DEFAULT_DEVICE_REGISTRY = Path("/sys/dev/block")

IO_STAT_FILE = "io.stat"
IO_PRESSURE_FILE = "io.pressure"

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 9100

CONTENT_TYPE = "text/plain"

# Environment overrides for the CLI
ENV_HOST = "DOCKER_IO_REPORTER_IP"
ENV_PORT = "DOCKER_IO_REPORTER_PORT"
ENV_CONFIG = "DOCKER_IO_REPORTER_CONFIG"
ENV_LOG_LEVEL = "DOCKER_IO_REPORTER_LOG_LEVEL"
