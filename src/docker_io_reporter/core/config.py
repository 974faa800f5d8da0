"""Configuration models and loading.

Supports YAML and JSON configuration files with schema validation. Every
setting has a default, so a config file is optional.
"""

from __future__ import annotations

import json
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from docker_io_reporter.core.constants import (
    DEFAULT_CGROUP_ROOT,
    DEFAULT_DEVICE_REGISTRY,
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_PROC_ROOT,
)


class HostPaths(BaseModel):
    """Locations of the host kernel trees the reporter reads.

    Override these when the host's /proc and /sys are bind-mounted
    somewhere else, e.g. when running the reporter inside a container.
    """

    proc_root: Path = Field(default=DEFAULT_PROC_ROOT, description="procfs mount")
    cgroup_root: Path = Field(default=DEFAULT_CGROUP_ROOT, description="cgroup v2 mount")
    device_registry: Path = Field(
        default=DEFAULT_DEVICE_REGISTRY, description="Directory of major:minor block device links"
    )

    model_config = {"extra": "forbid"}


class ReporterConfig(BaseModel):
    """Complete reporter configuration.

    Attributes:
        host: Address the HTTP server binds to
        port: Port the HTTP server listens on
        docker_base_url: Docker daemon URL, None to use the DOCKER_HOST environment
        docker_timeout: Timeout in seconds for Docker API calls
        paths: Host filesystem locations
    """

    host: str = Field(default=DEFAULT_HOST, min_length=1)
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    docker_base_url: str | None = Field(default=None)
    docker_timeout: int = Field(default=60, ge=1)
    paths: HostPaths = Field(default_factory=HostPaths)

    model_config = {"extra": "forbid"}


def load_config(path: Path | str) -> ReporterConfig:
    """Load and validate a reporter configuration file.

    Args:
        path: Path to YAML or JSON configuration file

    Returns:
        Validated ReporterConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If file format is unsupported
        pydantic.ValidationError: If config is invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    suffix = path.suffix.lower()
    with open(path, encoding="utf-8") as f:
        if suffix in (".yaml", ".yml"):
            data = yaml.safe_load(f)
        elif suffix == ".json":
            data = json.load(f)
        else:
            raise ValueError(f"Unsupported config format: {suffix}. Use .yaml, .yml, or .json")

    # An empty YAML file loads as None
    return ReporterConfig.model_validate(data or {})
