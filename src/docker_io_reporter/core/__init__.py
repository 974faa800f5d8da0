"""Core module - configuration, constants and errors."""

from __future__ import annotations

from docker_io_reporter.core.config import HostPaths, ReporterConfig, load_config
from docker_io_reporter.core.errors import (
    CgroupReadError,
    ContainerCollectionError,
    ContainerNameError,
    DeviceResolutionError,
    EnumerationError,
    InspectionError,
    MalformedLineError,
    ReporterError,
    StatFileReadError,
    UnsupportedCgroupVersionError,
)

__all__ = [
    "CgroupReadError",
    "ContainerCollectionError",
    "ContainerNameError",
    "DeviceResolutionError",
    "EnumerationError",
    "HostPaths",
    "InspectionError",
    "load_config",
    "MalformedLineError",
    "ReporterConfig",
    "ReporterError",
    "StatFileReadError",
    "UnsupportedCgroupVersionError",
]
