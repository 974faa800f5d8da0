"""Exception hierarchy for the Docker IO reporter.

Two failure scopes exist:

- ``ContainerCollectionError`` and its subclasses abort collection for a
  single container. The orchestrator logs them and moves on.
- ``EnumerationError`` aborts a whole collection cycle, since without the
  container list there is nothing to report.

``ContainerNameError`` is neither: containers without a usable name are
skipped without being reported.
"""

from __future__ import annotations


class ReporterError(Exception):
    """Base class for all reporter errors."""


class EnumerationError(ReporterError):
    """The container runtime could not be reached or could not list containers."""


class ContainerNameError(ReporterError):
    """A container summary carries no usable display name."""


class ContainerCollectionError(ReporterError):
    """Collection failed for one container."""

    def __init__(self, message: str, container: str | None = None) -> None:
        super().__init__(message)
        self.container = container

    def __str__(self) -> str:
        message = super().__str__()
        if self.container:
            return f"{self.container}: {message}"
        return message


class InspectionError(ContainerCollectionError):
    """The runtime did not report a process id for the container."""


class CgroupReadError(ContainerCollectionError):
    """/proc/<pid>/cgroup could not be read."""


class UnsupportedCgroupVersionError(ContainerCollectionError):
    """The process cgroup file is not in cgroup v2 unified-hierarchy form."""


class StatFileReadError(ContainerCollectionError):
    """io.stat or io.pressure could not be read."""


class MalformedLineError(ContainerCollectionError):
    """A line of io.stat or io.pressure could not be parsed."""

    def __init__(self, message: str, line: str, line_number: int) -> None:
        super().__init__(f"{message} (line {line_number}: {line!r})")
        self.line = line
        self.line_number = line_number


class DeviceResolutionError(ContainerCollectionError):
    """A major:minor identifier could not be resolved to a device name."""

    def __init__(self, message: str, device: str) -> None:
        super().__init__(message)
        self.device = device
