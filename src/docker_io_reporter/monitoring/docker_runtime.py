"""Container runtime access through the Docker SDK.

Only two calls are needed: list containers and inspect one. Both go through
the low-level API client so results are plain dicts and no container model
objects are built per scrape.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

import docker
from docker.errors import DockerException
from requests.exceptions import RequestException

from docker_io_reporter.core.errors import EnumerationError, InspectionError

logger = logging.getLogger(__name__)


class RuntimeAPI(Protocol):
    """What the collector needs from a container runtime."""

    def list_containers(self) -> list[dict[str, Any]]: ...

    def inspect_container(self, name: str) -> dict[str, Any]: ...

    def close(self) -> None: ...


class DockerRuntime:
    """RuntimeAPI implementation backed by a Docker daemon.

    Example:
        ```python
        runtime = DockerRuntime.from_env()
        for summary in runtime.list_containers():
            print(summary["Names"])
        ```
    """

    def __init__(self, client: docker.DockerClient) -> None:
        self._client = client

    @classmethod
    def from_env(cls, base_url: str | None = None, timeout: int = 60) -> DockerRuntime:
        """Connect to the Docker daemon.

        Args:
            base_url: Daemon URL; None uses DOCKER_HOST and friends
            timeout: API call timeout in seconds

        Raises:
            EnumerationError: If the daemon cannot be reached
        """
        try:
            if base_url is None:
                client = docker.from_env(timeout=timeout)
            else:
                client = docker.DockerClient(base_url=base_url, timeout=timeout)
        except (DockerException, RequestException) as e:
            raise EnumerationError(f"Cannot connect to Docker: {e}") from e
        return cls(client)

    def list_containers(self) -> list[dict[str, Any]]:
        """List containers as summary dicts.

        Raises:
            EnumerationError: If the daemon call fails
        """
        try:
            return self._client.api.containers()
        except (DockerException, RequestException) as e:
            raise EnumerationError(f"Error listing containers: {e}") from e

    def inspect_container(self, name: str) -> dict[str, Any]:
        """Inspect a container by name.

        Raises:
            InspectionError: If the daemon call fails
        """
        try:
            return self._client.api.inspect_container(name)
        except (DockerException, RequestException) as e:
            raise InspectionError(f"Error inspecting container: {e}", container=name) from e

    def close(self) -> None:
        self._client.close()
