"""Block device name resolution.

/sys/dev/block holds one symlink per block device, named after its
major:minor pair and pointing into the device tree:

    /sys/dev/block/8:0 -> ../../devices/pci0000:00/.../block/sda
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from docker_io_reporter.core.constants import DEFAULT_DEVICE_REGISTRY
from docker_io_reporter.core.errors import DeviceResolutionError

logger = logging.getLogger(__name__)


class DeviceResolver:
    """Resolves major:minor identifiers to device names such as ``sda``."""

    def __init__(self, registry: Path = DEFAULT_DEVICE_REGISTRY) -> None:
        self._registry = Path(registry)

    def resolve(self, major_minor: str) -> str:
        """Resolve a major:minor identifier to its device name.

        Args:
            major_minor: First token of an io.stat line, e.g. "254:0"

        Returns:
            Final path component of the registry link target

        Raises:
            DeviceResolutionError: If the link is missing or unreadable, or
                its target has no usable final component
        """
        link = self._registry / major_minor
        try:
            target = Path(os.readlink(link))
        except OSError as e:
            raise DeviceResolutionError(
                f"Cannot read device link {link}: {e}", device=major_minor
            ) from e

        name = target.name
        if not name or name in (".", ".."):
            raise DeviceResolutionError(
                f"Device link {link} -> {target} has no device name", device=major_minor
            )

        try:
            name.encode("utf-8")
        except UnicodeEncodeError as e:
            raise DeviceResolutionError(
                f"Device name behind {link} is not valid text", device=major_minor
            ) from e

        logger.debug(f"Resolved device {major_minor} to {name}")
        return name


def resolve_device_name(major_minor: str, registry: Path = DEFAULT_DEVICE_REGISTRY) -> str:
    """Resolve a major:minor identifier against the given registry."""
    return DeviceResolver(registry).resolve(major_minor)
