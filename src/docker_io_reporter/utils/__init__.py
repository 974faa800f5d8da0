"""Utils module - logging helpers."""

from __future__ import annotations

from docker_io_reporter.utils.logging import get_logger, setup_logging

__all__ = ["setup_logging", "get_logger"]
