"""Delivery module - HTTP and file/stdout output of collected metrics."""

from __future__ import annotations

from docker_io_reporter.delivery.server import create_app, serve
from docker_io_reporter.delivery.sinks import atomic_temp_path, save_stats, write_output

__all__ = ["atomic_temp_path", "create_app", "save_stats", "serve", "write_output"]
