"""File and stdout output for one-shot collection.

Atomic mode writes ``<name>.atomic`` next to the destination and renames it
over the destination only once everything has been written, so readers
never see a half-written file.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import TextIO

from docker_io_reporter.core.config import ReporterConfig
from docker_io_reporter.monitoring.collector import (
    RuntimeFactory,
    docker_runtime_factory,
    run_cycle,
)

logger = logging.getLogger(__name__)

ATOMIC_SUFFIX = ".atomic"


def atomic_temp_path(path: Path) -> Path:
    """Sibling path used while writing ``path`` atomically."""
    return path.with_name(f"{path.name}{ATOMIC_SUFFIX}")


def write_output(
    text: str,
    path: Path | None = None,
    atomic: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Write rendered metrics to a file or a stream.

    Args:
        text: Rendered metrics
        path: Destination file; None writes to ``stream``
        atomic: Write to a sibling temp file and rename it over ``path``
        stream: Stream used when no path is given (default: stdout)

    Raises:
        ValueError: If atomic is requested without a path
        OSError: If the file cannot be written or renamed
    """
    if path is None:
        if atomic:
            raise ValueError("Atomic output requires a path")
        out = stream if stream is not None else sys.stdout
        out.write(text)
        out.flush()
        return

    path = Path(path)
    target = atomic_temp_path(path) if atomic else path
    try:
        with open(target, "w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            if atomic:
                os.fsync(f.fileno())
        if atomic:
            os.replace(target, path)
            logger.debug(f"Atomically replaced {path}")
    except OSError:
        if atomic:
            target.unlink(missing_ok=True)
        raise


def save_stats(
    config: ReporterConfig,
    path: Path | None = None,
    atomic: bool = False,
    runtime_factory: RuntimeFactory = docker_runtime_factory,
    stream: TextIO | None = None,
) -> int:
    """Run one collection cycle and write its output.

    Collection finishes before the destination is touched, so a failed
    cycle leaves an existing file unchanged.

    Returns:
        Number of samples written

    Raises:
        EnumerationError: If the container runtime cannot list containers
    """
    buffer = run_cycle(config, runtime_factory)
    write_output(buffer.render(), path=path, atomic=atomic, stream=stream)
    logger.debug(f"Wrote {len(buffer)} samples to {path or 'stdout'}")
    return len(buffer)
