"""cgroup v2 accounting file parsing.

Reads the two per-cgroup I/O accounting files:

- io.stat: one line per block device, ``MAJ:MIN key=value ...``
- io.pressure: one line per pressure type, ``some|full key=value ...``

Values are kept verbatim. A single malformed line rejects the whole file;
there is no line-level recovery.
"""

from __future__ import annotations

import logging
from pathlib import Path

from docker_io_reporter.core.constants import (
    DEFAULT_CGROUP_ROOT,
    DEFAULT_PROC_ROOT,
    UNIFIED_HIERARCHY_MARKER,
)
from docker_io_reporter.core.errors import (
    CgroupReadError,
    MalformedLineError,
    StatFileReadError,
    UnsupportedCgroupVersionError,
)
from docker_io_reporter.monitoring.base import IoPressureRecord, IoStatRecord

logger = logging.getLogger(__name__)


def _parse_keyed_lines(text: str, what: str) -> list[tuple[str, dict[str, str]]]:
    """Split each line into its leading token and its key=value pairs."""
    parsed: list[tuple[str, dict[str, str]]] = []
    for line_number, line in enumerate(text.splitlines(), start=1):
        tokens = line.split()
        if not tokens:
            # Empty lines are rejected rather than skipped
            raise MalformedLineError(f"Missing {what}", line=line, line_number=line_number)

        head, entries = tokens[0], tokens[1:]
        fields: dict[str, str] = {}
        for entry in entries:
            key, sep, value = entry.partition("=")
            if not sep:
                raise MalformedLineError(
                    f"Entry {entry!r} is not key=value", line=line, line_number=line_number
                )
            fields[key] = value
        parsed.append((head, fields))
    return parsed


def parse_io_stat(text: str) -> list[IoStatRecord]:
    """Parse io.stat content.

    Format (per device):
        8:0 rbytes=12345 wbytes=67890 rios=100 wios=50 dbytes=0 dios=0

    Raises:
        MalformedLineError: On an empty line or an entry without '='
    """
    return [
        IoStatRecord(device=device, fields=fields)
        for device, fields in _parse_keyed_lines(text, "device ID")
    ]


def parse_io_pressure(text: str) -> list[IoPressureRecord]:
    """Parse io.pressure content.

    Format:
        some avg10=0.00 avg60=0.00 avg300=0.00 total=12345
        full avg10=0.00 avg60=0.00 avg300=0.00 total=67890

    Raises:
        MalformedLineError: On an empty line or an entry without '='
    """
    return [
        IoPressureRecord(pressure_type=pressure_type, fields=fields)
        for pressure_type, fields in _parse_keyed_lines(text, "pressure type")
    ]


def cgroup_path_for_pid(
    pid: int,
    proc_root: Path = DEFAULT_PROC_ROOT,
    cgroup_root: Path = DEFAULT_CGROUP_ROOT,
) -> Path:
    """Find the cgroup directory of a process.

    On a cgroup v2 host /proc/<pid>/cgroup is the single line
    ``0::/<path relative to the cgroup mount>``.

    Raises:
        CgroupReadError: If the process cgroup file cannot be read
        UnsupportedCgroupVersionError: If the host is not on cgroup v2
    """
    cgroup_file = Path(proc_root) / str(pid) / "cgroup"
    try:
        content = cgroup_file.read_text()
    except (OSError, UnicodeDecodeError) as e:
        raise CgroupReadError(f"Error reading cgroup information from {cgroup_file}: {e}") from e

    if not content.startswith(UNIFIED_HIERARCHY_MARKER):
        raise UnsupportedCgroupVersionError(
            f"Error parsing {cgroup_file}. Are you sure you're on cgroup v2?"
        )

    relative = content[len(UNIFIED_HIERARCHY_MARKER) :].strip()
    logger.debug(f"Cgroup of pid {pid}: /{relative}")

    cgroup_path = Path(cgroup_root) / relative
    logger.debug(f"Full cgroup path: {cgroup_path}")
    return cgroup_path


def read_stat_file(cgroup_path: Path, filename: str) -> str:
    """Read one accounting file from a cgroup directory.

    Raises:
        StatFileReadError: If the file cannot be read
    """
    path = cgroup_path / filename
    try:
        return path.read_text()
    except (OSError, UnicodeDecodeError) as e:
        raise StatFileReadError(f"Error reading {path}: {e}") from e
