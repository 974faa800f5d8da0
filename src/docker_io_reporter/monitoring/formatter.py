"""Rendering of parsed accounting records into metric samples.

Output is stable and diffable: records keep file order, keys keep line
order, and labels are always ``device``/``type`` first, ``container`` second.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from docker_io_reporter.core.constants import IOPRESSURE_METRIC_PREFIX, IOSTAT_METRIC_PREFIX
from docker_io_reporter.monitoring.base import IoPressureRecord, IoStatRecord, MetricSample


def format_iostat(
    container_name: str,
    records: Iterable[IoStatRecord],
    resolve_device: Callable[[str], str],
) -> list[MetricSample]:
    """Render io.stat records, one sample per key.

    The device of each record is resolved exactly once. Resolution errors
    propagate to the caller.
    """
    samples: list[MetricSample] = []
    for record in records:
        device_name = resolve_device(record.device)
        labels = (("device", device_name), ("container", container_name))
        for key, value in record.fields.items():
            samples.append(MetricSample(f"{IOSTAT_METRIC_PREFIX}{key}", labels, value))
    return samples


def format_iopressure(
    container_name: str, records: Iterable[IoPressureRecord]
) -> list[MetricSample]:
    """Render io.pressure records, one sample per key."""
    samples: list[MetricSample] = []
    for record in records:
        labels = (("type", record.pressure_type), ("container", container_name))
        for key, value in record.fields.items():
            samples.append(MetricSample(f"{IOPRESSURE_METRIC_PREFIX}{key}", labels, value))
    return samples
