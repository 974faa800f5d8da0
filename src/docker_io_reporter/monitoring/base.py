"""Data types shared by the collection pipeline.

Records keep values exactly as the kernel printed them. Nothing here parses
numbers, so a counter that overflows a float or a locale-specific decimal
is passed through to the scraper untouched.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ContainerIdentity:
    """A container as listed by the runtime, with its resolved display name."""

    name: str
    summary: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)


@dataclass
class IoStatRecord:
    """One line of io.stat.

    Example line:
        8:0 rbytes=12345 wbytes=67890 rios=100 wios=50 dbytes=0 dios=0
    """

    device: str  # major:minor, e.g. "8:0"
    fields: dict[str, str] = field(default_factory=dict)


@dataclass
class IoPressureRecord:
    """One line of io.pressure.

    Example line:
        some avg10=0.00 avg60=0.00 avg300=0.00 total=12345
    """

    pressure_type: str  # "some" or "full"
    fields: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class MetricSample:
    """A single exposition-format sample.

    Labels render in the order given. Label values are not escaped; device
    and container names cannot contain quotes, backslashes or newlines.
    """

    name: str
    labels: tuple[tuple[str, str], ...]
    value: str

    def render(self) -> str:
        label_text = ",".join(f'{key}="{value}"' for key, value in self.labels)
        return f"{self.name}{{{label_text}}} {self.value}\n"


class MetricsBuffer:
    """Append-only output of one collection cycle.

    Each cycle creates its own buffer, so concurrent cycles never share one.
    """

    def __init__(self) -> None:
        self._samples: list[MetricSample] = []

    def append(self, sample: MetricSample) -> None:
        self._samples.append(sample)

    def extend(self, samples: Iterable[MetricSample]) -> None:
        self._samples.extend(samples)

    def __iter__(self) -> Iterator[MetricSample]:
        return iter(self._samples)

    def __len__(self) -> int:
        return len(self._samples)

    def render(self) -> str:
        """Render every sample, in append order, as exposition text."""
        return "".join(sample.render() for sample in self._samples)
