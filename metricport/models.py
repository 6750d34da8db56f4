"""Metric requests, values and snapshots."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from datetime import timedelta
from enum import Enum
import time
from types import MappingProxyType

Labels = Mapping[str, str]


def _freeze_labels(
    labels: Labels | Iterable[tuple[str, str]] | None = None,
) -> Labels:
    """Return a read-only copy of labels."""
    return MappingProxyType(dict(labels or {}))


class MetricType(str, Enum):
    """Kind of metric being recorded."""

    COUNTER = "counter"
    GAUGE = "gauge"
    HISTOGRAM = "histogram"
    TIMER = "timer"

    def __str__(self) -> str:
        """Return the lowercase type name."""
        return self.value


@dataclass(frozen=True, slots=True)
class HistogramBucket:
    """Histogram bucket with an inclusive upper bound."""

    upper_bound: float
    count: int


@dataclass(frozen=True, slots=True)
class ScalarValue:
    """A single observation or counter/gauge value."""

    value: float


@dataclass(frozen=True, slots=True)
class HistogramValue:
    """A distribution of observations.

    The highest bucket bound represents +infinity and catches every
    observation above the previous bound.
    """

    sum: float
    count: int
    buckets: tuple[HistogramBucket, ...] = ()

    @property
    def mean(self) -> float | None:
        """Return sum / count, discarding the shape of the distribution."""
        if self.count == 0:
            return None
        return self.sum / self.count


MetricValue = ScalarValue | HistogramValue


@dataclass(frozen=True, slots=True)
class MetricRequest:
    """Represent a single metric occurrence handed to an adapter.

    Requests are built with the named constructors and never mutated;
    the ``with_*`` steps return new requests.
    """

    name: str
    metric_type: MetricType
    value: MetricValue
    labels: Labels = field(default_factory=_freeze_labels)
    help: str | None = None
    timestamp: int = field(default_factory=time.time_ns)

    def __post_init__(self) -> None:
        """Store labels read-only."""
        object.__setattr__(self, "labels", _freeze_labels(self.labels))

    @classmethod
    def counter(cls, name: str, value: float) -> MetricRequest:
        """Create a counter increment."""
        return cls(name, MetricType.COUNTER, ScalarValue(value))

    @classmethod
    def gauge(cls, name: str, value: float) -> MetricRequest:
        """Create a gauge reading."""
        return cls(name, MetricType.GAUGE, ScalarValue(value))

    @classmethod
    def histogram(cls, name: str, value: float) -> MetricRequest:
        """Create a single histogram observation."""
        return cls(name, MetricType.HISTOGRAM, ScalarValue(value))

    @classmethod
    def distribution(
        cls,
        name: str,
        sum_: float,
        count: int,
        buckets: Iterable[HistogramBucket | tuple[float, int]],
    ) -> MetricRequest:
        """Create a histogram request carrying a full distribution."""
        return cls(
            name,
            MetricType.HISTOGRAM,
            HistogramValue(
                sum_,
                count,
                tuple(
                    bucket
                    if isinstance(bucket, HistogramBucket)
                    else HistogramBucket(*bucket)
                    for bucket in buckets
                ),
            ),
        )

    @classmethod
    def timer(cls, name: str, duration: float | timedelta) -> MetricRequest:
        """Create a duration observation in seconds."""
        if isinstance(duration, timedelta):
            duration = duration.total_seconds()
        return cls(name, MetricType.TIMER, ScalarValue(duration))

    def with_label(self, key: str, value: str) -> MetricRequest:
        """Return a copy with an additional label."""
        return replace(self, labels=_freeze_labels({**self.labels, key: value}))

    def with_labels(
        self,
        labels: Labels | Iterable[tuple[str, str]],
    ) -> MetricRequest:
        """Return a copy with additional labels."""
        merged = dict(self.labels)
        merged.update(labels)
        return replace(self, labels=_freeze_labels(merged))

    def with_help(self, help_text: str) -> MetricRequest:
        """Return a copy with help text."""
        return replace(self, help=help_text)


@dataclass(frozen=True, slots=True)
class MetricSnapshot:
    """Recorded copy of a metric, retained by an adapter for inspection."""

    name: str
    metric_type: MetricType
    value: MetricValue
    labels: Labels = field(default_factory=_freeze_labels)
    help: str | None = None
    timestamp: int = field(default_factory=time.time_ns)

    def __post_init__(self) -> None:
        """Store labels read-only."""
        object.__setattr__(self, "labels", _freeze_labels(self.labels))

    @classmethod
    def from_request(cls, request: MetricRequest) -> MetricSnapshot:
        """Copy every field of a request."""
        return cls(
            name=request.name,
            metric_type=request.metric_type,
            value=request.value,
            labels=request.labels,
            help=request.help,
            timestamp=request.timestamp,
        )

    def with_help(self, help_text: str) -> MetricSnapshot:
        """Return a copy with help text."""
        return replace(self, help=help_text)
