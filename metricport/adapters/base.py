"""Base metrics adapter interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Self, TypeVar

from ..health import HealthStatus
from ..models import Labels, MetricRequest, MetricSnapshot
from ..timer import TimerGuard

_ConfigT = TypeVar("_ConfigT")


class MetricsAdapter(ABC, Generic[_ConfigT]):
    """Abstract base class for metrics backends."""

    @classmethod
    @abstractmethod
    async def create(cls, config: _ConfigT) -> Self:
        """
        Validate backend configuration and return a ready adapter.

        Args:
            config: Backend specific configuration

        Raises:
            MetricsConfigError: If the configuration is invalid
        """

    @abstractmethod
    async def record(self, request: MetricRequest) -> None:
        """
        Record a metric.

        The request is validated before it's accepted. Once this returns,
        the metric is queued for the backend's delivery semantics.

        Args:
            request: Metric to record (e.g., MetricRequest.counter('http_requests', 1))

        Raises:
            MetricsValidationError: If name, labels or value are malformed
            MetricsRecordingError: If the backend failed to persist the metric
        """

    @abstractmethod
    def start_timer(self, name: str, labels: Labels | None = None) -> TimerGuard:
        """
        Start measuring a duration.

        Nothing is recorded until the returned guard is released.

        Args:
            name: Metric name (e.g., 'db.query.duration')
            labels: Optional labels for the recorded timer
        """

    @abstractmethod
    async def health_check(self) -> HealthStatus:
        """
        Report current backend health without touching stored metrics.

        Raises:
            MetricsHealthError: If the backend failed while checking
        """

    async def get_snapshot(self) -> list[MetricSnapshot]:
        """
        Return the metrics currently held by the backend.

        Backends without inspectable state return an empty list.
        """
        return []
