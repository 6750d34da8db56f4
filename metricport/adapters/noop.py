"""No-operation metrics adapter for zero overhead."""

from __future__ import annotations

from typing import Any, Self

from ..health import HealthStatus
from ..models import Labels, MetricRequest
from ..timer import TimerGuard
from ..validation import validate_metric_request
from .base import MetricsAdapter


def _discard(request: MetricRequest) -> None:
    """Drop a finished timer."""


class NoOpMetricsAdapter(MetricsAdapter[Any]):
    """No-operation metrics adapter with zero overhead."""

    @classmethod
    async def create(cls, config: Any = None) -> Self:
        """No-op adapters accept any configuration."""
        return cls()

    async def record(self, request: MetricRequest) -> None:
        """Validate and discard."""
        validate_metric_request(request)

    def start_timer(self, name: str, labels: Labels | None = None) -> TimerGuard:
        """Return a guard that records into nothing."""
        return TimerGuard(name, labels, _discard)

    async def health_check(self) -> HealthStatus:
        """No-op adapters are always healthy."""
        return HealthStatus.healthy("No-op metrics adapter")
