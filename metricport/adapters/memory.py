"""In-memory metrics adapter for tests and examples."""

from __future__ import annotations

import asyncio
from collections import deque
from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields, replace
import logging
import random
import threading
from typing import Any, Self

import async_timeout

from ..const import (
    DEFAULT_MAX_STORED_METRICS,
    DEFAULT_SERVICE_NAME,
    TIMER_SETTLE_TIMEOUT,
)
from ..exceptions import (
    MetricsConfigError,
    MetricsError,
    MetricsHealthError,
    MetricsRecordingError,
    MetricsTimeoutError,
)
from ..health import HealthStatus
from ..models import Labels, MetricRequest, MetricSnapshot, MetricType
from ..timer import TimerGuard
from ..validation import format_labels, validate_metric_request
from .base import MetricsAdapter

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class InMemoryMetricsConfig:
    """Configuration for the in-memory adapter.

    failure_rate is the probability of a simulated failure for every
    record and health check while simulate_failures is set. seed makes
    those failures reproducible.
    """

    service_name: str = DEFAULT_SERVICE_NAME
    store_metrics: bool = True
    max_stored_metrics: int = DEFAULT_MAX_STORED_METRICS
    simulate_failures: bool = False
    failure_rate: float = 0.0
    seed: int | None = None

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> InMemoryMetricsConfig:
        """Build a config from a mapping of option names."""
        known = {option.name for option in fields(cls)}
        if unknown := sorted(set(options) - known):
            raise MetricsConfigError(", ".join(unknown), "Unknown option")
        return cls(**options)

    def with_storage(self, store: bool) -> InMemoryMetricsConfig:
        """Enable or disable keeping recorded metrics for inspection."""
        return replace(self, store_metrics=store)

    def with_max_stored(self, maximum: int) -> InMemoryMetricsConfig:
        """Set the maximum number of stored metrics."""
        return replace(self, max_stored_metrics=maximum)

    def with_failures(self, failure_rate: float) -> InMemoryMetricsConfig:
        """Enable failure simulation, clamping the rate into [0, 1]."""
        return replace(
            self,
            simulate_failures=failure_rate > 0,
            failure_rate=min(max(failure_rate, 0.0), 1.0),
        )

    def with_seed(self, seed: int | None) -> InMemoryMetricsConfig:
        """Seed the failure simulation."""
        return replace(self, seed=seed)

    def validate(self) -> None:
        """Raise MetricsConfigError on invalid settings."""
        for flag in ("store_metrics", "simulate_failures"):
            if not isinstance(getattr(self, flag), bool):
                raise MetricsConfigError(flag, "Expected true or false")
        if isinstance(self.failure_rate, bool) or not isinstance(
            self.failure_rate,
            int | float,
        ):
            raise MetricsConfigError("failure_rate", "Failure rate must be a number")
        if not 0.0 <= self.failure_rate <= 1.0:
            raise MetricsConfigError(
                "failure_rate",
                "Failure rate must be between 0.0 and 1.0",
            )
        if (
            not isinstance(self.max_stored_metrics, int)
            or isinstance(self.max_stored_metrics, bool)
            or self.max_stored_metrics < 1
        ):
            raise MetricsConfigError(
                "max_stored_metrics",
                "Maximum stored metrics must be greater than 0",
            )


class InMemoryMetricsAdapter(MetricsAdapter[InMemoryMetricsConfig]):
    """Metrics adapter keeping recorded metrics in memory.

    Stored metrics live in a bounded FIFO: once max_stored_metrics is
    reached, every new metric evicts the oldest one. Timers record
    asynchronously after their guard is released, use wait_for_timers
    before asserting on them.
    """

    def __init__(self, config: InMemoryMetricsConfig | None = None) -> None:
        """Initialize in-memory adapter."""
        config = config or InMemoryMetricsConfig()
        config.validate()

        self._config = config
        self._rng = random.Random(config.seed)
        # Guards _stored and _health, never held across an await.
        self._lock = threading.Lock()
        self._stored: deque[MetricSnapshot] = deque(maxlen=config.max_stored_metrics)
        self._health = HealthStatus.healthy()
        self._pending_timers: set[asyncio.Task[None]] = set()

    @classmethod
    async def create(cls, config: InMemoryMetricsConfig | None = None) -> Self:
        """Create an adapter from a validated configuration."""
        adapter = cls(config)
        _LOGGER.info(
            "In-memory metrics adapter ready for %s (max stored %d)",
            adapter.config.service_name,
            adapter.config.max_stored_metrics,
        )
        return adapter

    @property
    def config(self) -> InMemoryMetricsConfig:
        """Return adapter configuration."""
        return self._config

    @property
    def metrics_count(self) -> int:
        """Return count of stored metrics."""
        with self._lock:
            return len(self._stored)

    def _should_fail(self) -> bool:
        """Draw from the simulation RNG."""
        if not self._config.simulate_failures:
            return False
        return self._rng.random() < self._config.failure_rate

    async def record(self, request: MetricRequest) -> None:
        """Validate and store a metric."""
        self._store(request)

    def _store(self, request: MetricRequest) -> None:
        """Run failure simulation and validation, then store request."""
        if self._should_fail():
            raise MetricsRecordingError(request.name, "Simulated recording failure")

        validate_metric_request(request)

        if not self._config.store_metrics:
            return

        snapshot = MetricSnapshot.from_request(request)
        with self._lock:
            if len(self._stored) == self._stored.maxlen:
                _LOGGER.debug("Evicting oldest metric %s", self._stored[0].name)
            self._stored.append(snapshot)

        if _LOGGER.isEnabledFor(logging.DEBUG):
            _LOGGER.debug(
                "Stored %s %s {%s}",
                request.metric_type,
                request.name,
                format_labels(request.labels),
            )

    def start_timer(self, name: str, labels: Labels | None = None) -> TimerGuard:
        """Start a timer.

        A released timer records as a task on the event loop running here.
        Without a running loop, or once that loop has stopped, release
        records on the calling thread instead.
        """
        try:
            loop: asyncio.AbstractEventLoop | None = asyncio.get_running_loop()
        except RuntimeError:
            loop = None
        return TimerGuard(name, labels, self._make_timer_recorder(loop))

    def _make_timer_recorder(
        self,
        loop: asyncio.AbstractEventLoop | None,
    ) -> Callable[[MetricRequest], None]:
        """Return a recorder that schedules the recording on loop."""

        def _schedule(request: MetricRequest) -> None:
            if loop is None or loop.is_closed() or not loop.is_running():
                self._record_timer_now(request)
                return

            try:
                running = asyncio.get_running_loop()
            except RuntimeError:
                running = None

            if running is loop:
                self._spawn_timer_record(request)
                return

            try:
                loop.call_soon_threadsafe(self._spawn_timer_record, request)
            except RuntimeError:
                # Loop closed after the check above.
                self._record_timer_now(request)

        return _schedule

    def _spawn_timer_record(self, request: MetricRequest) -> None:
        """Run the recording of a released timer as a task."""
        task = asyncio.create_task(
            self._record_timer(request),
            name=f"metricport-timer-{request.name}",
        )
        self._pending_timers.add(task)
        task.add_done_callback(self._pending_timers.discard)

    async def _record_timer(self, request: MetricRequest) -> None:
        """Record a released timer, nobody is left to report errors to."""
        try:
            await self.record(request)
        except MetricsError as err:
            _LOGGER.warning("Dropping timer %s: %s", request.name, err)
        except Exception:
            _LOGGER.exception("Unexpected error recording timer %s", request.name)

    def _record_timer_now(self, request: MetricRequest) -> None:
        """Record a released timer on the calling thread."""
        try:
            self._store(request)
        except MetricsError as err:
            _LOGGER.warning("Dropping timer %s: %s", request.name, err)
        except Exception:
            _LOGGER.exception("Unexpected error recording timer %s", request.name)

    async def wait_for_timers(self, timeout: float = TIMER_SETTLE_TIMEOUT) -> None:  # noqa: ASYNC109
        """Wait until every released timer has been recorded."""
        # Let recordings handed over from other threads get scheduled.
        await asyncio.sleep(0)
        try:
            async with async_timeout.timeout(timeout):
                while self._pending_timers:
                    await asyncio.wait(set(self._pending_timers))
        except TimeoutError as err:
            raise MetricsTimeoutError("wait_for_timers", timeout) from err

    async def health_check(self) -> HealthStatus:
        """Return the current health status."""
        if self._should_fail():
            raise MetricsHealthError("memory", "Simulated health check failure")
        with self._lock:
            return self._health

    async def get_snapshot(self) -> list[MetricSnapshot]:
        """Return stored metrics, empty when storage is disabled."""
        if not self._config.store_metrics:
            return []
        return self.stored_metrics()

    def stored_metrics(self) -> list[MetricSnapshot]:
        """Return a copy of all stored metrics, oldest first."""
        with self._lock:
            return list(self._stored)

    def find_metrics_by_name(self, name: str) -> list[MetricSnapshot]:
        """Return stored metrics with the exact name."""
        return [metric for metric in self.stored_metrics() if metric.name == name]

    def find_metrics_by_type(self, metric_type: MetricType) -> list[MetricSnapshot]:
        """Return stored metrics of a type."""
        return [
            metric
            for metric in self.stored_metrics()
            if metric.metric_type == metric_type
        ]

    def find_metrics_with_label(self, key: str, value: str) -> list[MetricSnapshot]:
        """Return stored metrics carrying the label key=value."""
        return [
            metric
            for metric in self.stored_metrics()
            if metric.labels.get(key) == value
        ]

    def clear_stored_metrics(self) -> None:
        """Drop all stored metrics."""
        with self._lock:
            self._stored.clear()
        _LOGGER.debug("Cleared stored metrics")

    def set_health_status(self, status: HealthStatus) -> None:
        """Replace the health status reported by health_check."""
        with self._lock:
            self._health = status
