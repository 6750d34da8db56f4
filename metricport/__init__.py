"""Metricport: vendor neutral metrics recording."""

from .adapters import (
    InMemoryMetricsAdapter,
    InMemoryMetricsConfig,
    MetricsAdapter,
    MetricsAdapterFactory,
    NoOpMetricsAdapter,
    create_adapter,
    create_memory_adapter,
    create_noop_adapter,
)
from .exceptions import (
    MetricsConfigError,
    MetricsConnectionError,
    MetricsError,
    MetricsHealthError,
    MetricsRecordingError,
    MetricsSerializationError,
    MetricsTimeoutError,
    MetricsValidationError,
)
from .health import HealthStatus
from .models import (
    HistogramBucket,
    HistogramValue,
    Labels,
    MetricRequest,
    MetricSnapshot,
    MetricType,
    MetricValue,
    ScalarValue,
)
from .timer import TimerGuard, TimerState
from .validation import format_labels, normalize_metric_name, validate_metric_name

__all__ = [
    "HealthStatus",
    "HistogramBucket",
    "HistogramValue",
    "InMemoryMetricsAdapter",
    "InMemoryMetricsConfig",
    "Labels",
    "MetricRequest",
    "MetricSnapshot",
    "MetricType",
    "MetricValue",
    "MetricsAdapter",
    "MetricsAdapterFactory",
    "MetricsConfigError",
    "MetricsConnectionError",
    "MetricsError",
    "MetricsHealthError",
    "MetricsRecordingError",
    "MetricsSerializationError",
    "MetricsTimeoutError",
    "MetricsValidationError",
    "NoOpMetricsAdapter",
    "TimerGuard",
    "TimerState",
    "create_adapter",
    "create_memory_adapter",
    "create_noop_adapter",
    "format_labels",
    "normalize_metric_name",
    "validate_metric_name",
]
