"""Metrics backends."""

from .base import MetricsAdapter
from .factory import (
    MetricsAdapterFactory,
    create_adapter,
    create_memory_adapter,
    create_noop_adapter,
)
from .memory import InMemoryMetricsAdapter, InMemoryMetricsConfig
from .noop import NoOpMetricsAdapter

__all__ = [
    "InMemoryMetricsAdapter",
    "InMemoryMetricsConfig",
    "MetricsAdapter",
    "MetricsAdapterFactory",
    "NoOpMetricsAdapter",
    "create_adapter",
    "create_memory_adapter",
    "create_noop_adapter",
]
