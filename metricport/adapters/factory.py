"""Factory functions for creating metrics adapters."""

from collections.abc import Awaitable, Callable
from typing import Any

from ..exceptions import MetricsConfigError
from .base import MetricsAdapter
from .memory import InMemoryMetricsAdapter, InMemoryMetricsConfig
from .noop import NoOpMetricsAdapter

# Type alias for metrics factory function
MetricsAdapterFactory = Callable[[], Awaitable[MetricsAdapter[Any]]]

ADAPTERS: dict[str, type[MetricsAdapter[Any]]] = {
    "memory": InMemoryMetricsAdapter,
    "noop": NoOpMetricsAdapter,
}


def create_noop_adapter() -> NoOpMetricsAdapter:
    """
    Create a no-op metrics adapter for zero overhead.

    Returns:
        NoOpMetricsAdapter instance that discards everything.
    """
    return NoOpMetricsAdapter()


async def create_memory_adapter(
    config: InMemoryMetricsConfig | None = None,
) -> InMemoryMetricsAdapter:
    """
    Create an in-memory metrics adapter.

    Raises:
        MetricsConfigError: If the configuration is invalid.
    """
    return await InMemoryMetricsAdapter.create(config)


async def create_adapter(kind: str, config: Any = None) -> MetricsAdapter[Any]:
    """
    Create a metrics adapter by name.

    Args:
        kind: Adapter name, one of ADAPTERS
        config: Adapter specific configuration

    Raises:
        MetricsConfigError: If the adapter is unknown or the configuration invalid.
    """
    if (adapter_cls := ADAPTERS.get(kind)) is None:
        raise MetricsConfigError("adapter", f"Unknown metrics adapter {kind}")
    return await adapter_cls.create(config)
