"""Test metrics adapter factory functions."""

import pytest

from metricport.adapters import (
    InMemoryMetricsAdapter,
    InMemoryMetricsConfig,
    MetricsAdapter,
    NoOpMetricsAdapter,
    create_adapter,
    create_memory_adapter,
    create_noop_adapter,
)
from metricport.exceptions import MetricsConfigError
from metricport.models import MetricRequest


async def test_create_noop_adapter() -> None:
    """Test no-op adapter factory."""
    adapter = create_noop_adapter()

    assert isinstance(adapter, NoOpMetricsAdapter)
    assert isinstance(adapter, MetricsAdapter)

    await adapter.record(MetricRequest.gauge("test", 1.0))

    assert await adapter.get_snapshot() == []


async def test_create_memory_adapter() -> None:
    """Test in-memory adapter factory."""
    adapter = await create_memory_adapter(InMemoryMetricsConfig(service_name="app"))

    assert isinstance(adapter, InMemoryMetricsAdapter)
    assert adapter.config.service_name == "app"

    adapter = await create_memory_adapter()
    assert adapter.config.service_name == "test-service"


async def test_create_memory_adapter_invalid_config() -> None:
    """Test factories surface configuration errors."""
    with pytest.raises(MetricsConfigError):
        await create_memory_adapter(InMemoryMetricsConfig(max_stored_metrics=0))


async def test_create_adapter_by_name() -> None:
    """Test selecting adapters by name."""
    assert isinstance(await create_adapter("noop"), NoOpMetricsAdapter)

    adapter = await create_adapter("memory", InMemoryMetricsConfig(max_stored_metrics=3))
    assert isinstance(adapter, InMemoryMetricsAdapter)
    assert adapter.config.max_stored_metrics == 3


async def test_create_adapter_unknown() -> None:
    """Test unknown adapters are a configuration error."""
    with pytest.raises(MetricsConfigError, match="prometheus"):
        await create_adapter("prometheus")
