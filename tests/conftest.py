"""Pytest fixtures for metricport."""

from collections.abc import AsyncGenerator
import logging

import pytest

from metricport.adapters.memory import InMemoryMetricsAdapter, InMemoryMetricsConfig

logging.basicConfig(level=logging.DEBUG)


@pytest.fixture
def memory_config() -> InMemoryMetricsConfig:
    """Return an in-memory config with a fixed seed."""
    return InMemoryMetricsConfig(service_name="test-app", seed=42)


@pytest.fixture
async def adapter(
    memory_config: InMemoryMetricsConfig,
) -> AsyncGenerator[InMemoryMetricsAdapter, None]:
    """Create an in-memory adapter and settle its timers on teardown."""
    adapter = await InMemoryMetricsAdapter.create(memory_config)

    yield adapter

    await adapter.wait_for_timers()
