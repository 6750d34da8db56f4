"""Test metric requests and snapshots."""

import dataclasses
from datetime import timedelta
import math
import time
from types import MappingProxyType

import pytest

from metricport.models import (
    HistogramBucket,
    HistogramValue,
    MetricRequest,
    MetricSnapshot,
    MetricType,
    ScalarValue,
)


def test_counter_request() -> None:
    """Test counter constructor."""
    request = MetricRequest.counter("http_requests", 1.0)

    assert request.name == "http_requests"
    assert request.metric_type is MetricType.COUNTER
    assert request.value == ScalarValue(1.0)
    assert request.labels == {}
    assert request.help is None


def test_request_constructors_types() -> None:
    """Test each named constructor sets its type."""
    assert MetricRequest.gauge("g", 1).metric_type is MetricType.GAUGE
    assert MetricRequest.histogram("h", 1).metric_type is MetricType.HISTOGRAM
    assert MetricRequest.timer("t", 1).metric_type is MetricType.TIMER


def test_request_with_labels() -> None:
    """Test labels are attached fluently without touching the original."""
    base = MetricRequest.gauge("memory_usage", 512.0)
    request = base.with_label("unit", "MB").with_label("server", "web-01")

    assert request.labels == {"unit": "MB", "server": "web-01"}
    assert base.labels == {}


def test_request_with_multiple_labels() -> None:
    """Test labels from pairs and mappings."""
    request = MetricRequest.counter("requests", 1.0).with_labels(
        [("method", "GET"), ("status", "200")],
    )
    assert request.labels == {"method": "GET", "status": "200"}

    request = request.with_labels({"status": "500"})
    assert request.labels == {"method": "GET", "status": "500"}


def test_request_label_order_irrelevant() -> None:
    """Test label insertion order doesn't matter for equality."""
    first = MetricRequest.counter("requests", 1.0).with_labels({"a": "1", "b": "2"})
    second = dataclasses.replace(first, labels={"b": "2", "a": "1"})

    assert first == second


def test_request_is_immutable() -> None:
    """Test requests can't be changed after creation."""
    request = MetricRequest.counter("requests", 1.0).with_label("method", "GET")

    with pytest.raises(dataclasses.FrozenInstanceError):
        request.name = "other"  # type: ignore[misc]
    with pytest.raises(TypeError):
        request.labels["method"] = "POST"  # type: ignore[index]


def test_request_labels_copied() -> None:
    """Test changing the caller's dict doesn't leak into a request."""
    labels = {"method": "GET"}
    request = MetricRequest("requests", MetricType.COUNTER, ScalarValue(1), labels)
    labels["method"] = "POST"

    assert request.labels == {"method": "GET"}


def test_labels_copied_from_read_only_view() -> None:
    """Test a read-only view over the caller's dict is copied too."""
    source = {"method": "GET"}
    request = MetricRequest(
        "requests",
        MetricType.COUNTER,
        ScalarValue(1),
        MappingProxyType(source),
    )
    snapshot = MetricSnapshot(
        "requests",
        MetricType.COUNTER,
        ScalarValue(1),
        MappingProxyType(source),
    )
    source["method"] = "POST"

    assert request.labels == {"method": "GET"}
    assert snapshot.labels == {"method": "GET"}


def test_request_with_help() -> None:
    """Test help text."""
    request = MetricRequest.histogram("request_duration", 0.25).with_help(
        "Time spent processing HTTP requests",
    )

    assert request.help == "Time spent processing HTTP requests"


def test_request_timestamp() -> None:
    """Test the creation timestamp is in nanoseconds."""
    before = time.time_ns()
    request = MetricRequest.counter("requests", 1)
    after = time.time_ns()

    assert before <= request.timestamp <= after


def test_timer_request() -> None:
    """Test timers accept seconds and timedeltas."""
    assert MetricRequest.timer("db_query", 0.15).value == ScalarValue(0.15)
    assert MetricRequest.timer("db_query", timedelta(milliseconds=50)).value == (
        ScalarValue(0.05)
    )


def test_distribution_request() -> None:
    """Test histogram requests with a full distribution."""
    request = MetricRequest.distribution(
        "latency",
        45.0,
        35,
        [(0.1, 10), HistogramBucket(1.0, 25), (math.inf, 35)],
    )

    assert request.metric_type is MetricType.HISTOGRAM
    assert request.value == HistogramValue(
        45.0,
        35,
        (
            HistogramBucket(0.1, 10),
            HistogramBucket(1.0, 25),
            HistogramBucket(math.inf, 35),
        ),
    )


def test_histogram_mean() -> None:
    """Test the explicit lossy scalar of a histogram."""
    assert HistogramValue(45.0, 30).mean == 1.5
    assert HistogramValue(0.0, 0).mean is None


def test_metric_type_str() -> None:
    """Test metric type names."""
    assert str(MetricType.COUNTER) == "counter"
    assert str(MetricType.GAUGE) == "gauge"
    assert str(MetricType.HISTOGRAM) == "histogram"
    assert str(MetricType.TIMER) == "timer"


def test_snapshot_from_request() -> None:
    """Test a snapshot keeps every field of its request."""
    request = (
        MetricRequest.counter("test", 1.0)
        .with_label("env", "test")
        .with_help("Test metric")
    )

    snapshot = MetricSnapshot.from_request(request)

    assert snapshot.name == request.name
    assert snapshot.metric_type is request.metric_type
    assert snapshot.value == request.value
    assert snapshot.labels == request.labels
    assert snapshot.help == request.help
    assert snapshot.timestamp == request.timestamp


def test_snapshot_creation() -> None:
    """Test building a snapshot directly."""
    snapshot = MetricSnapshot(
        "test_metric",
        MetricType.COUNTER,
        ScalarValue(42.0),
        {"env": "test"},
    ).with_help("Test metric for unit tests")

    assert snapshot.name == "test_metric"
    assert snapshot.labels == {"env": "test"}
    assert snapshot.help == "Test metric for unit tests"
    assert snapshot.timestamp > 0
    with pytest.raises(TypeError):
        snapshot.labels["env"] = "prod"  # type: ignore[index]
