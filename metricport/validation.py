"""Validation of metric names, labels and values.

All checks are pure and raise MetricsValidationError on the first
violation they find.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import math
import re

from .const import (
    LABEL_KEY_MAX_LENGTH,
    LABEL_VALUE_MAX_LENGTH,
    MAX_LABELS_PER_METRIC,
    METRIC_NAME_MAX_LENGTH,
    RESERVED_LABEL_PREFIX,
)
from .exceptions import MetricsValidationError
from .models import HistogramValue, MetricRequest, MetricType, ScalarValue

METRIC_NAME_RE = re.compile(r"[a-zA-Z_:][a-zA-Z0-9_:]*")
LABEL_KEY_RE = re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*")
_UNDERSCORES_RE = re.compile(r"_+")


def validate_metric_name(name: str) -> None:
    """Validate a metric name.

    Names start with a letter, underscore or colon, continue with letters,
    digits, underscores or colons and are at most 255 characters long.
    """
    if not isinstance(name, str):
        raise MetricsValidationError("name", "Metric name must be a string")
    if not name:
        raise MetricsValidationError("name", "Metric name cannot be empty")
    if len(name) > METRIC_NAME_MAX_LENGTH:
        raise MetricsValidationError(
            "name",
            f"Metric name cannot exceed {METRIC_NAME_MAX_LENGTH} characters",
        )
    if not METRIC_NAME_RE.fullmatch(name):
        raise MetricsValidationError(
            "name",
            "Metric name must start with a letter, underscore or colon and "
            "only contain letters, numbers, underscores and colons",
        )


def validate_label_key(key: str) -> None:
    """Validate a label key."""
    if not isinstance(key, str):
        raise MetricsValidationError("label_key", "Label key must be a string")
    if not key:
        raise MetricsValidationError("label_key", "Label key cannot be empty")
    if len(key) > LABEL_KEY_MAX_LENGTH:
        raise MetricsValidationError(
            "label_key",
            f"Label key cannot exceed {LABEL_KEY_MAX_LENGTH} characters",
        )
    if key.startswith(RESERVED_LABEL_PREFIX):
        raise MetricsValidationError(
            "label_key",
            f"Label keys starting with '{RESERVED_LABEL_PREFIX}' are reserved",
        )
    if not LABEL_KEY_RE.fullmatch(key):
        raise MetricsValidationError(
            "label_key",
            "Label key must start with a letter or underscore and "
            "only contain letters, numbers and underscores",
        )


def validate_label_value(value: str) -> None:
    """Validate a label value. Empty values are allowed."""
    if not isinstance(value, str):
        raise MetricsValidationError("label_value", "Label value must be a string")
    if len(value) > LABEL_VALUE_MAX_LENGTH:
        raise MetricsValidationError(
            "label_value",
            f"Label value cannot exceed {LABEL_VALUE_MAX_LENGTH} characters",
        )
    if "\0" in value:
        raise MetricsValidationError(
            "label_value",
            "Label value cannot contain null bytes",
        )


def validate_labels(labels: Mapping[str, str]) -> None:
    """Validate the size of a label set and every key and value in it."""
    if len(labels) > MAX_LABELS_PER_METRIC:
        raise MetricsValidationError(
            "labels",
            f"Cannot have more than {MAX_LABELS_PER_METRIC} labels per metric",
        )
    for key, value in labels.items():
        validate_label_key(key)
        validate_label_value(value)


def validate_metric_value(value: float) -> None:
    """Validate that a value is a finite number."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise MetricsValidationError("value", "Metric value must be a number")
    if not math.isfinite(value):
        raise MetricsValidationError("value", "Metric value must be a finite number")


def validate_counter_value(value: float) -> None:
    """Validate a counter increment, which must not be negative."""
    validate_metric_value(value)
    if value < 0:
        raise MetricsValidationError("value", "Counter values must be non-negative")


def validate_histogram_buckets(bounds: Iterable[float]) -> list[float]:
    """Validate bucket upper bounds.

    Return the bounds sorted, with a trailing +infinity bucket.
    Duplicated bounds are rejected rather than merged.
    """
    bounds = list(bounds)
    if not bounds:
        raise MetricsValidationError(
            "buckets",
            "Histogram must have at least one bucket",
        )
    for bound in bounds:
        validate_metric_value(bound)

    validated = sorted(set(bounds))
    if len(validated) != len(bounds):
        raise MetricsValidationError("buckets", "Histogram buckets must be unique")

    validated.append(math.inf)
    return validated


def validate_histogram_value(value: HistogramValue) -> None:
    """Validate a histogram distribution."""
    validate_metric_value(value.sum)
    if value.count < 0:
        raise MetricsValidationError("value", "Histogram count must be non-negative")

    previous = -math.inf
    for index, bucket in enumerate(value.buckets):
        if math.isnan(bucket.upper_bound):
            raise MetricsValidationError("buckets", "Bucket bound must be a number")
        if bucket.upper_bound <= previous:
            raise MetricsValidationError(
                "buckets",
                "Histogram buckets must be unique and ascending",
            )
        if math.isinf(bucket.upper_bound) and index != len(value.buckets) - 1:
            raise MetricsValidationError(
                "buckets",
                "Only the last histogram bucket can be unbounded",
            )
        if bucket.count < 0:
            raise MetricsValidationError(
                "buckets",
                "Bucket counts must be non-negative",
            )
        previous = bucket.upper_bound


def validate_metric_request(request: MetricRequest) -> None:
    """Validate name, labels and the value rules of the request's type."""
    validate_metric_name(request.name)
    validate_labels(request.labels)

    value = request.value
    if isinstance(value, HistogramValue):
        if request.metric_type not in (MetricType.HISTOGRAM, MetricType.TIMER):
            raise MetricsValidationError(
                "value",
                f"A {request.metric_type} requires a scalar value",
            )
        validate_histogram_value(value)
    elif isinstance(value, ScalarValue):
        if request.metric_type is MetricType.COUNTER:
            validate_counter_value(value.value)
        else:
            validate_metric_value(value.value)
    else:
        raise MetricsValidationError("value", f"Unsupported metric value {value!r}")


def normalize_metric_name(name: str) -> str:
    """Normalize a metric name for display and comparison.

    Never applied to stored data.
    """
    return _UNDERSCORES_RE.sub("_", name.strip().lower())


def format_labels(labels: Mapping[str, str]) -> str:
    """Render labels as key=value pairs sorted by key."""
    if not labels:
        return "{}"
    return ",".join(f"{key}={labels[key]}" for key in sorted(labels))
