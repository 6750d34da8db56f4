"""Standard histogram bucket layouts."""

import math

from .exceptions import MetricsValidationError

# Request latencies in seconds.
LATENCY_BUCKETS = (
    0.001,
    0.002,
    0.005,
    0.01,
    0.025,
    0.05,
    0.1,
    0.25,
    0.5,
    1.0,
    2.5,
    5.0,
    10.0,
    math.inf,
)

# Payload sizes in bytes, 64B up to 16MiB.
SIZE_BYTES_BUCKETS = (
    64.0,
    256.0,
    1024.0,
    4096.0,
    16384.0,
    65536.0,
    262144.0,
    1048576.0,
    4194304.0,
    16777216.0,
    math.inf,
)


def linear_buckets(start: float, width: float, count: int) -> list[float]:
    """Return count bounds spaced width apart, followed by +infinity.

    linear_buckets(0.0, 0.1, 3) == [0.0, 0.1, 0.2, inf]
    """
    if count < 1:
        raise MetricsValidationError("buckets", "Bucket count must be at least 1")
    if width <= 0:
        raise MetricsValidationError("buckets", "Bucket width must be positive")
    return [start + index * width for index in range(count)] + [math.inf]


def exponential_buckets(start: float, factor: float, count: int) -> list[float]:
    """Return count bounds growing by factor, followed by +infinity.

    exponential_buckets(1.0, 2.0, 3) == [1.0, 2.0, 4.0, inf]
    """
    if count < 1:
        raise MetricsValidationError("buckets", "Bucket count must be at least 1")
    if start <= 0:
        raise MetricsValidationError("buckets", "Bucket start must be positive")
    if factor <= 1:
        raise MetricsValidationError("buckets", "Bucket factor must be above 1")
    return [start * factor**index for index in range(count)] + [math.inf]
