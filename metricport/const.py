"""This file contains the limits and defaults used by metricport."""

# Metric names follow the Prometheus data model.
METRIC_NAME_MAX_LENGTH = 255
LABEL_KEY_MAX_LENGTH = 128
LABEL_VALUE_MAX_LENGTH = 1024
# Keep label cardinality of a single metric occurrence bounded.
MAX_LABELS_PER_METRIC = 32
# Label keys with this prefix are reserved for internal use by backends.
RESERVED_LABEL_PREFIX = "__"

DEFAULT_SERVICE_NAME = "test-service"
DEFAULT_MAX_STORED_METRICS = 1000

# Seconds to wait for deferred timer recordings to settle.
TIMER_SETTLE_TIMEOUT = 10
