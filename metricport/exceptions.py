"""Metricport Exceptions."""


class MetricsError(Exception):
    """Base Exception for metricport exceptions."""


class MetricsValidationError(MetricsError):
    """Raise if a metric name, label or value is malformed."""

    def __init__(self, field: str, message: str) -> None:
        """Initialize validation error."""
        super().__init__(f"Invalid {field}: {message}")
        self.field = field
        self.message = message


class MetricsConfigError(MetricsError):
    """Raise if adapter settings are invalid."""

    def __init__(self, key: str, message: str) -> None:
        """Initialize configuration error."""
        super().__init__(f"Metrics config error for {key}: {message}")
        self.key = key


class MetricsRecordingError(MetricsError):
    """Raise if a backend fails to persist a metric."""

    def __init__(self, metric_name: str, message: str) -> None:
        """Initialize recording error."""
        super().__init__(f"Metrics recording error for {metric_name}: {message}")
        self.metric_name = metric_name


class MetricsHealthError(MetricsError):
    """Raise if a backend fails while checking its health."""

    def __init__(self, adapter: str, message: str) -> None:
        """Initialize health check error."""
        super().__init__(f"Metrics health check error for {adapter}: {message}")
        self.adapter = adapter


class MetricsConnectionError(MetricsError):
    """Raise if a backend is unreachable."""

    def __init__(self, endpoint: str, message: str) -> None:
        """Initialize connection error."""
        super().__init__(f"Metrics connection error to {endpoint}: {message}")
        self.endpoint = endpoint


class MetricsTimeoutError(MetricsError):
    """Raise if an operation exceeded its allotted time."""

    def __init__(self, operation: str, timeout: float) -> None:
        """Initialize timeout error."""
        super().__init__(f"Metrics timeout error for {operation} after {timeout}s")
        self.operation = operation
        self.timeout = timeout


class MetricsSerializationError(MetricsError):
    """Raise if metric data can't be encoded for transmission."""

    def __init__(self, format_name: str, message: str) -> None:
        """Initialize serialization error."""
        super().__init__(f"Metrics serialization error for {format_name}: {message}")
        self.format_name = format_name


def from_os_error(err: OSError) -> MetricsError:
    """Map an OS level error from a backend transport into the metrics taxonomy."""
    if isinstance(err, ConnectionRefusedError):
        error: MetricsError = MetricsConnectionError("unknown", str(err))
    elif isinstance(err, TimeoutError):
        error = MetricsTimeoutError("io_operation", 0)
    else:
        error = MetricsError(f"Metrics IO error: {err}")
    error.__cause__ = err
    return error
