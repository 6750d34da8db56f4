"""Scoped duration measurement."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
import logging
import time
from types import TracebackType

from .models import Labels, MetricRequest

_LOGGER = logging.getLogger(__name__)

TimerRecorder = Callable[[MetricRequest], None]


class TimerState(str, Enum):
    """Timer guard lifecycle."""

    ACTIVE = "active"
    RELEASED = "released"


class TimerGuard:
    """Measure a duration and hand it to a recorder exactly once.

    The guard records when ``release`` is called or when the ``with``
    block that owns it ends, whichever comes first. A released guard
    can't be released again.
    """

    __slots__ = ("_labels", "_name", "_recorder", "_start", "_state")

    def __init__(
        self,
        name: str,
        labels: Labels | None,
        recorder: TimerRecorder,
    ) -> None:
        """Initialize TimerGuard and start measuring."""
        self._name = name
        self._labels = dict(labels or {})
        self._recorder: TimerRecorder | None = recorder
        self._state = TimerState.ACTIVE
        self._start = time.perf_counter()

    @property
    def name(self) -> str:
        """Return the metric name this timer records to."""
        return self._name

    @property
    def state(self) -> TimerState:
        """Return the lifecycle state."""
        return self._state

    @property
    def elapsed(self) -> float:
        """Return seconds since the timer started."""
        return time.perf_counter() - self._start

    def release(self) -> None:
        """Stop the timer and hand the duration to the recorder."""
        if (recorder := self._recorder) is None:
            raise RuntimeError(f"Timer {self._name} was already released")
        duration = self.elapsed
        self._recorder = None
        self._state = TimerState.RELEASED

        request = MetricRequest.timer(self._name, duration).with_labels(self._labels)
        _LOGGER.debug("Timer %s released after %.6fs", self._name, duration)
        recorder(request)

    def __enter__(self) -> TimerGuard:
        """Enter the timed block."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        """Release on leaving the timed block unless already released."""
        if self._state is TimerState.ACTIVE:
            self.release()
