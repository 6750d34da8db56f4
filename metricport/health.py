"""Adapter health status."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
import time
from types import MappingProxyType


def _now() -> int:
    return int(time.time())


@dataclass(frozen=True, slots=True)
class HealthStatus:
    """Point in time health of a metrics adapter.

    A status is never changed after creation, a new status replaces it.
    """

    is_healthy: bool
    message: str
    metadata: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    timestamp: int = field(default_factory=_now)

    def __post_init__(self) -> None:
        """Store metadata read-only."""
        if not isinstance(self.metadata, MappingProxyType):
            object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    @classmethod
    def healthy(cls, message: str = "Metrics adapter is healthy") -> HealthStatus:
        """Create a healthy status."""
        return cls(True, message)

    @classmethod
    def unhealthy(cls, message: str) -> HealthStatus:
        """Create an unhealthy status."""
        return cls(False, message)

    def with_metadata(self, key: str, value: str) -> HealthStatus:
        """Return a copy with an additional metadata entry."""
        return replace(
            self,
            metadata=MappingProxyType({**self.metadata, key: value}),
        )

    def __str__(self) -> str:
        """Return status for logger."""
        status = "HEALTHY" if self.is_healthy else "UNHEALTHY"
        return f"[{status}] {self.message}"
