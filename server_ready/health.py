"""Health reporting and status types."""

from dataclasses import dataclass, field
from enum import Enum
import threading
from typing import Dict


class ComponentHealth(str, Enum):
    """Health state reported for observed components and the host."""

    READY = "ready"
    NOT_READY = "not_ready"


@dataclass(frozen=True)
class HealthEvent:
    """Health event emitted by the coordinator."""

    component: str
    status: ComponentHealth
    details: Dict[str, object] = field(default_factory=dict)


class HealthReporter:
    """
    Aggregates component health and exposes it to the runtime.

    Follows Observer pattern: the coordinator emits events, reporter keeps the
    latest one per component. Events arrive on the event loop thread while the
    health server reads from its own thread.
    """

    def __init__(self) -> None:
        """Initialize reporter with empty state."""
        self._latest: Dict[str, HealthEvent] = {}
        self._lock = threading.Lock()

    def emit(self, event: HealthEvent) -> None:
        """Record a new health event."""
        with self._lock:
            self._latest[event.component] = event

    def snapshot(self) -> Dict[str, object]:
        """Return current health snapshot."""
        with self._lock:
            latest = list(self._latest.values())
        return {event.component: {"status": event.status.value, **event.details} for event in latest}
