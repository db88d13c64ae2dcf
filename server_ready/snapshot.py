"""Point-in-time readiness snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Tuple

from server_ready.registry import ComponentRegistry


@dataclass(frozen=True)
class ReadinessSnapshot:
    """
    Readiness of every known component for a single poll.

    ``states`` is read-only; ``failed`` lists the components that are not
    ready, in the order the registry reported them.
    """

    states: Mapping[str, bool]
    failed: Tuple[str, ...]

    @property
    def all_ready(self) -> bool:
        return not self.failed


def collect_snapshot(registry: ComponentRegistry, host_id: str) -> ReadinessSnapshot:
    """Poll the registry once, leaving out the host itself."""
    states: Dict[str, bool] = {}
    for status in registry.components():
        if status.component_id != host_id:
            states[status.component_id] = status.enabled

    failed = tuple(component_id for component_id, enabled in states.items() if not enabled)
    return ReadinessSnapshot(states=MappingProxyType(states), failed=failed)
