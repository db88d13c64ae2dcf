"""Component registries observed by the loading coordinator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Protocol

import docker
from docker.errors import DockerException

from server_ready.errors import RegistryError


@dataclass(frozen=True)
class ComponentStatus:
    """Readiness of a single component as reported by a registry."""

    component_id: str
    enabled: bool


class ComponentRegistry(Protocol):
    """Anything that can list the currently known components."""

    def components(self) -> Iterable[ComponentStatus]:
        """Return every known component with its current enabled flag."""


class StaticRegistry:
    """
    In-process registry.

    Components register themselves and flip their own enabled flag; the
    coordinator only ever reads.
    """

    def __init__(self, component_ids: Iterable[str] = ()) -> None:
        self._states: Dict[str, bool] = {}
        for component_id in component_ids:
            self.register(component_id)

    def register(self, component_id: str, enabled: bool = False) -> None:
        """Add a component, or reset an existing one to the given flag."""
        self._states[component_id] = enabled

    def set_enabled(self, component_id: str, enabled: bool = True) -> None:
        if component_id not in self._states:
            raise RegistryError(f"Component not registered: {component_id}")
        self._states[component_id] = enabled

    def unregister(self, component_id: str) -> None:
        self._states.pop(component_id, None)

    def components(self) -> List[ComponentStatus]:
        return [ComponentStatus(component_id, enabled) for component_id, enabled in self._states.items()]


class DockerRegistry:
    """
    Registry backed by Docker containers.

    Containers are selected by label; a container counts as enabled once it
    is running and its healthcheck, when it has one, reports healthy.
    """

    def __init__(self, labels: Dict[str, str] | None = None, client=None) -> None:
        """Initialize with a label selector and an optional Docker client."""
        self._labels = dict(labels or {})
        self._client = client

    def components(self) -> List[ComponentStatus]:
        client = self._docker_client()
        filters = {"label": [f"{key}={value}" for key, value in self._labels.items()]}

        try:
            containers = client.containers.list(all=True, filters=filters)
        except Exception as exc:
            raise RegistryError(f"Unable to list containers: {exc}") from exc

        return [ComponentStatus(container.name, self._is_enabled(container)) for container in containers]

    def _docker_client(self):
        if self._client is None:
            try:
                self._client = docker.from_env()
            except DockerException as exc:
                raise RegistryError(f"Unable to reach Docker daemon: {exc}") from exc
        return self._client

    @staticmethod
    def _is_enabled(container) -> bool:
        if container.status != "running":
            return False

        health = container.attrs.get("State", {}).get("Health")
        if not health:
            return True
        return health.get("Status") == "healthy"
