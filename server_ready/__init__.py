"""Server readiness package."""

__all__ = [
    "ServerReadyRuntime",
    "LoadingCoordinator",
    "ReadinessSnapshot",
    "collect_snapshot",
    "TrackedState",
    "GateState",
    "ComponentRegistry",
    "ComponentStatus",
    "StaticRegistry",
    "DockerRegistry",
    "RegistryFactory",
    "AsyncioScheduler",
    "EmptyGame",
    "GameState",
    "StateChangeEvent",
    "StateChangeNotifier",
    "HealthReporter",
    "HealthEvent",
    "ComponentHealth",
    "ConfigRepository",
    "ServerReadyConfig",
    "CoordinatorConfig",
    "RegistryConfig",
    "ConfigError",
    "RegistryError",
    "CoordinatorError",
]

from server_ready.runtime import ServerReadyRuntime
from server_ready.coordinator import LoadingCoordinator
from server_ready.snapshot import ReadinessSnapshot, collect_snapshot
from server_ready.tracker import TrackedState, GateState
from server_ready.registry import ComponentRegistry, ComponentStatus, StaticRegistry, DockerRegistry
from server_ready.registry_factory import RegistryFactory
from server_ready.scheduler import AsyncioScheduler
from server_ready.initializer import EmptyGame, GameState, StateChangeEvent, StateChangeNotifier
from server_ready.health import HealthReporter, HealthEvent, ComponentHealth
from server_ready.config import ConfigRepository, ServerReadyConfig, CoordinatorConfig, RegistryConfig
from server_ready.errors import ConfigError, RegistryError, CoordinatorError
