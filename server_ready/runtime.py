"""Server readiness runtime facade."""

from typing import Dict, Optional

from server_ready.config import ConfigRepository
from server_ready.coordinator import LoadingCoordinator
from server_ready.errors import CoordinatorError
from server_ready.health import HealthReporter
from server_ready.initializer import DownstreamInitializer
from server_ready.registry import ComponentRegistry
from server_ready.registry_factory import RegistryFactory
from server_ready.scheduler import AsyncioScheduler, Scheduler


class ServerReadyRuntime:
    """
    Facade for the server readiness runtime.

    Responsibilities:
    - Load config and build the component registry
    - Start the loading coordinator on the host scheduler
    - Expose aggregated health
    """

    def __init__(
        self,
        config_repo: ConfigRepository,
        factory: RegistryFactory,
        initializer: DownstreamInitializer,
        health: HealthReporter,
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        """Initialize runtime with required collaborators."""
        self._config_repo = config_repo
        self._factory = factory
        self._initializer = initializer
        self._health = health
        self._scheduler = scheduler
        self._registry: Optional[ComponentRegistry] = None
        self._coordinator: Optional[LoadingCoordinator] = None

    @property
    def registry(self) -> Optional[ComponentRegistry]:
        return self._registry

    @property
    def coordinator(self) -> Optional[LoadingCoordinator]:
        return self._coordinator

    def start(self) -> None:
        """Load config and begin polling components."""
        if self._coordinator is not None:
            raise CoordinatorError("Server readiness runtime already started")

        print("server_ready starting", flush=True)
        config = self._config_repo.load()
        print("server_ready config loaded", flush=True)

        self._registry = self._factory.create(config.registry)
        scheduler = self._scheduler or AsyncioScheduler(config.coordinator.tick_seconds)

        self._coordinator = LoadingCoordinator(
            registry=self._registry,
            scheduler=scheduler,
            initializer=self._initializer,
            host_id=config.host_id,
            stable_ticks=config.coordinator.stable_ticks,
            initial_delay_ticks=config.coordinator.initial_delay_ticks,
            reporter=self._health,
        )
        self._coordinator.start()
        print(f"server_ready waiting for components ({config.registry.registry_type} registry)", flush=True)

    def stop(self) -> None:
        """Stop polling if the coordinator has not fired yet."""
        print("server_ready stopping", flush=True)
        if self._coordinator is not None:
            self._coordinator.stop()
        print("server_ready stopped", flush=True)

    def is_ready(self) -> bool:
        return self._coordinator is not None and self._coordinator.fired

    def health_snapshot(self) -> Dict[str, object]:
        """Return aggregated health snapshot for the host."""
        coordinator = self._coordinator.health() if self._coordinator is not None else {"status": "stopped"}
        return {
            "ready": self.is_ready(),
            "coordinator": coordinator,
            "components": self._health.snapshot(),
        }
