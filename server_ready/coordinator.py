"""Loading coordinator: waits for every component to settle, then fires once."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from server_ready.config import DEFAULT_INITIAL_DELAY_TICKS, DEFAULT_STABLE_TICKS
from server_ready.errors import CoordinatorError
from server_ready.health import ComponentHealth, HealthEvent, HealthReporter
from server_ready.initializer import DownstreamInitializer
from server_ready.registry import ComponentRegistry
from server_ready.scheduler import Scheduler, TaskHandle
from server_ready.snapshot import ReadinessSnapshot, collect_snapshot
from server_ready.tracker import GateState, TrackedState, observe


class LoadingCoordinator:
    """
    Polls a component registry until the readiness picture stops changing.

    Components expose no completion signal, so readiness is sampled once per
    tick. The downstream initializer runs exactly once, when the mapping has
    been unchanged for ``stable_ticks`` polls and every component is enabled.
    Components that are not enabled are warned about once each and do not
    abort startup; one that never comes up keeps the coordinator waiting.

    Responsibilities:
    - Collect a snapshot per tick (the host itself is never polled)
    - Debounce changes in the readiness mapping
    - Warn once per failing component
    - Release the initializer and cancel polling
    """

    def __init__(
        self,
        registry: ComponentRegistry,
        scheduler: Scheduler,
        initializer: DownstreamInitializer,
        host_id: str,
        stable_ticks: int = DEFAULT_STABLE_TICKS,
        initial_delay_ticks: int = DEFAULT_INITIAL_DELAY_TICKS,
        logger: Optional[logging.Logger] = None,
        reporter: Optional[HealthReporter] = None,
    ) -> None:
        """Initialize coordinator with its collaborators and thresholds."""
        if stable_ticks < 1:
            raise CoordinatorError(f"stable_ticks must be positive, got {stable_ticks}")

        self._registry = registry
        self._scheduler = scheduler
        self._initializer = initializer
        self._host_id = host_id
        self._stable_ticks = stable_ticks
        self._initial_delay_ticks = initial_delay_ticks
        self._logger = logger or logging.getLogger(__name__)
        self._reporter = reporter
        self._state = TrackedState()
        self._task: Optional[TaskHandle] = None

    @property
    def state(self) -> TrackedState:
        return self._state

    @property
    def fired(self) -> bool:
        return self._state.fired

    def start(self) -> None:
        """Schedule polling every tick after the initial delay."""
        if self._task is not None or self._state.fired:
            raise CoordinatorError("Loading coordinator already started")
        self._task = self._scheduler.run_repeating(self.tick, self._initial_delay_ticks, 1)

    def stop(self) -> None:
        """Cancel polling without firing."""
        if self._task is not None:
            self._task.cancel()

    def tick(self) -> None:
        """Run one poll: collect, track, warn, then evaluate the gate."""
        if self._state.fired:
            return

        snapshot = collect_snapshot(self._registry, self._host_id)
        observe(self._state, snapshot)
        self._warn_about_failed(snapshot)

        if self._should_proceed(snapshot):
            self._proceed()

    def health(self) -> Dict[str, object]:
        """Return coordinator status for the health endpoint."""
        return {
            "status": self._state.gate.value,
            "stable_ticks": self._state.stable_ticks,
            "required_stable_ticks": self._stable_ticks,
            "polls": self._state.polls,
            "components": len(self._state.baseline),
            "warned": sorted(self._state.warned),
        }

    def _warn_about_failed(self, snapshot: ReadinessSnapshot) -> None:
        for component_id in snapshot.failed:
            if component_id in self._state.warned:
                continue
            self._logger.warning(
                "Component '%s' failed to load but continuing with game state setup.", component_id
            )
            self._state.warned.add(component_id)
            self._emit(HealthEvent(component_id, ComponentHealth.NOT_READY, {"poll": self._state.polls}))

    def _should_proceed(self, snapshot: ReadinessSnapshot) -> bool:
        return self._state.stable_ticks >= self._stable_ticks and snapshot.all_ready

    def _proceed(self) -> None:
        # Mark fired first so a re-entrant tick from the initializer is a no-op.
        self._state.gate = GateState.FIRED

        warned = len(self._state.warned)
        if warned:
            self._logger.info(
                "All components have finished loading. Setting up game state with %d failed component(s).",
                warned,
            )
        else:
            self._logger.info("All components have finished loading successfully. Setting up game state.")

        self._emit(HealthEvent(self._host_id, ComponentHealth.READY, {"warned": warned, "polls": self._state.polls}))
        try:
            self._initializer.setup()
        finally:
            self.stop()

    def _emit(self, event: HealthEvent) -> None:
        if self._reporter is not None:
            self._reporter.emit(event)
