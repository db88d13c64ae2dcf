"""Downstream game state initializer released by the coordinator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import Callable, List, Protocol

logger = logging.getLogger(__name__)


class GameState(str, Enum):
    """Game states the host moves through during startup."""

    PREPARING = "preparing"
    PRE_START = "pre_start"


class ChangePhase(str, Enum):
    """Whether a notification precedes or follows the state switch."""

    PRE = "pre"
    POST = "post"


@dataclass(frozen=True)
class StateChangeEvent:
    """Notification that a game is moving between states."""

    game: str
    phase: ChangePhase
    from_state: GameState
    to_state: GameState


StateChangeListener = Callable[[StateChangeEvent], None]


class StateChangeNotifier:
    """Publishes state change events to subscribed listeners, in subscription order."""

    def __init__(self) -> None:
        self._listeners: List[StateChangeListener] = []

    def subscribe(self, listener: StateChangeListener) -> None:
        self._listeners.append(listener)

    def publish(self, event: StateChangeEvent) -> None:
        for listener in list(self._listeners):
            listener(event)


class DownstreamInitializer(Protocol):
    """Entry point invoked once all components have settled."""

    def setup(self) -> None:
        """Begin game/application state setup."""


class EmptyGame:
    """
    Game with no mechanics of its own.

    ``setup`` moves it from PREPARING to PRE_START, announcing the change
    before and after the switch.
    """

    def __init__(self, notifier: StateChangeNotifier | None = None, name: str = "") -> None:
        self.name = name
        self.notifier = notifier or StateChangeNotifier()
        self._state = GameState.PREPARING

    @property
    def game_state(self) -> GameState:
        return self._state

    def setup(self) -> None:
        previous, target = self._state, GameState.PRE_START
        self.notifier.publish(StateChangeEvent(self.name, ChangePhase.PRE, previous, target))
        self._state = target
        self.notifier.publish(StateChangeEvent(self.name, ChangePhase.POST, previous, target))
        logger.info("game state %s -> %s", previous.value, target.value)

    def teardown(self) -> None:
        self._state = GameState.PREPARING
