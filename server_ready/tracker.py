"""Coordinator state and the stability (debounce) tracker."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Set

from server_ready.snapshot import ReadinessSnapshot


class GateState(str, Enum):
    """Lifecycle of the transition gate."""

    WAITING = "waiting"
    FIRED = "fired"


@dataclass
class TrackedState:
    """Mutable state owned by a single loading coordinator."""

    baseline: Dict[str, bool] = field(default_factory=dict)
    stable_ticks: int = 0
    warned: Set[str] = field(default_factory=set)
    gate: GateState = GateState.WAITING
    polls: int = 0

    @property
    def fired(self) -> bool:
        return self.gate is GateState.FIRED


def observe(state: TrackedState, snapshot: ReadinessSnapshot) -> bool:
    """
    Fold one snapshot into the tracked state.

    Any difference from the baseline (a key added, removed, or flipped)
    replaces the baseline and resets the stability counter; an identical
    mapping advances it by one. Returns True when a change was observed.
    """
    current = dict(snapshot.states)
    state.polls += 1

    if current != state.baseline:
        state.baseline = current
        state.stable_ticks = 0
        return True

    state.stable_ticks += 1
    return False
