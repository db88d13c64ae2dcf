"""
Shared pytest fixtures for server_ready tests.

The coordinator is driven tick by tick through a fake scheduler so tests stay
deterministic and never touch a real event loop.
"""

from __future__ import annotations

from pathlib import Path
import sys
from typing import Callable, List, Optional

import pytest

# Ensure the repository root is on sys.path so `import server_ready` works
# when pytest is run without an editable install.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from server_ready.registry import StaticRegistry  # noqa: E402


class FakeHandle:
    """Task handle recorded by FakeScheduler."""

    def __init__(self, callback: Callable[[], None], delay_ticks: int, period_ticks: int) -> None:
        self.callback = callback
        self.delay_ticks = delay_ticks
        self.period_ticks = period_ticks
        self.cancel_calls = 0
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self.cancel_calls += 1
        self._cancelled = True


class FakeScheduler:
    """Scheduler that only runs ticks when a test asks it to."""

    def __init__(self) -> None:
        self.handles: List[FakeHandle] = []

    @property
    def handle(self) -> Optional[FakeHandle]:
        return self.handles[-1] if self.handles else None

    def run_repeating(self, callback: Callable[[], None], delay_ticks: int, period_ticks: int) -> FakeHandle:
        handle = FakeHandle(callback, delay_ticks, period_ticks)
        self.handles.append(handle)
        return handle

    def run(self, ticks: int) -> int:
        """Run up to ``ticks`` invocations, stopping early once cancelled."""
        ran = 0
        for _ in range(ticks):
            if self.handle is None or self.handle.cancelled:
                break
            self.handle.callback()
            ran += 1
        return ran


class RecordingInitializer:
    """Downstream initializer that counts setup calls."""

    def __init__(self, on_setup: Optional[Callable[[], None]] = None) -> None:
        self.calls = 0
        self._on_setup = on_setup

    def setup(self) -> None:
        self.calls += 1
        if self._on_setup is not None:
            self._on_setup()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def initializer() -> RecordingInitializer:
    return RecordingInitializer()


@pytest.fixture
def registry() -> StaticRegistry:
    return StaticRegistry()
