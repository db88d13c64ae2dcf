"""Tick schedulers that drive the loading coordinator."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)


class TaskHandle(Protocol):
    """Handle for a repeating task."""

    @property
    def cancelled(self) -> bool:
        """Whether further invocations have been cancelled."""

    def cancel(self) -> None:
        """Stop any further invocations."""


class Scheduler(Protocol):
    """Runs a callback repeatedly at a fixed tick period."""

    def run_repeating(self, callback: Callable[[], None], delay_ticks: int, period_ticks: int) -> TaskHandle:
        """Schedule ``callback`` after ``delay_ticks``, then every ``period_ticks``."""


class RepeatingTask:
    """A repeating callback on an asyncio event loop."""

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        callback: Callable[[], None],
        period_seconds: float,
    ) -> None:
        self._loop = loop
        self._callback = callback
        self._period = period_seconds
        self._timer: Optional[asyncio.TimerHandle] = None
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def arm(self, delay_seconds: float) -> None:
        if not self._cancelled:
            self._timer = self._loop.call_later(delay_seconds, self._run)

    def cancel(self) -> None:
        self._cancelled = True
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _run(self) -> None:
        self._timer = None
        try:
            self._callback()
        except Exception:
            logger.exception("scheduled tick raised; polling continues")
        # The next tick is armed only once this one has returned, so ticks never overlap.
        self.arm(self._period)


class AsyncioScheduler:
    """
    Scheduler backed by an asyncio event loop.

    One tick lasts ``tick_seconds``; delays and periods are given in ticks.
    """

    def __init__(self, tick_seconds: float, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._tick_seconds = tick_seconds
        self._loop = loop

    def run_repeating(self, callback: Callable[[], None], delay_ticks: int, period_ticks: int) -> RepeatingTask:
        loop = self._loop or asyncio.get_running_loop()
        task = RepeatingTask(loop, callback, period_ticks * self._tick_seconds)
        task.arm(delay_ticks * self._tick_seconds)
        return task
