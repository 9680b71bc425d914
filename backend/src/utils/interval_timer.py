"""Interval timers for periodic work on the event loop.

Sessions receive a timer instead of scheduling tasks themselves, so tests can
swap in a timer they fire by hand.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Protocol

logger = logging.getLogger(__name__)

TickCallback = Callable[[], Awaitable[object]]


class IntervalTimer(Protocol):
    @property
    def active(self) -> bool: ...

    def start(self, interval_s: float, callback: TickCallback) -> None: ...

    def cancel(self) -> None: ...


class AsyncioIntervalTimer:
    """Runs `callback` every `interval_s` seconds on the running loop.

    Fixed interval, no backoff. A failing tick is logged and the next tick
    still runs.
    """

    def __init__(self, sleep: Callable[[float], Awaitable[None]] = asyncio.sleep) -> None:
        self._sleep = sleep
        self._task: asyncio.Task[None] | None = None

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, interval_s: float, callback: TickCallback) -> None:
        if self.active:
            raise RuntimeError("Timer already started")
        self._task = asyncio.get_running_loop().create_task(self._run(interval_s, callback))

    def cancel(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def _run(self, interval_s: float, callback: TickCallback) -> None:
        while True:
            await self._sleep(interval_s)
            try:
                await callback()
            except Exception:
                logger.exception("Interval tick failed")
