"""Fixed-rate asyncio clock that drives the game."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

TickCallback = Callable[[], Awaitable[None]]


class Ticker:
    """Calls an async callback every `interval` seconds until stopped.

    Each tick is awaited before the next sleep starts, so ticks never overlap.
    """

    def __init__(self, callback: TickCallback, interval: float = 0.1):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.callback = callback
        self.interval = interval
        self.ticks = 0
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start ticking on the running event loop. No-op if already running."""
        if self.running:
            return
        self._task = asyncio.create_task(self._run())

    async def _run(self) -> None:
        try:
            while self._task is asyncio.current_task():
                await asyncio.sleep(self.interval)
                await self.callback()
                self.ticks += 1
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Tick callback failed; ticker stopped")

    async def stop(self) -> None:
        """Cancel the tick task and wait for it to finish."""
        task, self._task = self._task, None
        if task is None:
            return
        if task is asyncio.current_task():
            # Stopping from inside a tick: the loop exits once the callback returns
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
