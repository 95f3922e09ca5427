from __future__ import annotations

import asyncio
import logging
from typing import Optional

from .base import SupportsRegenerate

logger = logging.getLogger("fxdash.rates.scheduler")


class RefreshScheduler:
    """Cancelable periodic task driving `engine.regenerate()` on the running event loop.

    `start()` is idempotent while running. `stop()` on an already stopped scheduler
    is a no-op.
    """

    def __init__(self, engine: SupportsRegenerate, interval_seconds: float = 30.0):
        if interval_seconds <= 0:
            raise ValueError("refresh interval must be positive seconds")
        self._engine = engine
        self._interval = interval_seconds
        self._task: Optional[asyncio.Task[None]] = None
        self.ticks = 0

    @property
    def interval_seconds(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                self._engine.regenerate()
            except Exception:
                logger.exception("scheduled rate regeneration failed")
            else:
                self.ticks += 1

    def start(self) -> None:
        """Schedule the loop on the current event loop. Must be called from a coroutine."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(), name="rate-refresh")
        logger.info("rate refresh scheduled", extra={"interval_seconds": self._interval})

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        # only a cancel aimed at the caller propagates out of wait()
        await asyncio.wait({task})
        logger.info("rate refresh stopped", extra={"ticks": self.ticks})
