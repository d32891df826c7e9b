"""
Periodic post cache refresh.

The scheduler runs one background loop that sleeps for the store's refresh
interval and then refreshes the cache, forever. Reconfiguring the interval
cancels the pending sleep and arms a new loop, so the next tick lands at
``reconfigure time + new interval``. Refreshes themselves are shielded and
always run to completion even when the loop is cancelled underneath them.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from ran_bot.errors import InvalidInput
from ran_bot.memory.cache.store import PostStore

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class RefreshScheduler:
    def __init__(self, store: PostStore, *, sleep: Sleep = asyncio.sleep) -> None:
        self._store = store
        self._sleep = sleep
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def state(self) -> str:
        """``"stopped"``, ``"idle"`` (waiting for the next tick) or ``"refreshing"``."""
        if self._store.refreshing:
            return "refreshing"
        return "idle" if self.running else "stopped"

    @property
    def interval(self) -> float:
        return self._store.refresh_interval

    # ------------------------------------------------------------------ #
    # LIFECYCLE
    # ------------------------------------------------------------------ #

    async def start(self, run_immediately: bool = True) -> None:
        """Optionally refresh once now, then schedule periodic refreshes."""
        if self.running:
            logger.info("Refresh scheduler already running; skipping start")
            return

        if run_immediately:
            try:
                await self._store.refresh()
            except Exception:
                logger.exception("Initial cache refresh failed")
        self._arm()

    async def stop(self) -> None:
        """Cancel the periodic loop if it is running."""
        task, self._task = self._task, None
        if not task:
            return

        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Refresh scheduler stopped")

    def reconfigure(self, interval: float) -> None:
        """
        Change the refresh period.

        The pending tick is dropped and the next refresh happens ``interval``
        seconds from now. No refresh is triggered by the change itself.
        """
        if interval <= 0:
            raise InvalidInput("Refresh interval must be a positive number.")

        self._store.refresh_interval = interval
        logger.info("Refresh interval updated to %gs", interval)

        if self._task is not None:
            self._task.cancel()
            self._arm()

    async def trigger(self) -> bool:
        """Refresh immediately without moving the timer."""
        return await self._store.refresh()

    # ------------------------------------------------------------------ #
    # LOOP
    # ------------------------------------------------------------------ #

    def _arm(self) -> None:
        logger.info("Scheduling cache refresh every %gs", self._store.refresh_interval)
        self._task = asyncio.create_task(self._periodic())

    async def _periodic(self) -> None:
        while True:
            await self._sleep(self._store.refresh_interval)
            try:
                await self._store.refresh()
            except Exception:
                logger.exception("Scheduled cache refresh failed")


__all__ = ["RefreshScheduler"]
