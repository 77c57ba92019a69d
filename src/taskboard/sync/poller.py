# src/taskboard/sync/poller.py

from __future__ import annotations

"""
Pull-based freshness.

PollingScheduler refreshes the active list view every interval, whether or
not anyone is looking at it, and wakes up early whenever a mutation settles
(the out-of-band tick only refetches views that were invalidated).

InfiniteScrollDriver turns "the sentinel became visible" into at most one
next-page request at a time.
"""

import asyncio
import logging

from .sync_client import SyncClient

logger = logging.getLogger(__name__)


class PollingScheduler:
    def __init__(self, client: SyncClient, *, interval_seconds: float = 1.0) -> None:
        self.client = client
        self.interval_seconds = max(0.01, float(interval_seconds))
        self.ticks = 0
        self._wake: asyncio.Event | None = None
        self._poked = False

    def poke(self) -> None:
        """Request an immediate out-of-band refresh of invalidated views."""
        self._poked = True
        if self._wake is not None:
            self._wake.set()

    async def tick(self, *, force: bool = True) -> None:
        try:
            await self.client.refresh(force=force)
        except Exception:
            logger.exception("Poll refresh failed")
        self.ticks += 1

    async def run(self, stop_event: asyncio.Event | None = None) -> None:
        """
        Poll until cancelled (or until stop_event is set).

        To stop the scheduler, cancel the coroutine/task.
        """
        self._wake = asyncio.Event()
        self.client.add_settle_listener(self.poke)
        logger.info("Polling started interval=%.3fs", self.interval_seconds)

        force = True
        try:
            while stop_event is None or not stop_event.is_set():
                await self.tick(force=force)

                try:
                    await asyncio.wait_for(self._wake.wait(), timeout=self.interval_seconds)
                except asyncio.TimeoutError:
                    pass
                self._wake.clear()

                # Woken by a settlement: only refetch what it invalidated.
                force = not self._poked
                self._poked = False
        finally:
            self.client.remove_settle_listener(self.poke)
            self._wake = None

        logger.info("Polling stopped after %s ticks", self.ticks)


class InfiniteScrollDriver:
    def __init__(self, client: SyncClient) -> None:
        self.client = client

    async def on_sentinel_visible(self, visible: bool = True) -> bool:
        """Returns True when a page was requested and appended."""
        client = self.client
        if not visible or not client.infinite:
            return False
        if client.is_fetching_next_page or not client.has_next_page():
            return False
        return await client.fetch_next_page()
