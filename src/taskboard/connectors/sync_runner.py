# src/taskboard/connectors/sync_runner.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
from collections.abc import Coroutine
from dataclasses import dataclass
from typing import Any, TypeVar

from ..core.state import AppState
from ..sync.poller import PollingScheduler

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class SyncBackgroundRunner:
    """
    Event loop thread that owns the SyncClient.

    The console REPL is blocking (input()), while the client and the poller are
    async; every client call from the console is submitted to this loop.
    """

    thread: threading.Thread
    loop: asyncio.AbstractEventLoop
    stop_event: asyncio.Event

    def submit(self, coro: Coroutine[Any, Any, T], timeout: float | None = None) -> T:
        fut = asyncio.run_coroutine_threadsafe(coro, self.loop)
        return fut.result(timeout=timeout)

    def stop(self) -> None:
        try:
            self.loop.call_soon_threadsafe(self.stop_event.set)
        except Exception:
            logger.debug("Failed to signal sync loop stop.", exc_info=True)

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


async def _run_sync_loop(state: AppState, stop_event: asyncio.Event) -> None:
    settings = state.settings
    poller_task: asyncio.Task | None = None

    if getattr(settings, "polling_enabled", True):
        poller = PollingScheduler(
            state.client,
            interval_seconds=float(getattr(settings, "poll_interval_seconds", 1.0)),
        )
        poller_task = asyncio.create_task(poller.run())
    else:
        logger.info("Polling disabled; list refreshes only on access.")

    try:
        await stop_event.wait()
    finally:
        if poller_task is not None:
            poller_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await poller_task


def start_sync_in_background(state: AppState) -> SyncBackgroundRunner | None:
    ready = threading.Event()
    holder: dict[str, object] = {}

    def runner() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        stop_event = asyncio.Event()

        holder["loop"] = loop
        holder["stop_event"] = stop_event
        ready.set()

        try:
            loop.run_until_complete(_run_sync_loop(state, stop_event))
        finally:
            with contextlib.suppress(Exception):
                loop.stop()
            with contextlib.suppress(Exception):
                loop.close()

    t = threading.Thread(target=runner, name="taskboard-sync", daemon=True)
    t.start()

    ready.wait(timeout=5.0)
    loop = holder.get("loop")
    stop_event = holder.get("stop_event")

    if not isinstance(loop, asyncio.AbstractEventLoop) or not isinstance(stop_event, asyncio.Event):
        logger.error("Sync thread did not initialize properly.")
        return None

    logger.info("Sync background thread started.")
    return SyncBackgroundRunner(thread=t, loop=loop, stop_event=stop_event)
