# src/taskboard/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) log directory exists,
- wires the store, the request boundary and the sync client into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import Notifier
from ..core.state import AppState
from ..sync.poller import InfiniteScrollDriver
from ..sync.sync_client import SyncClient
from ..tasks.task_api import LocalTaskBackend, TaskService
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None, notifier: Notifier | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    store = TaskStore()
    service = TaskService(store)
    client = SyncClient(
        LocalTaskBackend(service),
        notifier,
        page_size=int(getattr(settings, "page_size", 10)),
        infinite=bool(getattr(settings, "infinite_scroll", False)),
    )

    return AppState(
        settings=settings,
        task_store=store,
        service=service,
        client=client,
        scroll=InfiniteScrollDriver(client),
    )


def shutdown_state(state: AppState) -> None:
    """Best-effort teardown (no exceptions should escape)."""
    try:
        state.task_store.close()
    except Exception:
        logger.exception("TaskStore close failed.")
