# src/taskboard/core/state.py

from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from typing import Any

from ..sync.poller import InfiniteScrollDriver
from ..sync.sync_client import SyncClient
from ..tasks.task_api import TaskService
from ..tasks.task_store import TaskStore

Runner = Callable[[Coroutine[Any, Any, Any]], Any]


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Any

    task_store: TaskStore
    service: TaskService
    client: SyncClient
    scroll: InfiniteScrollDriver

    # How synchronous callers (console commands) drive client coroutines.
    # main() swaps this for the background sync loop.
    run: Runner = asyncio.run
