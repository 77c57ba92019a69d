# src/taskboard/tasks/task_store.py

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import replace

from .task_errors import TaskNotFoundError
from .task_models import Task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    In-memory task store.

    The store is the single authority for task identity and ordering:
    - ids are built from a per-store counter plus the creation time
    - the counter starts at 1 and only ever grows (deletes never rewind it)
    - order is derived on every list() call, nothing is indexed

    Thread-safety:
    - every public method runs under one lock per store instance

    Inputs are expected to be validated and trimmed by the caller (see task_api).
    """

    def __init__(self, *, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._tasks: dict[str, Task] = {}
        self._next_seq = 1
        logger.info("TaskStore ready (in-memory)")

    def close(self) -> None:
        """Drop all tasks. The counter is kept so ids are never reissued."""
        with self._lock:
            total = len(self._tasks)
            self._tasks.clear()
        logger.info("TaskStore closed, dropped=%s", total)

    # ---- public API ----

    def count_tasks(self) -> int:
        with self._lock:
            return len(self._tasks)

    def create(self, title: str, description: str | None = None) -> Task:
        with self._lock:
            now = self._clock()
            seq = self._next_seq
            self._next_seq += 1

            task = Task(
                id=f"task_{seq}_{int(now * 1000)}",
                title=title,
                description=description,
                created_at=now,
                seq=seq,
            )
            self._tasks[task.id] = task

        logger.debug("Task created id=%s", task.id)
        return task

    def get_by_id(self, task_id: str) -> Task:
        with self._lock:
            task = self._tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def update(self, task_id: str, title: str, description: str | None = None) -> Task:
        with self._lock:
            existing = self._tasks.get(task_id)
            if existing is None:
                raise TaskNotFoundError(task_id)
            updated = replace(existing, title=title, description=description)
            self._tasks[task_id] = updated

        logger.debug("Task updated id=%s", task_id)
        return updated

    def delete(self, task_id: str) -> Task:
        with self._lock:
            task = self._tasks.pop(task_id, None)
        if task is None:
            raise TaskNotFoundError(task_id)

        logger.debug("Task deleted id=%s", task_id)
        return task

    def list(self) -> list[Task]:
        """
        All tasks, newest first.

        Equal created_at values fall back to the creation counter (higher first),
        so two tasks created in the same tick keep creation order.
        """
        with self._lock:
            # TODO: keep an order-preserving index instead of sorting per call once stores grow.
            return sorted(self._tasks.values(), key=lambda t: (t.created_at, t.seq), reverse=True)
