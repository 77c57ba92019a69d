# src/taskboard/tasks/pagination.py

from __future__ import annotations

"""
Offset-cursor pagination over the store's ordered view.

The cursor is a plain position in list() output at the moment of the call,
not an anchor tied to a task. Inserts or deletes between two page fetches
shift every later position, so a task can be skipped or shown twice across
adjacent pages. Callers rely on this contract; an anchored cursor
(created_at + id of the last item) would change what pages they observe.
"""

from collections.abc import Sequence

from ..core.ports import TaskRepo
from .task_models import PAGE_LIMIT_DEFAULT, PAGE_LIMIT_MAX, PAGE_LIMIT_MIN, Page, Task


def clamp_limit(limit: int | None) -> int:
    if limit is None:
        return PAGE_LIMIT_DEFAULT
    return max(PAGE_LIMIT_MIN, min(PAGE_LIMIT_MAX, int(limit)))


def paginate(tasks: Sequence[Task], *, limit: int | None = None, cursor: int | None = None) -> Page:
    """Slice [cursor, cursor+limit) out of an already ordered sequence."""
    size = clamp_limit(limit)
    start = max(0, int(cursor or 0))
    total = len(tasks)
    end = start + size

    return Page(
        items=list(tasks[start:end]),
        total_count=total,
        next_cursor=end if end < total else None,
    )


def list_paginated(repo: TaskRepo, *, limit: int | None = None, cursor: int | None = None) -> Page:
    return paginate(repo.list(), limit=limit, cursor=cursor)
