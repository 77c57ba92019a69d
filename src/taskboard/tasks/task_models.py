# src/taskboard/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

TITLE_MAX_LEN = 100
DESCRIPTION_MAX_LEN = 500

PAGE_LIMIT_MIN = 1
PAGE_LIMIT_MAX = 100
PAGE_LIMIT_DEFAULT = 10


@dataclass(slots=True, frozen=True)
class Task:
    """
    A single short text task.

    Notes:
    - description is None when absent (never an empty string)
    - seq is the creation-counter value baked into the id; it only breaks
      ordering ties between tasks created within the same clock tick
    """

    id: str
    title: str
    created_at: float
    description: str | None = None
    seq: int = field(default=0, compare=False)

    @property
    def created_dt(self) -> datetime:
        return datetime.fromtimestamp(self.created_at).astimezone()


@dataclass(slots=True, frozen=True)
class Page:
    items: list[Task]
    total_count: int
    next_cursor: int | None = None

    @property
    def has_more(self) -> bool:
        return self.next_cursor is not None


def format_created(task: Task) -> str:
    """Medium date + short time, e.g. '19 Oct 2026, 14:05'."""
    return task.created_dt.strftime("%d %b %Y, %H:%M")
