# src/taskboard/tasks/task_api.py

from __future__ import annotations

import asyncio
import logging

from ..core.ports import TaskRepo
from .pagination import list_paginated
from .task_errors import TaskValidationError
from .task_models import (
    DESCRIPTION_MAX_LEN,
    PAGE_LIMIT_DEFAULT,
    PAGE_LIMIT_MAX,
    PAGE_LIMIT_MIN,
    TITLE_MAX_LEN,
    Page,
    Task,
)

logger = logging.getLogger(__name__)


def clean_task_input(title: str | None, description: str | None) -> tuple[str, str | None]:
    """
    Validate and trim user input for create/update.

    Returns (title, description) where description is None when missing or blank.
    Raises TaskValidationError with per-field messages.
    """
    errors: dict[str, str] = {}

    clean_title = (title or "").strip()
    if not clean_title:
        errors["title"] = "Title is required"
    elif len(clean_title) > TITLE_MAX_LEN:
        errors["title"] = f"Title must be at most {TITLE_MAX_LEN} characters"

    clean_desc = (description or "").strip() or None
    if clean_desc is not None and len(clean_desc) > DESCRIPTION_MAX_LEN:
        errors["description"] = f"Description must be at most {DESCRIPTION_MAX_LEN} characters"

    if errors:
        raise TaskValidationError(errors)
    return clean_title, clean_desc


def check_page_args(limit: int | None, cursor: int | None) -> tuple[int, int]:
    errors: dict[str, str] = {}

    lim = PAGE_LIMIT_DEFAULT if limit is None else limit
    cur = 0 if cursor is None else cursor

    if isinstance(lim, bool) or not isinstance(lim, int) or not PAGE_LIMIT_MIN <= lim <= PAGE_LIMIT_MAX:
        errors["limit"] = f"Limit must be between {PAGE_LIMIT_MIN} and {PAGE_LIMIT_MAX}"
    if isinstance(cur, bool) or not isinstance(cur, int) or cur < 0:
        errors["cursor"] = "Cursor must be a non-negative integer"

    if errors:
        raise TaskValidationError(errors)
    return lim, cur


class TaskService:
    """
    Request boundary in front of the store.

    Validation and trimming happen here; the store only ever sees clean input.
    """

    def __init__(self, repo: TaskRepo) -> None:
        self._repo = repo

    def create(self, title: str, description: str | None = None) -> Task:
        clean_title, clean_desc = clean_task_input(title, description)
        task = self._repo.create(clean_title, clean_desc)
        logger.info("Task created id=%s", task.id)
        return task

    def list(self) -> list[Task]:
        return self._repo.list()

    def list_paginated(self, *, limit: int | None = None, cursor: int | None = None) -> Page:
        lim, cur = check_page_args(limit, cursor)
        return list_paginated(self._repo, limit=lim, cursor=cur)

    def get_by_id(self, task_id: str) -> Task:
        return self._repo.get_by_id(task_id)

    def update(self, task_id: str, title: str, description: str | None = None) -> Task:
        clean_title, clean_desc = clean_task_input(title, description)
        task = self._repo.update(task_id, clean_title, clean_desc)
        logger.info("Task updated id=%s", task.id)
        return task

    def delete(self, task_id: str) -> Task:
        task = self._repo.delete(task_id)
        logger.info("Task deleted id=%s", task.id)
        return task


class LocalTaskBackend:
    """
    In-process TaskBackend: awaitable wrappers around a TaskService.

    Each call yields to the event loop once before touching the service, so
    client-side races (poll vs. mutation) interleave the way they would over a
    real transport.
    """

    def __init__(self, service: TaskService) -> None:
        self._service = service

    async def create(self, title: str, description: str | None = None) -> Task:
        await asyncio.sleep(0)
        return self._service.create(title, description)

    async def list(self) -> list[Task]:
        await asyncio.sleep(0)
        return self._service.list()

    async def list_paginated(self, *, limit: int = PAGE_LIMIT_DEFAULT, cursor: int = 0) -> Page:
        await asyncio.sleep(0)
        return self._service.list_paginated(limit=limit, cursor=cursor)

    async def get_by_id(self, task_id: str) -> Task:
        await asyncio.sleep(0)
        return self._service.get_by_id(task_id)

    async def update(self, task_id: str, title: str, description: str | None = None) -> Task:
        await asyncio.sleep(0)
        return self._service.update(task_id, title, description)

    async def delete(self, task_id: str) -> Task:
        await asyncio.sleep(0)
        return self._service.delete(task_id)
