# src/taskboard/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps the store, the transport and the presentation layer swappable
and makes testing easier.
"""

from typing import TYPE_CHECKING, Awaitable, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import Page, Task


class TaskRepo(Protocol):
    """Server-side authoritative store."""

    def create(self, title: str, description: str | None = None) -> Task: ...
    def get_by_id(self, task_id: str) -> Task: ...
    def update(self, task_id: str, title: str, description: str | None = None) -> Task: ...
    def delete(self, task_id: str) -> Task: ...
    def list(self) -> list[Task]: ...
    def count_tasks(self) -> int: ...


class TaskBackend(Protocol):
    """
    Client-side view of the six task operations.

    Every call may fail with TaskTransportError in addition to the domain errors
    (TaskNotFoundError, TaskValidationError).
    """

    def create(self, title: str, description: str | None = None) -> Awaitable[Task]: ...
    def list(self) -> Awaitable[list[Task]]: ...
    def list_paginated(self, *, limit: int = 10, cursor: int = 0) -> Awaitable[Page]: ...
    def get_by_id(self, task_id: str) -> Awaitable[Task]: ...
    def update(
            self,
            task_id: str,
            title: str,
            description: str | None = None,
    ) -> Awaitable[Task]: ...
    def delete(self, task_id: str) -> Awaitable[Task]: ...


class Notifier(Protocol):
    """
    Presentation-side port for transient success/error banners.

    The sync layer never formats UI; it only hands over short texts.
    """

    def success(self, text: str) -> None: ...
    def error(self, text: str) -> None: ...
