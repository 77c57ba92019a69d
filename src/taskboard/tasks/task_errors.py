# src/taskboard/tasks/task_errors.py

from __future__ import annotations


class TaskError(Exception):
    """Base class for task-domain failures."""


class TaskNotFoundError(TaskError):
    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task with ID {task_id} not found")
        self.task_id = task_id


class TaskValidationError(TaskError):
    """
    Input rejected before the store is touched.

    field_errors maps field name -> user-facing message.
    """

    def __init__(self, field_errors: dict[str, str]) -> None:
        self.field_errors = dict(field_errors)
        super().__init__("; ".join(self.field_errors.values()) or "Invalid input")


class TaskTransportError(TaskError):
    """Network/server failure while talking to the task backend."""
