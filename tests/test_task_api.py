# tests/test_task_api.py

from __future__ import annotations

import pytest

from taskboard.tasks.task_api import TaskService, clean_task_input
from taskboard.tasks.task_errors import TaskNotFoundError, TaskValidationError
from taskboard.tasks.task_store import TaskStore


def test_create_trims_and_drops_blank_description(service: TaskService) -> None:
    task = service.create("  Buy milk  ", "   ")
    assert task.title == "Buy milk"
    assert task.description is None

    got = service.get_by_id(task.id)
    assert got.title == "Buy milk"
    assert got.created_at == task.created_at


def test_create_keeps_trimmed_description(service: TaskService) -> None:
    task = service.create("Walk dog", "  with leash ")
    assert task.description == "with leash"


@pytest.mark.parametrize(
    ("title", "description", "field", "message"),
    [
        ("", None, "title", "Title is required"),
        ("    ", None, "title", "Title is required"),
        ("x" * 101, None, "title", "Title must be at most 100 characters"),
        ("ok", "d" * 501, "description", "Description must be at most 500 characters"),
    ],
)
def test_invalid_input_is_rejected_before_store(
    store: TaskStore, service: TaskService, title, description, field, message
) -> None:
    with pytest.raises(TaskValidationError) as ei:
        service.create(title, description)

    assert ei.value.field_errors == {field: message}
    assert store.count_tasks() == 0


def test_length_limits_apply_after_trimming() -> None:
    title, desc = clean_task_input("  " + "x" * 100 + "  ", " " + "d" * 500 + " ")
    assert len(title) == 100
    assert desc is not None and len(desc) == 500


def test_both_fields_reported_together() -> None:
    with pytest.raises(TaskValidationError) as ei:
        clean_task_input("", "d" * 501)
    assert set(ei.value.field_errors) == {"title", "description"}


def test_update_scenario_keeps_identity(service: TaskService) -> None:
    milk = service.create("Buy milk")
    service.create("Walk dog", "with leash")

    updated = service.update(milk.id, "Buy oat milk")

    assert updated.id == milk.id
    assert updated.created_at == milk.created_at
    assert updated.title == "Buy oat milk"
    assert [t.title for t in service.list()] == ["Walk dog", "Buy oat milk"]


def test_update_validates_before_lookup(service: TaskService) -> None:
    task = service.create("Buy milk")
    with pytest.raises(TaskValidationError):
        service.update(task.id, "")
    assert service.get_by_id(task.id).title == "Buy milk"


def test_update_and_delete_missing(service: TaskService) -> None:
    with pytest.raises(TaskNotFoundError):
        service.update("task_999", "x")
    with pytest.raises(TaskNotFoundError):
        service.delete("task_999")
