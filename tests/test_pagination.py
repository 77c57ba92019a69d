# tests/test_pagination.py

from __future__ import annotations

import pytest

from taskboard.tasks.pagination import paginate
from taskboard.tasks.task_api import TaskService
from taskboard.tasks.task_errors import TaskValidationError


def _fill(service: TaskService, n: int) -> None:
    for i in range(n):
        service.create(f"task {i}")


def test_pages_partition_the_list(service: TaskService) -> None:
    _fill(service, 25)

    pages = [service.list_paginated(limit=10, cursor=c) for c in (0, 10, 20)]

    assert [len(p.items) for p in pages] == [10, 10, 5]
    assert [p.next_cursor for p in pages] == [10, 20, None]
    assert all(p.total_count == 25 for p in pages)
    assert [t for p in pages for t in p.items] == service.list()


def test_two_task_scenario(service: TaskService) -> None:
    service.create("Buy milk")
    service.create("Walk dog", "with leash")

    first = service.list_paginated(limit=1, cursor=0)
    assert [t.title for t in first.items] == ["Walk dog"]
    assert first.next_cursor == 1
    assert first.total_count == 2

    second = service.list_paginated(limit=1, cursor=1)
    assert [t.title for t in second.items] == ["Buy milk"]
    assert second.next_cursor is None
    assert second.total_count == 2


def test_defaults_are_limit_10_cursor_0(service: TaskService) -> None:
    _fill(service, 12)
    page = service.list_paginated()
    assert len(page.items) == 10
    assert page.next_cursor == 10


def test_cursor_past_the_end(service: TaskService) -> None:
    _fill(service, 3)
    page = service.list_paginated(limit=10, cursor=50)
    assert page.items == []
    assert page.next_cursor is None
    assert page.total_count == 3


def test_empty_store_has_single_terminal_page(service: TaskService) -> None:
    page = service.list_paginated()
    assert page.items == []
    assert page.next_cursor is None
    assert page.total_count == 0


@pytest.mark.parametrize(
    ("limit", "cursor", "field"),
    [(0, 0, "limit"), (101, 0, "limit"), (10, -1, "cursor")],
)
def test_out_of_range_arguments_rejected(service: TaskService, limit, cursor, field) -> None:
    with pytest.raises(TaskValidationError) as ei:
        service.list_paginated(limit=limit, cursor=cursor)
    assert field in ei.value.field_errors


def test_paginate_clamps_direct_callers(service: TaskService) -> None:
    _fill(service, 5)
    tasks = service.list()

    assert len(paginate(tasks, limit=0).items) == 1
    assert len(paginate(tasks, limit=1000).items) == 5
    assert paginate(tasks, limit=2, cursor=-3).items == tasks[:2]


def test_insert_between_fetches_shifts_offsets(service: TaskService) -> None:
    # Offset cursors are positional: a new task pushes everything down by one,
    # so the next page starts with the last item already seen.
    _fill(service, 4)
    first = service.list_paginated(limit=2, cursor=0)

    service.create("newcomer")
    second = service.list_paginated(limit=2, cursor=first.next_cursor)

    assert second.items[0] == first.items[-1]
