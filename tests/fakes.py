# tests/fakes.py

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any

from taskboard.tasks.task_api import TaskService
from taskboard.tasks.task_errors import TaskTransportError


class StepClock:
    """Deterministic clock: every call advances by `step` seconds."""

    def __init__(self, start: float = 1_700_000_000.0, step: float = 1.0) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        return value


@dataclass(slots=True)
class RecordingNotifier:
    successes: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def success(self, text: str) -> None:
        self.successes.append(text)

    def error(self, text: str) -> None:
        self.errors.append(text)


class FakeBackend:
    """
    TaskBackend over a real TaskService, with knobs for tests.

    - fail(op, key): the next matching call raises (default: TaskTransportError)
    - gate(op, key): the next matching call blocks until the returned Event is set
    key matches the first positional argument (task id); None matches any call.
    """

    def __init__(self, service: TaskService) -> None:
        self.service = service
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self._failures: dict[tuple[str, Any], Exception] = {}
        self._gates: dict[tuple[str, Any], asyncio.Event] = {}

    def fail(self, op: str, key: Any = None, exc: Exception | None = None) -> None:
        self._failures[(op, key)] = exc or TaskTransportError("Network error")

    def gate(self, op: str, key: Any = None) -> asyncio.Event:
        ev = asyncio.Event()
        self._gates[(op, key)] = ev
        return ev

    def count(self, op: str) -> int:
        return sum(1 for name, _ in self.calls if name == op)

    def _pop(self, table: dict, op: str, args: tuple[Any, ...]) -> Any:
        first = args[0] if args else None
        for key in ((op, first), (op, None)):
            if key in table:
                return table.pop(key)
        return None

    async def _call(self, op: str, fn, *args: Any, **kwargs: Any) -> Any:
        self.calls.append((op, args))
        gate = self._pop(self._gates, op, args)
        if gate is not None:
            await gate.wait()
        else:
            await asyncio.sleep(0)
        exc = self._pop(self._failures, op, args)
        if exc is not None:
            raise exc
        return fn(*args, **kwargs)

    async def create(self, title: str, description: str | None = None):
        return await self._call("create", self.service.create, title, description)

    async def list(self):
        return await self._call("list", self.service.list)

    async def list_paginated(self, *, limit: int = 10, cursor: int = 0):
        return await self._call("list_paginated", self.service.list_paginated, limit=limit, cursor=cursor)

    async def get_by_id(self, task_id: str):
        return await self._call("get_by_id", self.service.get_by_id, task_id)

    async def update(self, task_id: str, title: str, description: str | None = None):
        return await self._call("update", self.service.update, task_id, title, description)

    async def delete(self, task_id: str):
        return await self._call("delete", self.service.delete, task_id)
