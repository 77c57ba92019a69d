# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskboard.cli.bootstrap import create_initial_state
from taskboard.core.state import AppState
from taskboard.sync.sync_client import SyncClient
from taskboard.tasks.task_api import TaskService
from taskboard.tasks.task_store import TaskStore

from .fakes import FakeBackend, RecordingNotifier, StepClock


@pytest.fixture()
def clock() -> StepClock:
    return StepClock()


@pytest.fixture()
def store(clock: StepClock) -> TaskStore:
    return TaskStore(clock=clock)


@pytest.fixture()
def service(store: TaskStore) -> TaskService:
    return TaskService(store)


@pytest.fixture()
def backend(service: TaskService) -> FakeBackend:
    return FakeBackend(service)


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def client(backend: FakeBackend, notifier: RecordingNotifier) -> SyncClient:
    return SyncClient(backend, notifier, page_size=10)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskboard-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        poll_interval_ms=1000,
        poll_interval_seconds=1.0,
        polling_enabled=False,
        page_size=2,
        infinite_scroll=False,
    )


@pytest.fixture()
def state(settings: SimpleNamespace, notifier: RecordingNotifier) -> AppState:
    """
    AppState wired like the real CLI (real store, in-process backend).

    Commands drive the client with asyncio.run, one loop per call.
    """
    return create_initial_state(settings=settings, notifier=notifier)
