# tests/test_logging_setup.py

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from taskboard.logging_setup import (
    _ConsoleNoiseFilter,
    console_threshold,
    parse_level,
    setup_logging,
)


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


@pytest.fixture()
def restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


@pytest.mark.parametrize(
    ("name", "level", "shown"),
    [
        ("taskboard.tasks.task_store", logging.DEBUG, True),
        ("taskboard.sync.poller", logging.INFO, False),
        ("taskboard.sync.poller", logging.WARNING, True),
        ("taskboard.connectors.sync_runner", logging.INFO, False),
        ("taskboard.connectors.console_connector", logging.INFO, True),
        ("py.warnings", logging.WARNING, False),
        ("asyncio", logging.ERROR, True),
    ],
)
def test_console_filter(name: str, level: int, shown: bool) -> None:
    assert _ConsoleNoiseFilter().filter(_record(name, level)) is shown


def test_most_specific_subtree_wins() -> None:
    levels = {"taskboard": logging.WARNING, "taskboard.sync.poller": logging.DEBUG}

    assert console_threshold("taskboard.sync.poller", levels) == logging.DEBUG
    assert console_threshold("taskboard.sync.sync_client", levels) == logging.WARNING
    assert console_threshold("taskboardx", levels, default=logging.CRITICAL) == logging.CRITICAL


def test_parse_level() -> None:
    assert parse_level("debug") == logging.DEBUG
    assert parse_level(" WARNING ") == logging.WARNING
    assert parse_level(logging.ERROR) == logging.ERROR
    assert parse_level("loud") == logging.INFO


@pytest.mark.usefixtures("restore_root_logger")
def test_setup_logging_writes_everything_to_file(tmp_path: Path) -> None:
    log_file = setup_logging(log_dir=tmp_path / "logs", console_level="warning")

    logging.getLogger("taskboard.sync.poller").debug("tick %s", 7)
    for h in logging.getLogger().handlers:
        h.flush()

    assert log_file == tmp_path / "logs" / "taskboard.log"
    assert "taskboard.sync.poller: tick 7" in log_file.read_text(encoding="utf-8")

    console = logging.getLogger().handlers[0]
    assert console.level == logging.WARNING
