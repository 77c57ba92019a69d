# src/taskboard/logging_setup.py

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from pathlib import Path

LOG_FILE_NAME = "taskboard.log"

# Console threshold per logger subtree; the most specific entry wins.
# The sync package logs on every poll tick and page fetch, so it only reaches
# the console when something went wrong. The log file always gets everything.
CONSOLE_LEVELS: dict[str, int] = {
    "taskboard": logging.DEBUG,
    "taskboard.sync": logging.WARNING,
    "taskboard.connectors.sync_runner": logging.WARNING,
}

# Anything outside the table (asyncio, py.warnings, ...).
OTHER_CONSOLE_LEVEL = logging.ERROR


def console_threshold(
    name: str,
    levels: Mapping[str, int] = CONSOLE_LEVELS,
    default: int = OTHER_CONSOLE_LEVEL,
) -> int:
    parts = name.split(".")
    while parts:
        level = levels.get(".".join(parts))
        if level is not None:
            return level
        parts.pop()
    return default


class _ConsoleNoiseFilter(logging.Filter):
    """Drop records below the console threshold of their logger subtree."""

    def __init__(
        self,
        levels: Mapping[str, int] | None = None,
        default: int = OTHER_CONSOLE_LEVEL,
    ) -> None:
        super().__init__()
        self.levels = dict(CONSOLE_LEVELS if levels is None else levels)
        self.default = default

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= console_threshold(record.name, self.levels, self.default)


def parse_level(value: int | str, default: int = logging.INFO) -> int:
    """'debug' / 'WARNING' / 10 -> logging level; unknown names fall back to default."""
    if isinstance(value, int):
        return value
    return logging.getLevelNamesMapping().get(str(value).strip().upper(), default)


def setup_logging(
    *,
    log_dir: str | Path = ".local/taskboard",
    console_level: int | str = logging.INFO,
    file_level: int | str = logging.DEBUG,
) -> Path:
    """
    Configure the root logger with a filtered console handler and a full log file.

    Call this once, before the first log record. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s [%(threadName)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(parse_level(console_level))
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(parse_level(file_level, logging.DEBUG))
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    logging.captureWarnings(True)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    return log_file
