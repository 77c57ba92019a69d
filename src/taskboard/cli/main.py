# src/taskboard/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, starts the sync loop (client + poller)
in a background thread, then runs the console REPL in the main thread.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state, shutdown_state
from ..config import get_settings
from ..connectors.console_connector import ConsoleNotifier, run_console_loop
from ..connectors.sync_runner import start_sync_in_background
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    setup_logging(
        log_dir=getattr(settings, "data_dir", ".local/taskboard"),
        console_level=getattr(settings, "log_level", "INFO"),
    )

    logger.info("Starting %s...", getattr(settings, "app_name", "taskboard"))

    state = create_initial_state(settings=settings, notifier=ConsoleNotifier())

    runner = start_sync_in_background(state)
    if runner is None:
        logger.error("Sync loop unavailable; exiting.")
        shutdown_state(state)
        return
    state.run = runner.submit

    try:
        run_console_loop(state)
    finally:
        runner.stop()
        runner.join(timeout=10.0)
        shutdown_state(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
