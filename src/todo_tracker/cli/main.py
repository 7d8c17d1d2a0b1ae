# src/todo_tracker/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, loads the tasks file, runs the console
menu, and saves the tasks on the way out.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state, load_tasks, save_tasks
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.state import AppState
from ..logging_setup import level_from_name, setup_logging

logger = logging.getLogger(__name__)


def _shutdown(state: AppState, *, load_failed: bool) -> None:
    """Save before exit; a failed save is reported, not raised."""
    if load_failed and not state.task_store.dirty:
        # Leave the unreadable file untouched.
        logger.warning("Skipping save: tasks file could not be loaded and nothing changed.")
        return
    print(save_tasks(state))


def main() -> None:
    settings = get_settings()

    console_level = level_from_name(settings.log_level, logging.INFO)
    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)

    error = load_tasks(state)
    if error:
        print(error)

    try:
        run_console_loop(state)
    finally:
        _shutdown(state, load_failed=error is not None)
        print("Goodbye!")
        logger.info("Bye.")


if __name__ == "__main__":
    main()
