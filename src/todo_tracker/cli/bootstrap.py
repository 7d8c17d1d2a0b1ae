# src/todo_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the TaskStore into AppState,
- loads tasks at startup and saves them on the way out.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..tasks.errors import TaskStorageError
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)
    return AppState(settings=settings, task_store=TaskStore(settings.tasks_path))


def load_tasks(state: AppState) -> str | None:
    """
    Load the tasks file into the store.

    Returns a user-facing error message when the file exists but cannot be
    read; the store then stays empty and the app keeps running.
    """
    try:
        n = state.task_store.load()
    except TaskStorageError as e:
        logger.error("Failed to load tasks: %s", e)
        return str(e)
    logger.info("Startup: %d tasks loaded.", n)
    return None


def save_tasks(state: AppState) -> str:
    """Save and return the message to show the user (success or failure)."""
    store = state.task_store
    try:
        store.save()
    except TaskStorageError as e:
        logger.error("Failed to save tasks: %s", e)
        return str(e)
    return f"Tasks saved successfully to {store.path}"
