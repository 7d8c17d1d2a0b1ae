# src/todo_tracker/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    # Settings (or a test stand-in exposing the same attributes).
    settings: Any
    task_store: TaskStore

    @property
    def autosave(self) -> bool:
        return bool(getattr(self.settings, "autosave", False))
