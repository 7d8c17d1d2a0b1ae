# src/todo_tracker/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import os
from datetime import date
from enum import StrEnum
from pathlib import Path

from .errors import IndexOutOfRange, TaskNotFound, TaskStorageError, ValidationError
from .task_codec import decode_bytes, encode_tasks
from .task_models import Task

logger = logging.getLogger(__name__)


class CompleteOutcome(StrEnum):
    COMPLETED = "completed"
    ALREADY_COMPLETED = "already_completed"


class TaskStore:
    """
    In-memory task collection backed by a flat text file.

    Ordering:
    - the collection keeps insertion order; that is the order written by save()
    - list_for_display() returns a sorted copy (priority, then due date) and
      remembers it, so complete()/remove() can address tasks by the 1-based
      position the user just saw

    Every task also carries a store-assigned id that never changes while the
    store lives; the *_by_id methods use it and do not depend on a listing.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self._path = Path(path) if path is not None else None
        self._tasks: list[Task] = []
        self._next_id = 1
        self._last_listing: list[int] | None = None
        self._dirty = False

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def dirty(self) -> bool:
        """True when there are changes since the last load/save."""
        return self._dirty

    def __len__(self) -> int:
        return len(self._tasks)

    def is_empty(self) -> bool:
        return not self._tasks

    @property
    def listing_stale(self) -> bool:
        """True when tasks were added after the last display listing."""
        return self._last_listing is not None and len(self._last_listing) != len(self._tasks)

    def count_completed(self) -> int:
        return sum(1 for t in self._tasks if t.completed)

    def tasks(self) -> list[Task]:
        """Copy of the collection in insertion order."""
        return list(self._tasks)

    # ---- low-level helpers ----

    def _allocate_id(self) -> int:
        tid = self._next_id
        self._next_id += 1
        return tid

    def _resolve_path(self, path: str | Path | None) -> Path:
        if path is not None:
            return Path(path)
        if self._path is None:
            raise TaskStorageError("No tasks file configured for this store.")
        return self._path

    def _current_listing(self) -> list[int]:
        if self._last_listing is None:
            self._last_listing = [t.id for t in self._sorted()]
        return self._last_listing

    def _sorted(self) -> list[Task]:
        # sorted() is stable: equal keys keep insertion order.
        return sorted(self._tasks, key=Task.sort_key)

    def _id_at(self, display_index: int) -> int:
        listing = self._current_listing()
        if isinstance(display_index, bool) or not 1 <= display_index <= len(listing):
            raise IndexOutOfRange(display_index, len(listing))
        return listing[display_index - 1]

    # ---- public API ----

    def add(self, description: str, due_date: date, priority: int) -> Task:
        task = Task(
            id=self._allocate_id(),
            description=description,
            due_date=due_date,
            priority=priority,
        )
        self._tasks.append(task)
        self._dirty = True
        logger.debug(
            "Task added id=%s priority=%s due=%s", task.id, task.priority, task.due_date_text
        )
        return task

    def list_for_display(self) -> list[Task]:
        ordered = self._sorted()
        self._last_listing = [t.id for t in ordered]
        return ordered

    def get(self, task_id: int) -> Task:
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise TaskNotFound(task_id)

    def complete(self, display_index: int) -> CompleteOutcome:
        return self.complete_by_id(self._id_at(display_index))

    def complete_by_id(self, task_id: int) -> CompleteOutcome:
        task = self.get(task_id)
        if not task.mark_completed():
            return CompleteOutcome.ALREADY_COMPLETED
        self._dirty = True
        logger.debug("Task completed id=%s", task_id)
        return CompleteOutcome.COMPLETED

    def remove(self, display_index: int) -> Task:
        return self.remove_by_id(self._id_at(display_index))

    def remove_by_id(self, task_id: int) -> Task:
        task = self.get(task_id)
        self._tasks.remove(task)
        if self._last_listing is not None:
            with contextlib.suppress(ValueError):
                self._last_listing.remove(task_id)
        self._dirty = True
        logger.debug("Task removed id=%s", task_id)
        return task

    def load(self, source: str | Path | None = None) -> int:
        """
        Replace the collection with the tasks stored in `source`.

        Missing file -> collection left as-is, returns 0.
        Malformed lines are dropped. Returns the number of tasks loaded.
        """
        path = self._resolve_path(source)
        if not path.exists():
            logger.info("No tasks file at %s; starting empty.", path)
            return 0

        try:
            raw = path.read_bytes()
        except OSError as e:
            raise TaskStorageError(f"Error reading tasks from {path}: {e}") from e

        records = list(decode_bytes(raw))

        loaded: list[Task] = []
        for rec in records:
            try:
                loaded.append(
                    Task(
                        id=self._allocate_id(),
                        description=rec.description,
                        due_date=rec.due_date,
                        priority=rec.priority,
                        completed=rec.completed,
                    )
                )
            except ValidationError:
                logger.debug("Skipping invalid record: %r", rec)

        self._tasks = loaded
        self._last_listing = None
        self._dirty = False
        logger.info("Loaded %d tasks from %s", len(loaded), path)
        return len(loaded)

    def save(self, destination: str | Path | None = None) -> None:
        """Overwrite `destination` with every task, in insertion order."""
        path = self._resolve_path(destination)
        tmp = path.with_name(path.name + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(encode_tasks(self._tasks), "utf-8")
            os.replace(tmp, path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise TaskStorageError(f"Error saving tasks to {path}: {e}") from e

        self._dirty = False
        logger.info("Saved %d tasks to %s", len(self._tasks), path)
