# src/todo_tracker/tasks/errors.py

from __future__ import annotations


class TodoError(Exception):
    """Base class for errors the shell reports to the user."""


class ValidationError(TodoError, ValueError):
    """Bad description, due date or priority at task construction time."""


class IndexOutOfRange(TodoError, IndexError):
    """A 1-based display index outside [1, count]."""

    def __init__(self, index: int, count: int) -> None:
        self.index = index
        self.count = count
        if count == 0:
            msg = f"Invalid task number {index}: there are no tasks."
        else:
            msg = f"Invalid task number {index}: expected 1..{count}."
        super().__init__(msg)


class TaskNotFound(TodoError, KeyError):
    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__(task_id)

    def __str__(self) -> str:
        return f"Task id {self.task_id} not found."


class TaskStorageError(TodoError, OSError):
    """Reading or writing the tasks file failed."""
