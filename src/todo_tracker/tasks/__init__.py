# src/todo_tracker/tasks/__init__.py

from .errors import IndexOutOfRange, TaskNotFound, TaskStorageError, TodoError, ValidationError
from .task_models import Task, TaskStatus
from .task_store import CompleteOutcome, TaskStore

__all__ = [
    "CompleteOutcome",
    "IndexOutOfRange",
    "Task",
    "TaskNotFound",
    "TaskStatus",
    "TaskStorageError",
    "TaskStore",
    "TodoError",
    "ValidationError",
]
