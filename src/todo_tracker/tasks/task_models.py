# src/todo_tracker/tasks/task_models.py

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from .errors import ValidationError

FIELD_SEPARATOR = "|"

_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$", re.ASCII)
_INT_RE = re.compile(r"^[+-]?\d+$", re.ASCII)


class TaskStatus(StrEnum):
    PENDING = "pending"
    COMPLETED = "completed"

    @property
    def label(self) -> str:
        return "Completed" if self is TaskStatus.COMPLETED else "Pending"


def parse_due_date(text: str) -> date:
    """
    Parse a strict YYYY-MM-DD date.

    Two-digit month and day are required; "2024-1-5" is rejected.
    """
    m = _DATE_RE.match((text or "").strip())
    if not m:
        raise ValidationError("Invalid date format. Please use YYYY-MM-DD.")
    year, month, day = (int(g) for g in m.groups())
    try:
        return date(year, month, day)
    except ValueError as e:
        raise ValidationError(f"Invalid date: {e}.") from e


def parse_priority(text: str) -> int:
    raw = (text or "").strip()
    if not _INT_RE.match(raw):
        raise ValidationError("Invalid number. Please enter a valid integer for priority.")
    value = int(raw)
    if value < 1:
        raise ValidationError("Priority must be a positive integer.")
    return value


def validate_description(description: str) -> str:
    text = (description or "").strip()
    if not text:
        raise ValidationError("Description must not be empty.")
    if FIELD_SEPARATOR in text:
        raise ValidationError(f"Description must not contain '{FIELD_SEPARATOR}'.")
    if "\n" in text or "\r" in text:
        raise ValidationError("Description must be a single line.")
    return text


@dataclass(slots=True)
class Task:
    """
    One to-do item.

    `id` is the store-assigned handle; it is stable for the lifetime of the
    store but is not written to the tasks file. `completed` is the only field
    that changes after construction (see mark_completed).
    """

    id: int
    description: str
    due_date: date
    priority: int
    completed: bool = False

    def __post_init__(self) -> None:
        self.description = validate_description(self.description)
        if not isinstance(self.due_date, date):
            raise ValidationError("Due date must be a calendar date.")
        # bool is an int subclass; True is not a priority.
        if isinstance(self.priority, bool) or not isinstance(self.priority, int):
            raise ValidationError("Priority must be a positive integer.")
        if self.priority < 1:
            raise ValidationError("Priority must be a positive integer.")

    @property
    def status(self) -> TaskStatus:
        return TaskStatus.COMPLETED if self.completed else TaskStatus.PENDING

    @property
    def due_date_text(self) -> str:
        return self.due_date.isoformat()

    def mark_completed(self) -> bool:
        """Set completed; returns False when it already was."""
        if self.completed:
            return False
        self.completed = True
        return True

    def sort_key(self) -> tuple[int, date]:
        return (self.priority, self.due_date)

    def describe(self) -> str:
        return (
            f"Description: {self.description}\n"
            f"Due Date: {self.due_date_text}\n"
            f"Priority: {self.priority}\n"
            f"Status: {self.status.label}"
        )
