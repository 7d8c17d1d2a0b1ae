# src/todo_tracker/tasks/task_codec.py

"""
Flat-file record format for the task store.

One task per line, four pipe-separated fields in fixed order:

    description|YYYY-MM-DD|priority|completed

Decoding is lenient: a line that cannot become a task is dropped and the
rest of the file still loads.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import date

from .errors import ValidationError
from .task_models import FIELD_SEPARATOR, Task, parse_due_date, parse_priority

logger = logging.getLogger(__name__)

FIELD_COUNT = 4
DEFAULT_PRIORITY = 1


@dataclass(frozen=True, slots=True)
class Record:
    description: str
    due_date: date
    priority: int
    completed: bool


def decode_record(line: str) -> Record | None:
    """Decode one line; None when the line is blank or malformed."""
    line = line.rstrip("\r\n")
    if not line.strip():
        return None

    parts = line.split(FIELD_SEPARATOR)
    # Trailing empty fields do not count: "X|2024-01-01|1|" has three.
    while parts and parts[-1] == "":
        parts.pop()
    if len(parts) != FIELD_COUNT:
        logger.debug("Skipping record with %d fields: %r", len(parts), line)
        return None

    description, raw_date, raw_priority, raw_completed = parts
    if not description.strip():
        logger.debug("Skipping record with empty description: %r", line)
        return None

    try:
        due_date = parse_due_date(raw_date)
    except ValidationError:
        logger.debug("Skipping record with bad date %r", raw_date)
        return None

    try:
        priority = parse_priority(raw_priority)
    except ValidationError:
        logger.debug("Bad priority %r, defaulting to %d", raw_priority, DEFAULT_PRIORITY)
        priority = DEFAULT_PRIORITY

    return Record(
        description=description,
        due_date=due_date,
        priority=priority,
        completed=raw_completed.strip().lower() == "true",
    )


def decode_lines(lines: Iterable[str]) -> Iterator[Record]:
    for line in lines:
        rec = decode_record(line)
        if rec is not None:
            yield rec


def decode_bytes(raw: bytes) -> Iterator[Record]:
    """Decode file contents line by line; lines that are not valid UTF-8 are dropped."""
    for lineno, chunk in enumerate(raw.splitlines(), start=1):
        try:
            line = chunk.decode("utf-8")
        except UnicodeDecodeError:
            logger.debug("Skipping line %d: not valid UTF-8", lineno)
            continue
        rec = decode_record(line)
        if rec is not None:
            yield rec


def encode_task(task: Task) -> str:
    return FIELD_SEPARATOR.join(
        (
            task.description,
            task.due_date_text,
            str(task.priority),
            "true" if task.completed else "false",
        )
    )


def encode_tasks(tasks: Iterable[Task]) -> str:
    """Whole-file text: one newline-terminated line per task, in the given order."""
    return "".join(encode_task(t) + "\n" for t in tasks)
