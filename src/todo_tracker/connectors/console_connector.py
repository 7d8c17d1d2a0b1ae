# src/todo_tracker/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from ..cli.bootstrap import save_tasks
from ..cli.commands import after_change, complete_message, parse_index, render_listing
from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..tasks.errors import IndexOutOfRange, ValidationError
from ..tasks.task_models import parse_due_date, parse_priority, validate_description
from ..tasks.task_store import CompleteOutcome

logger = logging.getLogger(__name__)

Reader = Callable[[str], str]
Writer = Callable[[str], None]

T = TypeVar("T")

MENU = (
    "\n=== To-Do List Manager ===\n"
    "1. Add a new task\n"
    "2. View all tasks\n"
    "3. Mark a task as completed\n"
    "4. Remove a task\n"
    "5. Save tasks to file\n"
    "6. Exit\n"
    "(or type /help for commands)"
)


def _ask(read: Reader, write: Writer, prompt: str, parse: Callable[[str], T]) -> T:
    """Prompt until `parse` accepts the answer; ValidationError text is shown."""
    while True:
        raw = read(prompt)
        try:
            return parse(raw)
        except ValidationError as e:
            write(str(e))


def _ask_index(state: AppState, read: Reader, write: Writer, prompt: str) -> int:
    count = len(state.task_store)

    def parse(raw: str) -> int:
        index = parse_index(raw)
        if not 1 <= index <= count:
            raise ValidationError(str(IndexOutOfRange(index, count)))
        return index

    return _ask(read, write, prompt, parse)


def _add_task(state: AppState, read: Reader, write: Writer) -> None:
    description = _ask(read, write, "Enter task description: ", validate_description)
    due_date = _ask(read, write, "Enter due date (YYYY-MM-DD): ", parse_due_date)
    priority = _ask(read, write, "Enter priority (1 = highest priority): ", parse_priority)
    state.task_store.add(description, due_date, priority)
    write(after_change(state, "Task added successfully!"))


def _view_tasks(state: AppState, write: Writer) -> None:
    write(render_listing(state.task_store.list_for_display()))


def _complete_task(state: AppState, read: Reader, write: Writer) -> None:
    if state.task_store.is_empty():
        write("No tasks to mark as completed.")
        return
    _view_tasks(state, write)
    index = _ask_index(state, read, write, "Enter the task number to mark as completed: ")
    outcome = state.task_store.complete(index)
    message = complete_message(outcome)
    if outcome is CompleteOutcome.COMPLETED:
        message = after_change(state, message)
    write(message)


def _remove_task(state: AppState, read: Reader, write: Writer) -> None:
    if state.task_store.is_empty():
        write("No tasks to remove.")
        return
    _view_tasks(state, write)
    index = _ask_index(state, read, write, "Enter the task number to remove: ")
    removed = state.task_store.remove(index)
    write(after_change(state, f"Removed task: {removed.description}"))


def run_console_loop(
    state: AppState, read: Reader | None = None, write: Writer | None = None
) -> None:
    """
    Interactive menu loop. Returns when the user exits (6, /exit, /quit, EOF,
    Ctrl+C); saving on exit is left to the caller.
    """
    read = read or input
    write = write or print
    logger.info("Console started (tasks=%d).", len(state.task_store))

    while True:
        try:
            write(MENU)
            choice = read("Enter your choice: ").strip()

            if not choice:
                continue

            if choice == "6" or choice.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            if choice.startswith("/"):
                try:
                    reply = command_registry.handle(state, choice)
                except Exception:
                    logger.exception("Command handler crashed.")
                    reply = "Internal error while handling a command."
                if reply is not None:
                    write(reply)
                continue

            if choice == "1":
                _add_task(state, read, write)
            elif choice == "2":
                _view_tasks(state, write)
            elif choice == "3":
                _complete_task(state, read, write)
            elif choice == "4":
                _remove_task(state, read, write)
            elif choice == "5":
                write(save_tasks(state))
            else:
                write("Invalid choice. Please select a valid option.")
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            write("")
            break

    logger.info("Console finished.")
