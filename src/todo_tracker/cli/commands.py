# src/todo_tracker/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from ..core.state import AppState
from ..tasks.errors import IndexOutOfRange, TodoError, ValidationError
from ..tasks.task_models import Task, parse_due_date, parse_priority
from ..tasks.task_store import CompleteOutcome
from .bootstrap import save_tasks

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        Store errors (bad index, bad date, ...) become the reply text.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            return handler(state, args)
        except TodoError as e:
            return str(e)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def render_listing(tasks: Sequence[Task]) -> str:
    if not tasks:
        return "No tasks found."
    lines = ["Current tasks:"]
    for i, task in enumerate(tasks, start=1):
        lines.append(f"--- Task #{i} ---")
        lines.append(task.describe())
    return "\n".join(lines)


def parse_index(text: str) -> int:
    raw = text.strip()
    if not (raw.isascii() and raw.isdigit()):
        raise ValidationError("Please enter a valid task number.")
    return int(raw)


def after_change(state: AppState, reply: str) -> str:
    """Append the autosave result to `reply` when autosave is on."""
    if not state.autosave:
        return reply
    return f"{reply}\n{save_tasks(state)}"


def _stale_hint(state: AppState, err: IndexOutOfRange) -> str:
    if state.task_store.listing_stale:
        return f"{err} Tasks were added since the last listing; run /list to refresh the numbers."
    return str(err)


def complete_message(outcome: CompleteOutcome) -> str:
    if outcome is CompleteOutcome.ALREADY_COMPLETED:
        return "Task is already marked as completed."
    return "Task marked as completed!"


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    return render_listing(state.task_store.list_for_display())


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add 2024-05-01 2 Buy milk
    """
    if len(args) < 3:
        return "Usage: /add YYYY-MM-DD PRIORITY DESCRIPTION"
    due_date = parse_due_date(args[0])
    priority = parse_priority(args[1])
    task = state.task_store.add(" ".join(args[2:]), due_date, priority)
    return after_change(state, f"Task added successfully! ({task.description})")


def cmd_done(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /done N (N from the last /list)"
    try:
        outcome = state.task_store.complete(parse_index(args[0]))
    except IndexOutOfRange as e:
        return _stale_hint(state, e)
    if outcome is CompleteOutcome.ALREADY_COMPLETED:
        return complete_message(outcome)
    return after_change(state, complete_message(outcome))


def cmd_rm(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /rm N (N from the last /list)"
    try:
        removed = state.task_store.remove(parse_index(args[0]))
    except IndexOutOfRange as e:
        return _stale_hint(state, e)
    return after_change(state, f"Removed task: {removed.description}")


def cmd_save(state: AppState, args: list[str]) -> str:
    return save_tasks(state)


def cmd_status(state: AppState, args: list[str]) -> str:
    store = state.task_store
    total = len(store)
    done = store.count_completed()
    unsaved = "yes" if store.dirty else "no"
    return (
        "Status:\n"
        f"  Tasks: {total} ({done} completed, {total - done} pending)\n"
        f"  File: {store.path}\n"
        f"  Autosave: {'ON' if state.autosave else 'OFF'}\n"
        f"  Unsaved changes: {unsaved}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show tasks by priority, then due date.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add YYYY-MM-DD PRIORITY DESCRIPTION.")
registry.register("done", cmd_done, help_text="Mark task N (from the last listing) completed.")
registry.register("rm", cmd_rm, help_text="Remove task N (from the last listing).", aliases=["remove"])
registry.register("save", cmd_save, help_text="Save tasks to the tasks file.")
registry.register("status", cmd_status, help_text="Show task counts and storage settings.")
