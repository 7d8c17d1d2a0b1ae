# tests/test_console_connector.py

from __future__ import annotations

from datetime import date

from todo_tracker.connectors.console_connector import run_console_loop

from .fakes import ScriptedConsole


def test_add_reprompts_until_valid(state) -> None:
    console = ScriptedConsole(
        [
            "1",
            "",  # empty description
            "Renew passport",
            "next week",  # bad date
            "2024-09-01",
            "zero",  # not a number
            "0",  # not positive
            "2",
            "6",
        ]
    )
    run_console_loop(state, read=console.read, write=console.write)

    (task,) = state.task_store.tasks()
    assert (task.description, task.due_date, task.priority) == (
        "Renew passport",
        date(2024, 9, 1),
        2,
    )
    assert "Description must not be empty." in console.output
    assert "Invalid date format. Please use YYYY-MM-DD." in console.output
    assert "Invalid number. Please enter a valid integer for priority." in console.output
    assert "Priority must be a positive integer." in console.output
    assert "Task added successfully!" in console.output


def test_view_complete_and_remove(state) -> None:
    store = state.task_store
    store.add("Low", date(2024, 1, 1), 5)
    store.add("High", date(2024, 1, 1), 1)

    console = ScriptedConsole(["2", "3", "9", "1", "3", "1", "4", "2", "6"])
    run_console_loop(state, read=console.read, write=console.write)

    assert "--- Task #1 ---\nDescription: High" in console.text
    assert "Invalid task number 9: expected 1..2." in console.output
    assert "Task marked as completed!" in console.output
    assert "Task is already marked as completed." in console.output
    assert "Removed task: Low" in console.output
    assert [(t.description, t.completed) for t in store.tasks()] == [("High", True)]


def test_empty_store_messages(state) -> None:
    console = ScriptedConsole(["2", "3", "4", "7", "/nope"])
    run_console_loop(state, read=console.read, write=console.write)

    assert "No tasks found." in console.output
    assert "No tasks to mark as completed." in console.output
    assert "No tasks to remove." in console.output
    assert "Invalid choice. Please select a valid option." in console.output
    assert any(line.startswith("Unknown command: /nope") for line in console.output)


def test_save_option_writes_file(state) -> None:
    state.task_store.add("Backup photos", date(2024, 7, 7), 4)
    console = ScriptedConsole(["5", "/exit"])
    run_console_loop(state, read=console.read, write=console.write)

    path = state.settings.tasks_path
    assert f"Tasks saved successfully to {path}" in console.output
    assert path.read_text("utf-8") == "Backup photos|2024-07-07|4|false\n"


def test_eof_mid_prompt_exits_cleanly(state) -> None:
    console = ScriptedConsole(["1", "Half typed"])
    run_console_loop(state, read=console.read, write=console.write)
    assert state.task_store.is_empty()


def test_non_ascii_digit_index_reprompts(state) -> None:
    state.task_store.add("Fix bike", date(2024, 3, 3), 1)

    console = ScriptedConsole(["3", "²", "١", "1", "6"])
    run_console_loop(state, read=console.read, write=console.write)

    assert console.output.count("Please enter a valid task number.") == 2
    assert "Task marked as completed!" in console.output
    assert state.task_store.tasks()[0].completed is True
