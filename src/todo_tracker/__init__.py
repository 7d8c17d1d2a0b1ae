# src/todo_tracker/__init__.py

"""Interactive command-line task tracker."""

__version__ = "0.1.0"
