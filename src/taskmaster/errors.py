# src/taskmaster/errors.py

"""
Error taxonomy shared by the store, the command engine and the entry point.

Everything derives from TaskError so the dispatch boundary can catch one type.
The builtin bases (ValueError/IndexError/OSError) are kept so callers that only
know the stdlib exceptions still catch the right thing.
"""

from __future__ import annotations

from pathlib import Path


class TaskError(Exception):
    """Base class for all taskmaster errors."""


class ValidationError(TaskError, ValueError):
    """Empty or malformed user input (description, index token, usage)."""


class TaskIndexError(TaskError, IndexError):
    def __init__(self, index: int, size: int) -> None:
        self.index = index
        self.size = size
        if size == 0:
            hint = "the list is empty"
        else:
            hint = f"valid range is 1..{size}"
        super().__init__(f"Task {index} not found ({hint}).")


class PersistenceError(TaskError):
    """Reading or writing the data file failed."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        if path is not None:
            message = f"{message} ({path})"
        super().__init__(message)


class LocationError(TaskError, OSError):
    """The storage location (home directory) could not be resolved."""


class InputCancelled(TaskError):
    """The user aborted an interactive sub-prompt (Ctrl-C / Ctrl-D)."""

    def __init__(self) -> None:
        super().__init__("User input was cancelled.")
