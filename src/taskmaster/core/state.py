# src/taskmaster/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..config import Settings
from ..tasks.task_store import TaskStore


@dataclass(slots=True)
class AppState:
    """
    Everything a command needs, passed explicitly (no module-level globals).

    The store is the only owner of the task list; commands borrow it for the
    duration of one call.
    """

    settings: Settings
    store: TaskStore
