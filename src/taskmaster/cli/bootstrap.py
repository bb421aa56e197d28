# src/taskmaster/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- resolves the data file location from settings,
- constructs the TaskStore and loads it once,
- wires both into an AppState that is passed to every command.
"""

from __future__ import annotations

import logging

from ..config import Settings, get_settings, resolve_tasks_path
from ..core.state import AppState
from ..errors import PersistenceError
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_initial_state(*, settings: Settings | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Raises LocationError when no data file location can be resolved, and
    PersistenceError for a corrupt data file unless strict_load is off, in
    which case the session starts with an empty list.
    """
    if settings is None:
        settings = get_settings()

    store = TaskStore(resolve_tasks_path(settings))
    try:
        store.load()
    except PersistenceError as e:
        if settings.strict_load:
            raise
        logger.warning("Ignoring unreadable task file, starting empty: %s", e)

    return AppState(settings=settings, store=store)
