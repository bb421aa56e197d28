# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from taskmaster.config import Settings
from taskmaster.core.state import AppState
from taskmaster.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """
    Settings pointing at tmp paths.

    Built directly instead of via Settings.from_env() so that the developer's
    environment and .env never leak into tests.
    """
    return Settings(
        app_name="taskmaster",
        log_level="WARNING",
        log_dir=None,
        tasks_file=tmp_path / "tasks.json",
        history_file=tmp_path / "history",
        save_mode="each",
        strict_load=True,
    )


@pytest.fixture()
def store(settings: Settings) -> TaskStore:
    assert settings.tasks_file is not None
    return TaskStore(settings.tasks_file)


@pytest.fixture()
def state(settings: Settings, store: TaskStore) -> AppState:
    return AppState(settings=settings, store=store)
