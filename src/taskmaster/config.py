# src/taskmaster/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object, built once at startup and passed explicitly.
- Nothing reads the environment after startup.
- Storage paths default to the user's home directory but can be overridden.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, cast

from dotenv import find_dotenv, load_dotenv

from .errors import LocationError

ENV_PREFIX = "TASKMASTER"

DEFAULT_TASKS_FILENAME = ".tasks.json"
DEFAULT_HISTORY_FILENAME = ".taskmaster_history"

SaveMode = Literal["each", "exit"]
SAVE_MODES: tuple[str, ...] = ("each", "exit")


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return Path(raw).expanduser()


def _env_save_mode(name: str, default: SaveMode) -> SaveMode:
    raw = _env(name, default).strip().lower()
    if raw in SAVE_MODES:
        return cast(SaveMode, raw)
    return default


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_dir: Path | None

    # ---- Storage ----
    tasks_file: Path | None
    history_file: Path | None

    # ---- Behaviour ----
    save_mode: SaveMode
    strict_load: bool

    @property
    def save_each(self) -> bool:
        return self.save_mode == "each"

    @staticmethod
    def from_env(*, dotenv: bool = True) -> "Settings":
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True), override=False)

        return Settings(
            app_name=_env(_k("APP_NAME"), "taskmaster") or "taskmaster",
            log_level=_env(_k("LOG_LEVEL"), "WARNING"),
            log_dir=_env_path(_k("LOG_DIR")),
            tasks_file=_env_path(_k("TASKS_FILE")),
            history_file=_env_path(_k("HISTORY_FILE")),
            save_mode=_env_save_mode(_k("SAVE_MODE"), "each"),
            strict_load=_env_bool(_k("STRICT_LOAD"), True),
        )


def get_settings() -> Settings:
    return Settings.from_env()


def home_dir() -> Path:
    try:
        return Path.home()
    except (RuntimeError, KeyError) as e:
        raise LocationError("Could not determine home directory") from e


def resolve_tasks_path(settings: Settings) -> Path:
    if settings.tasks_file is not None:
        return settings.tasks_file
    return home_dir() / DEFAULT_TASKS_FILENAME


def resolve_history_path(settings: Settings) -> Path | None:
    """History is optional: an unresolvable home just disables it."""
    if settings.history_file is not None:
        return settings.history_file
    try:
        return home_dir() / DEFAULT_HISTORY_FILENAME
    except LocationError:
        return None
