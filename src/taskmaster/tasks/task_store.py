# src/taskmaster/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from ..errors import PersistenceError, TaskIndexError, ValidationError
from .task_models import Priority, Task

logger = logging.getLogger(__name__)


def clean_description(raw: str | None) -> str:
    desc = (raw or "").strip()
    if not desc:
        raise ValidationError("Field 'description' needs a value, please provide one.")
    try:
        desc.encode("utf-8")
    except UnicodeEncodeError:
        # undecodable bytes from argv/stdin arrive as lone surrogates
        raise ValidationError("Description contains bytes that are not valid UTF-8.") from None
    return desc


class TaskStore:
    """
    JSON-file task store.

    Owns the ordered task list and its load/save lifecycle:
    - the list lives in memory; indices handed out are 1-based positions
    - load() reads the whole file once, save() rewrites it atomically
      (temp file + os.replace) so a failed write never truncates a good file

    There is no locking: two processes editing the same file race and the
    last writer wins.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._tasks: list[Task] = []
        self._dirty = False

    @property
    def path(self) -> Path:
        return self._path

    @property
    def dirty(self) -> bool:
        """True when the in-memory list has changes not yet written to disk."""
        return self._dirty

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(tuple(self._tasks))

    # ---- persistence ----

    def load(self) -> list[Task]:
        """
        Replace the in-memory list with the file contents.

        Missing or blank file -> empty list. Anything unreadable or malformed
        raises PersistenceError and leaves the current list untouched.
        """
        if not self._path.exists():
            logger.info("No task file at %s, starting empty.", self._path)
            self._tasks = []
            self._dirty = False
            return list(self._tasks)

        try:
            raw = self._path.read_text("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Could not read task file: {e}", self._path) from e

        if not raw.strip():
            self._tasks = []
            self._dirty = False
            return list(self._tasks)

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise PersistenceError(f"Error parsing task file: {e}", self._path) from e

        if not isinstance(data, list):
            raise PersistenceError("Task file must contain a JSON array", self._path)

        tasks: list[Task] = []
        for pos, item in enumerate(data, start=1):
            try:
                tasks.append(self._record_to_task(item))
            except (TypeError, ValueError) as e:
                raise PersistenceError(f"Bad task record #{pos}: {e}", self._path) from e

        self._tasks = tasks
        self._dirty = False
        logger.info("Loaded %d tasks from %s", len(tasks), self._path)
        return list(self._tasks)

    def save(self) -> None:
        # Sibling of the data file, never the data file itself (even for "x.tmp").
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            payload = json.dumps(
                [t.to_record() for t in self._tasks], ensure_ascii=False, indent=2
            )
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(payload + "\n", "utf-8")
            os.replace(tmp, self._path)
        except (OSError, ValueError) as e:
            with contextlib.suppress(OSError):
                tmp.unlink()
            logger.error("Failed to save tasks to %s: %s", self._path, e)
            raise PersistenceError(f"Could not write task file: {e}", self._path) from e
        self._dirty = False
        logger.debug("Saved %d tasks to %s", len(self._tasks), self._path)

    @staticmethod
    def _record_to_task(item: Any) -> Task:
        if not isinstance(item, dict):
            raise TypeError("record is not an object")
        desc = item.get("description")
        if not isinstance(desc, str):
            raise TypeError("'description' must be a string")
        completed = item.get("completed", False)
        if not isinstance(completed, bool):
            raise TypeError("'completed' must be true or false")
        return Task(
            description=desc,
            completed=completed,
            priority=Priority.from_file(item.get("priority")),
        )

    # ---- queries ----

    def _position(self, index: int) -> int:
        if index < 1 or index > len(self._tasks):
            raise TaskIndexError(index, len(self._tasks))
        return index - 1

    def get(self, index: int) -> Task:
        return self._tasks[self._position(index)]

    # ---- mutations ----

    def add(self, description: str) -> tuple[int, Task]:
        task = Task(description=clean_description(description))
        self._tasks.append(task)
        self._dirty = True
        return len(self._tasks), task

    def complete(self, index: int) -> Task:
        task = self.get(index)
        task.mark_completed()
        self._dirty = True
        return task

    def delete(self, index: int) -> Task:
        task = self._tasks.pop(self._position(index))
        self._dirty = True
        return task

    def change(self, index: int, description: str) -> str:
        """Replace the description; returns the old one."""
        task = self.get(index)
        new_desc = clean_description(description)
        old_desc = task.description
        task.description = new_desc
        self._dirty = True
        return old_desc

    def raise_priority(self, index: int) -> Task:
        task = self.get(index)
        task.raise_priority()
        self._dirty = True
        return task

    def lower_priority(self, index: int) -> Task:
        task = self.get(index)
        task.lower_priority()
        self._dirty = True
        return task

    def clear_completed(self) -> int:
        before = len(self._tasks)
        self._tasks = [t for t in self._tasks if not t.completed]
        removed = before - len(self._tasks)
        if removed:
            self._dirty = True
        return removed
