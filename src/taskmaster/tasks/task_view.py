# src/taskmaster/tasks/task_view.py

"""
Plain-text rendering of the task list.

One line per task: "<index>: <priority glyph> <status glyph> <description>".
Indices are right-aligned to the widest index so descriptions line up.
"""

from __future__ import annotations

from collections.abc import Sequence

from .task_models import Task

EMPTY_LIST_TEXT = "No tasks, all done!"
LIST_HEADER = "Your tasks:"


def format_task_line(index: int, task: Task, width: int = 1) -> str:
    return f"{index:>{width}}: {task.priority.glyph} {task.status_glyph} {task.description}"


def render_task_lines(tasks: Sequence[Task]) -> list[str]:
    width = len(str(len(tasks)))
    return [format_task_line(i, t, width) for i, t in enumerate(tasks, start=1)]


def render_task_list(tasks: Sequence[Task]) -> str:
    if not tasks:
        return EMPTY_LIST_TEXT
    return "\n".join([LIST_HEADER, *render_task_lines(tasks)])
