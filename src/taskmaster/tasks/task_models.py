# src/taskmaster/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Priority(StrEnum):
    """
    Task priority.

    Values are the names written to the data file, so older files that spell
    them "Low"/"Medium"/"High" keep loading.
    """

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @property
    def glyph(self) -> str:
        return _GLYPHS[self]

    def raised(self) -> Priority:
        if self is Priority.LOW:
            return Priority.MEDIUM
        return Priority.HIGH

    def lowered(self) -> Priority:
        if self is Priority.HIGH:
            return Priority.MEDIUM
        return Priority.LOW

    @classmethod
    def from_file(cls, raw: object) -> Priority:
        # Missing key -> default; anything else must be a known name.
        if raw is None:
            return cls.MEDIUM
        if isinstance(raw, str):
            for p in cls:
                if p.value.lower() == raw.strip().lower():
                    return p
        raise ValueError(f"unknown priority: {raw!r}")


_GLYPHS: dict[Priority, str] = {
    Priority.LOW: "▼",
    Priority.MEDIUM: "◆",
    Priority.HIGH: "▲",
}

STATUS_PENDING = "[·]"
STATUS_DONE = "[x]"


@dataclass(slots=True)
class Task:
    description: str
    completed: bool = False
    priority: Priority = Priority.MEDIUM

    @property
    def status_glyph(self) -> str:
        return STATUS_DONE if self.completed else STATUS_PENDING

    def mark_completed(self) -> None:
        self.completed = True

    def raise_priority(self) -> None:
        self.priority = self.priority.raised()

    def lower_priority(self) -> None:
        self.priority = self.priority.lowered()

    def to_record(self) -> dict[str, object]:
        return {
            "description": self.description,
            "completed": self.completed,
            "priority": self.priority.value,
        }
