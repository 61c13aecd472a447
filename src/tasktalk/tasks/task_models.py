# src/tasktalk/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


def parse_completed(v: Any) -> bool | None:
    """Lenient completed-flag reading: real bools and common yes/no words, else None."""
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        s = v.strip().lower()
        if s in ("1", "true", "yes", "done", "completed"):
            return True
        if s in ("0", "false", "no", "pending", "open"):
            return False
    return None


@dataclass(slots=True)
class TaskDraft:
    """Caller-supplied part of a task, before the store assigns id/completed."""

    description: str
    due_date: str | None = None
    category: str | None = None


@dataclass(slots=True)
class Task:
    id: int
    description: str
    due_date: str | None = None
    completed: bool = False
    category: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the on-disk record; optional keys are omitted when unset."""
        out: dict[str, Any] = {"id": self.id, "description": self.description}
        if self.due_date:
            out["dueDate"] = self.due_date
        out["completed"] = self.completed
        if self.category:
            out["category"] = self.category
        return out

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Task:
        """
        Build a Task from an on-disk record.

        Raises ValueError when the record has no usable id or description.
        """
        task_id = raw.get("id")
        if isinstance(task_id, bool) or not isinstance(task_id, int) or task_id < 1:
            raise ValueError(f"invalid task id: {task_id!r}")

        description = str(raw.get("description") or "").strip()
        if not description:
            raise ValueError(f"task {task_id} has an empty description")

        due = raw.get("dueDate")
        category = raw.get("category")
        return cls(
            id=task_id,
            description=description,
            due_date=str(due) if due else None,
            completed=parse_completed(raw.get("completed")) is True,
            category=str(category) if category else None,
        )
