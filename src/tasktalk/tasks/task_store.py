# src/tasktalk/tasks/task_store.py

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from .task_models import Task, TaskDraft

logger = logging.getLogger(__name__)


class TaskStorePersistError(RuntimeError):
    """Flushing the task list to disk failed. In-memory state is already updated."""


class TaskStore:
    """
    JSON-file task store.

    The whole list is held in memory and written back in full after every
    mutation (add/complete). On-disk shape:

        {"tasks": [{"id": 1, "description": "...", "dueDate": "...",
                    "completed": false, "category": "..."}]}

    Missing or unreadable files start an empty list; they are never fatal.
    Unknown top-level keys are kept and written back untouched.
    """

    def __init__(self, path: str | Path = "db.json") -> None:
        self._path = Path(path)
        self._tasks: list[Task] = []
        self._extra: dict[str, Any] = {}
        self.load()
        logger.info("TaskStore ready path=%s total=%s", self._path, len(self._tasks))

    @property
    def path(self) -> Path:
        return self._path

    # ---- persistence ----

    def load(self) -> None:
        """(Re)read the task list from disk, falling back to an empty list."""
        self._tasks = []
        self._extra = {}

        if not self._path.exists():
            logger.info("TaskStore: %s not found, starting empty.", self._path)
            return

        try:
            data = json.loads(self._path.read_text("utf-8"))
        except Exception:
            logger.exception("TaskStore: failed to read %s, starting empty.", self._path)
            return

        if not isinstance(data, dict) or not isinstance(data.get("tasks", []), list):
            logger.warning("TaskStore: unexpected document shape in %s, starting empty.", self._path)
            return

        self._extra = {k: v for k, v in data.items() if k != "tasks"}

        seen: set[int] = set()
        for raw in data.get("tasks", []):
            if not isinstance(raw, dict):
                logger.warning("TaskStore: skipping non-object task record %r", raw)
                continue
            try:
                task = Task.from_dict(raw)
            except ValueError as e:
                logger.warning("TaskStore: skipping task record: %s", e)
                continue
            if task.id in seen:
                logger.warning("TaskStore: skipping duplicate task id=%s", task.id)
                continue
            seen.add(task.id)
            self._tasks.append(task)

    def flush(self) -> None:
        """Write the full in-memory state to disk (tmp file + atomic replace)."""
        doc = dict(self._extra)
        doc["tasks"] = [t.to_dict() for t in self._tasks]
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self._path.with_suffix(self._path.suffix + ".tmp")
            tmp.write_text(json.dumps(doc, ensure_ascii=False, indent=2), "utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            logger.exception("TaskStore: failed to write %s", self._path)
            raise TaskStorePersistError(f"could not write {self._path}: {e}") from e
        logger.debug("TaskStore flushed total=%s to %s", len(self._tasks), self._path)

    # ---- public API ----

    def next_id(self) -> int:
        return max((t.id for t in self._tasks), default=0) + 1

    def count(self) -> int:
        return len(self._tasks)

    def get(self, task_id: int) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def add(self, draft: TaskDraft) -> Task:
        description = (draft.description or "").strip()
        if not description:
            raise ValueError("description is required")

        task = Task(
            id=self.next_id(),
            description=description,
            due_date=draft.due_date or None,
            completed=False,
            category=draft.category or None,
        )
        self._tasks.append(task)
        logger.debug("Task added id=%s due=%s category=%s", task.id, task.due_date, task.category)
        self.flush()
        return task

    def complete(self, selector: int | str) -> bool:
        """
        Mark one task as completed.

        int selector  -> the task with that id
        str selector  -> first task (store order) whose description contains
                         the fragment, case-insensitive

        Re-completing an already completed task reports success; the flag
        never goes back to False. No match -> False and nothing is written.
        """
        task = self._find(selector)
        if task is None:
            logger.debug("Task complete: no match for selector=%r", selector)
            return False

        task.completed = True
        logger.debug("Task completed id=%s", task.id)
        self.flush()
        return True

    def list_tasks(self, *, category: str | None = None, completed: bool | None = None) -> list[Task]:
        """All tasks in store order; the optional filters narrow the result."""
        out: list[Task] = []
        cat = category.strip().lower() if category else None
        for t in self._tasks:
            if cat is not None and (t.category or "").strip().lower() != cat:
                continue
            if completed is not None and t.completed != completed:
                continue
            out.append(t)
        return out

    # ---- helpers ----

    def _find(self, selector: int | str) -> Task | None:
        if isinstance(selector, bool):
            return None
        if isinstance(selector, int):
            return self.get(selector)

        fragment = str(selector).strip().lower()
        if not fragment:
            return None
        for t in self._tasks:
            if fragment in t.description.lower():
                return t
        return None
