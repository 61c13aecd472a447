# src/tasktalk/dispatch/formatting.py

from __future__ import annotations

from datetime import datetime

from ..tasks.task_models import Task

DISPLAY_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_due(raw: str) -> str:
    """
    ISO-8601 -> local display form.

    Timezone-aware values are converted to local time; naive values are taken
    as already local. Anything unparseable or out of range is shown as-is.
    """
    try:
        dt = datetime.fromisoformat(raw.strip())
        if dt.tzinfo is not None:
            dt = dt.astimezone()
    except (ValueError, OverflowError, OSError):
        return raw
    return dt.strftime(DISPLAY_FORMAT)


def due_suffix(due_date: str | None) -> str:
    return f" (Due: {format_due(due_date)})" if due_date else ""


def format_task_line(task: Task) -> str:
    status = "[x]" if task.completed else "[ ]"
    return f"{task.id}. {status} {task.description}{due_suffix(task.due_date)}"
