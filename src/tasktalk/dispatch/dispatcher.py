# src/tasktalk/dispatch/dispatcher.py

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Final

from ..core.ports import TaskRepo
from ..intent.intent_models import Command, Intent
from ..summary.summarizer import Summarizer
from ..tasks.task_models import TaskDraft, parse_completed
from ..tasks.task_store import TaskStorePersistError
from .formatting import due_suffix, format_task_line

IntentHandler = Callable[[Intent], str]

logger = logging.getLogger(__name__)

NO_DESCRIPTION: Final[str] = "No description provided. Try again."
TASK_COMPLETED: Final[str] = "Task marked as completed."
TASK_NOT_FOUND: Final[str] = "Could not find a matching task to complete."
NO_TASKS: Final[str] = "You have no tasks yet."
NO_MATCHING_TASKS: Final[str] = "No tasks match that filter."
NOT_UNDERSTOOD: Final[str] = "Sorry, I didn't understand that. Try again."


class CommandDispatcher:
    """
    Intent -> result text.

    The store and summarizer are injected; the dispatcher itself keeps no
    state beyond its handler table.
    """

    def __init__(self, store: TaskRepo, summarizer: Summarizer) -> None:
        self._store = store
        self._summarizer = summarizer
        self._handlers: dict[str, IntentHandler] = {}

        self.register(Command.ADD, self.handle_add)
        self.register(Command.COMPLETE, self.handle_complete)
        self.register(Command.LIST, self.handle_list)
        self.register(Command.SUMMARY, self.handle_summary)

    def register(self, command: str, handler: IntentHandler) -> None:
        self._handlers[str(command).lower()] = handler

    def dispatch(self, intent: Intent) -> str:
        handler = self._handlers.get((intent.command or "").strip().lower())
        if handler is None:
            logger.info("Dispatch: unknown command=%r", intent.command)
            return NOT_UNDERSTOOD

        try:
            return handler(intent)
        except TaskStorePersistError as e:
            return f"The change was applied, but saving to disk failed: {e}"

    # ---- handlers ----

    def handle_add(self, intent: Intent) -> str:
        description = (intent.description or "").strip()
        if not description:
            return NO_DESCRIPTION

        task = self._store.add(
            TaskDraft(description=description, due_date=intent.due_date, category=intent.category)
        )
        logger.info("Dispatch: added task id=%s", task.id)

        msg = f'Task added: "{task.description}"{due_suffix(task.due_date)}'
        if task.category:
            msg += f" [{task.category}]"
        return msg

    def handle_complete(self, intent: Intent) -> str:
        done = False
        if intent.id is not None:
            done = self._store.complete(intent.id)
        if not done and intent.description:
            done = self._store.complete(intent.description)

        if not done:
            return TASK_NOT_FOUND
        return TASK_COMPLETED

    def handle_list(self, intent: Intent) -> str:
        filters = intent.filters or {}
        category = filters.get("category")
        category = str(category).strip() if category else None
        completed = parse_completed(filters.get("completed"))

        tasks = self._store.list_tasks(category=category, completed=completed)
        if not tasks:
            if (category or completed is not None) and self._store.count():
                return NO_MATCHING_TASKS
            return NO_TASKS
        return "\n".join(format_task_line(t) for t in tasks)

    def handle_summary(self, intent: Intent) -> str:
        return self._summarizer.summarize()
