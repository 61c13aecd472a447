# src/tasktalk/summary/summarizer.py

from __future__ import annotations

import json
import logging
from typing import Final

from ..core.ports import LLMClient, TaskRepo

logger = logging.getLogger(__name__)

SUMMARY_SYSTEM_PROMPT: Final[str] = "You summarize tasks in a concise bullet list."

NOTHING_TO_SUMMARIZE: Final[str] = "You have no tasks to summarize."
NO_SUMMARY: Final[str] = "No summary available."
SUMMARY_ERROR: Final[str] = "Error summarizing tasks."


class Summarizer:
    """Natural-language bullet summary of the current task list."""

    def __init__(self, store: TaskRepo, llm: LLMClient) -> None:
        self._store = store
        self._llm = llm

    def build_prompt(self) -> str:
        tasks = [t.to_dict() for t in self._store.list_tasks()]
        return (
            "Here is the current task list:\n"
            f"{json.dumps(tasks, ensure_ascii=False, indent=2)}\n"
            "Please provide a short bullet list summary."
        )

    def summarize(self) -> str:
        if self._store.count() == 0:
            return NOTHING_TO_SUMMARIZE

        try:
            raw = self._llm.complete(SUMMARY_SYSTEM_PROMPT, self.build_prompt())
        except Exception:
            logger.exception("Summarizer failed.")
            return SUMMARY_ERROR

        summary = (raw or "").strip()
        if not summary:
            return NO_SUMMARY

        logger.debug("Task summary produced len=%d", len(summary))
        return summary
