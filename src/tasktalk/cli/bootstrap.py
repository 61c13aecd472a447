# src/tasktalk/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- wires the LLM client, task store, parser, summarizer and dispatcher into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import LLMClient
from ..core.state import AppState
from ..dispatch.dispatcher import CommandDispatcher
from ..intent.parser import IntentParser
from ..llm.client import OpenAICompatibleClient, friendly_llm_error_message
from ..llm.offline import OfflineLLMClient
from ..summary.summarizer import Summarizer
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_path.parent.mkdir(parents=True, exist_ok=True)


def build_state(settings, llm: LLMClient, *, offline: bool = False) -> AppState:
    """Wire all components around one explicitly owned TaskStore."""
    store = TaskStore(settings.tasks_path)
    summarizer = Summarizer(store, llm)
    return AppState(
        settings=settings,
        llm=llm,
        task_store=store,
        parser=IntentParser(llm),
        summarizer=summarizer,
        dispatcher=CommandDispatcher(store, summarizer),
        offline=offline,
    )


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    llm_client: LLMClient
    offline = False
    try:
        llm_client = OpenAICompatibleClient(settings)
    except RuntimeError as e:
        # Fallback for local runs without an API key.
        logger.warning("LLM unavailable, running offline: %s", friendly_llm_error_message(e))
        llm_client = OfflineLLMClient()
        offline = True

    return build_state(settings, llm_client, offline=offline)
