# src/tasktalk/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..dispatch.dispatcher import CommandDispatcher
from ..intent.parser import IntentParser
from ..summary.summarizer import Summarizer
from ..tasks.task_store import TaskStore
from .ports import LLMClient


@dataclass
class AppState:
    # Settings object (config.Settings or a test SimpleNamespace).
    settings: Any

    llm: LLMClient
    task_store: TaskStore
    parser: IntentParser
    summarizer: Summarizer
    dispatcher: CommandDispatcher

    # True when running with the offline client (no API key).
    offline: bool = False

    def handle_text(self, text: str) -> str:
        """Parse one utterance and dispatch it. Never raises for bad model output."""
        return self.dispatcher.dispatch(self.parser.parse(text))
