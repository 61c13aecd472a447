# src/tasktalk/intent/intent_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class Command(StrEnum):
    ADD = "add"
    LIST = "list"
    COMPLETE = "complete"
    SUMMARY = "summary"


@dataclass(frozen=True, slots=True)
class Intent:
    """
    Structured form of one user utterance.

    `command` is kept as a plain string: anything outside Command is carried
    through so the dispatcher can answer "didn't understand".
    """

    command: str
    description: str | None = None
    due_date: str | None = None
    id: int | None = None
    category: str | None = None
    filters: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def list_all(cls) -> Intent:
        return cls(command=Command.LIST.value)


@dataclass(frozen=True, slots=True)
class ParsedIntent:
    intent: Intent
    raw: str = ""

    @property
    def is_fallback(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class FallbackIntent:
    """The model reply was unusable; `intent` is always the `list` intent."""

    reason: str
    raw: str = ""
    intent: Intent = field(default_factory=Intent.list_all)

    @property
    def is_fallback(self) -> bool:
        return True


ParseResult = ParsedIntent | FallbackIntent
