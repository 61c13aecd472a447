# src/tasktalk/intent/parser.py

"""
Free text -> Intent.

This is the only place where raw model output is trusted (or not). Every
failure mode (network error, empty reply, prose instead of JSON, JSON that is
not an object) collapses into a FallbackIntent carrying the `list` intent, so
the rest of the app always receives a well-formed Intent.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any, Final

from ..core.ports import LLMClient
from .intent_models import Command, FallbackIntent, Intent, ParsedIntent, ParseResult

logger = logging.getLogger(__name__)

INTENT_SYSTEM_PROMPT: Final[str] = """
You are a helpful task manager assistant.
You will receive user input about tasks in plain English or Spanish.
You should output a JSON object with:
{
  "command": "add" or "list" or "complete" or "summary",
  "description": string (optional),
  "dueDate": string (ISO 8601 format, only if a due date or time is mentioned),
  "id": number (optional, when the user refers to a task by its number),
  "category": string (optional),
  "filters": {"category": string, "completed": boolean} (optional, for "list")
}
Resolve relative dates ("tomorrow at 5 PM") against the current local time given below.
IMPORTANT: Output ONLY valid JSON, no additional text.
""".strip()


def _extract_json_object(raw: str) -> str:
    raw = raw.strip()
    if raw.startswith("{") and raw.endswith("}"):
        return raw
    first = raw.find("{")
    last = raw.rfind("}")
    if first != -1 and last != -1 and last > first:
        return raw[first : last + 1]
    return raw


def _opt_str(v: Any) -> str | None:
    if v is None or isinstance(v, (dict, list)):
        return None
    s = str(v).strip()
    return s or None


def _opt_id(v: Any) -> int | None:
    if isinstance(v, bool):
        return None
    if isinstance(v, int):
        return v
    if isinstance(v, float) and v.is_integer():
        return int(v)
    if isinstance(v, str):
        s = v.strip().lstrip("#")
        if s.isdecimal():
            try:
                return int(s)
            except ValueError:
                return None
    return None


def intent_from_payload(payload: dict[str, Any]) -> Intent:
    """
    Lenient mapping from a decoded JSON object to an Intent.

    Missing command -> list; unknown keys are ignored; malformed optional
    fields are treated as absent.
    """
    command = (_opt_str(payload.get("command")) or Command.LIST.value).lower()
    filters = payload.get("filters")
    return Intent(
        command=command,
        description=_opt_str(payload.get("description")),
        due_date=_opt_str(payload.get("dueDate", payload.get("due_date"))),
        id=_opt_id(payload.get("id")),
        category=_opt_str(payload.get("category")),
        filters=dict(filters) if isinstance(filters, dict) else {},
    )


class IntentParser:
    def __init__(self, llm: LLMClient, *, now: Callable[[], datetime] | None = None) -> None:
        self._llm = llm
        self._now = now or (lambda: datetime.now().astimezone())

    def _user_text(self, utterance: str) -> str:
        now = self._now().replace(microsecond=0).isoformat()
        return f"Current local time: {now}\nUser input: {utterance}"

    def parse_result(self, utterance: str) -> ParseResult:
        try:
            raw = self._llm.complete(INTENT_SYSTEM_PROMPT, self._user_text(utterance))
        except Exception as e:
            logger.warning("Intent parse: LLM call failed (%s), falling back to list.", e)
            return FallbackIntent(reason="llm_error")

        raw = (raw or "").strip()
        if not raw:
            logger.warning("Intent parse: empty LLM reply, falling back to list.")
            return FallbackIntent(reason="empty")

        try:
            payload = json.loads(_extract_json_object(raw))
        except (ValueError, RecursionError):
            logger.warning("Intent parse: reply is not JSON, falling back to list. Raw=%r", raw[:500])
            return FallbackIntent(reason="malformed", raw=raw)

        if not isinstance(payload, dict):
            logger.warning("Intent parse: reply is not a JSON object, falling back to list. Raw=%r", raw[:500])
            return FallbackIntent(reason="malformed", raw=raw)

        intent = intent_from_payload(payload)
        logger.debug("Intent parsed: %r", intent)
        return ParsedIntent(intent=intent, raw=raw)

    def parse(self, utterance: str) -> Intent:
        return self.parse_result(utterance).intent
