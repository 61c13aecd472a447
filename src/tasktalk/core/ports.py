# src/tasktalk/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps the LLM provider and storage swappable and makes testing easier.
"""

from typing import Any, Protocol


class LLMClient(Protocol):
    """Single-shot text completion: one system instruction + one user text -> reply text."""

    def complete(self, system_prompt: str, user_text: str) -> str: ...


class TaskRepo(Protocol):
    def next_id(self) -> int: ...
    def add(self, draft: Any) -> Any: ...  # TaskDraft -> Task
    def complete(self, selector: int | str) -> bool: ...
    def list_tasks(self, *, category: str | None = None, completed: bool | None = None) -> list[Any]: ...
    def count(self) -> int: ...
    def flush(self) -> None: ...
