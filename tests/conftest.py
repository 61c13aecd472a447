# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tasktalk.cli.bootstrap import build_state
from tasktalk.core.state import AppState
from tasktalk.tasks.task_store import TaskStore

from .fakes import FakeLLMClient


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and core modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="tasktalk",
        data_dir=tmp_path,
        tasks_path=tmp_path / "db.json",
        exit_word="exit",
    )


@pytest.fixture()
def llm() -> FakeLLMClient:
    return FakeLLMClient()


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore(settings.tasks_path)


@pytest.fixture()
def state(settings: SimpleNamespace, llm: FakeLLMClient) -> AppState:
    """
    AppState wired with a fake LLM.

    NOTE: the real JSON TaskStore is used (on a tmp path) because its
    persistence behavior is part of what we want to test.
    """
    return build_state(settings, llm)
