# src/tasktalk/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time (the API key may be missing; the CLI
  then falls back to the offline client).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

ENV_PREFIX = "TASKTALK"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except Exception:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- LLM (OpenAI-compatible endpoint) ----
    api_key: Optional[str]
    base_url: str
    llm_model: str
    llm_temperature: float
    llm_connect_timeout: float
    llm_read_timeout: float

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    tasks_path: Path

    # ---- Console ----
    exit_word: str

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "tasktalk") or "tasktalk"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        api_key = _first_env(_k("API_KEY"), "OPENAI_API_KEY", default=None)
        base_url = _env(_k("BASE_URL"), "https://api.openai.com/v1")
        llm_model = _env(_k("LLM_MODEL"), "gpt-3.5-turbo").strip() or "gpt-3.5-turbo"
        llm_temperature = _env_float(_k("LLM_TEMPERATURE"), 0.2)

        connect_timeout = _env_float(_k("LLM_CONNECT_TIMEOUT_SECONDS"), 5.0)
        read_timeout = _env_float(_k("LLM_READ_TIMEOUT_SECONDS"), 30.0)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/tasktalk"))
        tasks_path = _env_path(_k("TASKS_PATH"), data_dir / "db.json")

        exit_word = _env(_k("EXIT_WORD"), "exit").strip() or "exit"

        return Settings(
            app_name=app_name,
            log_level=log_level,
            api_key=api_key,
            base_url=base_url,
            llm_model=llm_model,
            llm_temperature=llm_temperature,
            llm_connect_timeout=connect_timeout,
            # keep read >= connect as a sane baseline
            llm_read_timeout=max(read_timeout, connect_timeout),
            data_dir=data_dir,
            tasks_path=tasks_path,
            exit_word=exit_word,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
