# src/tasktalk/llm/client.py

from __future__ import annotations

import logging
from typing import Any

import httpx
import openai
from openai import OpenAI

from ..config import Settings, get_settings

logger = logging.getLogger(__name__)


def _is_auth_error(exc: Exception) -> bool:
    if isinstance(exc, (openai.AuthenticationError, openai.PermissionDeniedError)):
        return True
    return exc.__class__.__name__ in {"UnauthorizedError"}


def _is_rate_limit_error(exc: Exception) -> bool:
    if isinstance(exc, openai.RateLimitError):
        return True
    return exc.__class__.__name__ in {"TooManyRequestsError"}


def _is_connection_error(exc: Exception) -> bool:
    if isinstance(exc, (openai.APIConnectionError, httpx.TimeoutException)):
        return True
    return exc.__class__.__name__ in {"Timeout", "ConnectTimeout", "ReadTimeout", "WriteTimeout"}


def friendly_llm_error_message(err: Exception) -> str:
    msg = str(err).strip() or "LLM error."
    if "LLM API key is not set" in msg:
        return "LLM is not configured (missing API key). Set TASKTALK_API_KEY or OPENAI_API_KEY in .env."
    if "LLM base URL is not set" in msg:
        return "LLM is not configured (missing base URL). Set TASKTALK_BASE_URL in .env."
    return msg


class OpenAICompatibleClient:
    """
    LLMClient backed by an OpenAI-compatible chat completions endpoint.

    One request per call: automatic retries are disabled in the SDK, and
    errors are normalized into RuntimeError for the callers' soft-fail paths.
    """

    def __init__(self, settings: Settings | None = None, *, client: Any = None) -> None:
        if settings is None:
            settings = get_settings()
        self._settings = settings
        self._model = settings.llm_model
        self._temperature = float(settings.llm_temperature)

        if client is not None:
            self._client = client
            return

        api_key = settings.api_key
        base_url = settings.base_url or ""
        if not api_key or not str(api_key).strip():
            raise RuntimeError("LLM API key is not set. Set TASKTALK_API_KEY in your .env.")
        if not base_url.strip():
            raise RuntimeError("LLM base URL is not set. Set TASKTALK_BASE_URL in your .env.")

        timeout = httpx.Timeout(
            connect=settings.llm_connect_timeout,
            read=settings.llm_read_timeout,
            write=10.0,
            pool=settings.llm_connect_timeout,
        )
        self._client = OpenAI(
            base_url=str(base_url),
            api_key=str(api_key),
            timeout=timeout,
            max_retries=0,
        )

    @property
    def model(self) -> str:
        return self._model

    def complete(self, system_prompt: str, user_text: str) -> str:
        logger.debug("LLM: request model=%s temperature=%.2f", self._model, self._temperature)
        try:
            response = self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_text},
                ],
                temperature=self._temperature,
            )
        except Exception as e:
            if _is_auth_error(e):
                raise RuntimeError("LLM authentication failed. Check your API key (TASKTALK_API_KEY).") from e
            if _is_rate_limit_error(e):
                raise RuntimeError("LLM is rate-limited. Try again later.") from e
            if _is_connection_error(e):
                raise RuntimeError("LLM network/timeout error. Try again later.") from e
            raise RuntimeError(f"LLM request failed ({e.__class__.__name__}).") from e

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError):
            content = None

        text = (content or "").strip()
        logger.debug("LLM: reply model=%s len=%d", self._model, len(text))
        return text
