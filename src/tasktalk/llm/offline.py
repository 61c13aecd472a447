# src/tasktalk/llm/offline.py

from __future__ import annotations

import json


class OfflineLLMClient:
    """
    Offline deterministic LLM client used when no API key is configured.

    Behavior:
    - Intent prompts -> {"command": "list"} (the app stays usable for browsing)
    - Summary prompts -> a fixed notice
    """

    def complete(self, system_prompt: str, user_text: str) -> str:
        sp = (system_prompt or "").lower()

        if "task manager assistant" in sp:
            return json.dumps({"command": "list"})

        if "summarize tasks" in sp:
            return (
                "- Offline mode: no language model is configured.\n"
                "- Set TASKTALK_API_KEY (or OPENAI_API_KEY) to enable real summaries."
            )

        return ""
