"""OpenAI provider -- chat completions via api.openai.com."""

from __future__ import annotations

from typing import Any

from costbenefit.ai.prompts import build_messages

from .base import AIProviderBase

# gpt-4o answers are capped tighter than the other models.
_MAX_TOKENS = {"gpt-4o": 700}
_DEFAULT_MAX_TOKENS = 1000


class OpenAIProvider(AIProviderBase):
    """Requests a project assessment from OpenAI."""

    name = "openai"
    endpoint = "https://api.openai.com/v1/chat/completions"

    def build_payload(self, snapshot: dict[str, Any]) -> dict[str, Any]:
        return {
            "model": self._model,
            "messages": build_messages(snapshot),
            "max_tokens": _MAX_TOKENS.get(self._model, _DEFAULT_MAX_TOKENS),
        }
