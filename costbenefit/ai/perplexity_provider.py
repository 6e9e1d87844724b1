"""Perplexity provider -- chat completions via api.perplexity.ai."""

from __future__ import annotations

from typing import Any

from costbenefit.ai.prompts import build_messages

from .base import AIProviderBase


class PerplexityProvider(AIProviderBase):
    """Requests a project assessment from Perplexity."""

    name = "perplexity"
    endpoint = "https://api.perplexity.ai/chat/completions"

    def build_payload(self, snapshot: dict[str, Any]) -> dict[str, Any]:
        return {
            "model": self._model,
            "messages": build_messages(snapshot),
        }
