from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

from costbenefit.config.settings import Settings
from costbenefit.errors import AIProviderError

logger = logging.getLogger(__name__)


class AIProviderBase(ABC):
    """Abstract base for chat-completion style AI providers.

    Subclasses only describe their endpoint and request payload; posting,
    status checks and reply parsing are shared.
    """

    name: str = ""
    endpoint: str = ""

    def __init__(
        self,
        api_key: str,
        model: str,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        if not api_key or not model:
            raise AIProviderError(f"Missing configuration for {self.name}")
        self._api_key = api_key
        self._model = model
        self._settings = settings or Settings()
        self._client = client

    @property
    def model(self) -> str:
        return self._model

    @abstractmethod
    def build_payload(self, snapshot: dict[str, Any]) -> dict[str, Any]:
        """Return the JSON body for one analysis request."""
        ...

    async def analyze(self, snapshot: dict[str, Any]) -> str:
        """Send the snapshot and return the assistant's Markdown reply."""
        payload = self.build_payload(snapshot)
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        logger.debug(f"Requesting {self.name} analysis (model={self._model})")

        try:
            if self._client is not None:
                resp = await self._client.post(self.endpoint, json=payload, headers=headers)
            else:
                async with httpx.AsyncClient(
                    timeout=self._settings.ai_timeout_seconds
                ) as client:
                    resp = await client.post(self.endpoint, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise AIProviderError(f"{self.name} request failed: {e}") from e

        if resp.status_code != 200:
            raise AIProviderError(f"{self.name} returned HTTP {resp.status_code}")

        return _extract_content(resp)


def _extract_content(resp: httpx.Response) -> str:
    """Pull ``choices[0].message.content`` out of a chat-completion reply."""
    try:
        content = resp.json()["choices"][0]["message"]["content"]
    except (ValueError, KeyError, IndexError, TypeError) as e:
        raise AIProviderError(f"Invalid API response: {resp.text[:200]}") from e

    if not isinstance(content, str) or not content.strip():
        raise AIProviderError("Invalid API response: empty content")
    return content
