"""Flat key-value persistence of raw form field strings."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections import defaultdict
from typing import Any, Mapping

logger = logging.getLogger(__name__)


class FieldStore(ABC):
    """Abstract base for field-id -> string stores, keyed by session."""

    @abstractmethod
    def save(self, session_id: str, fields: Mapping[str, Any]) -> None:
        """Store every field; existing keys are overwritten, others kept."""
        ...

    @abstractmethod
    def load(self, session_id: str) -> dict[str, str]:
        """Return the stored fields, or an empty dict for unknown sessions."""
        ...

    @abstractmethod
    def clear(self, session_id: str) -> None:
        ...


class InMemoryFieldStore(FieldStore):
    """Process-local store (replaced by a real backend later)."""

    def __init__(self) -> None:
        self._sessions: dict[str, dict[str, str]] = defaultdict(dict)

    def save(self, session_id: str, fields: Mapping[str, Any]) -> None:
        stored = self._sessions[session_id]
        for field_id, value in fields.items():
            stored[field_id] = "" if value is None else str(value)
        logger.debug(f"Saved {len(fields)} fields for session {session_id}")

    def load(self, session_id: str) -> dict[str, str]:
        return dict(self._sessions.get(session_id, {}))

    def clear(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)
