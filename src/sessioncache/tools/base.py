"""Shared plumbing for tool session managers.

Each tool owns one NamespaceStore whose payload is the tool's session model.
"Get or create" is composed here from ``load`` plus the tool's own
constructor; the store has no such primitive.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from sessioncache.store.models import NamespaceStats
from sessioncache.store.namespace import Clock, NamespaceStore, wall_clock_ms


class ToolSessionData(BaseModel):
    """Fields every tool session carries, mirrored inside the payload."""

    session_id: str
    created_at: int
    last_accessed_at: int


S = TypeVar("S", bound=ToolSessionData)


class Round(BaseModel):
    """Fields common to one prompt/response exchange."""

    round_number: int
    timestamp: int
    user_prompt: str
    response: str = Field(description="Raw text returned by the model CLI")


class ToolSessionManager(Generic[S]):
    """Typed facade over a NamespaceStore for one tool."""

    def __init__(self, store: NamespaceStore[S], clock: Clock | None = None) -> None:
        self._store = store
        self._clock = clock or wall_clock_ms

    @property
    def store(self) -> NamespaceStore[S]:
        return self._store

    def now(self) -> int:
        return self._clock()

    def save(self, session: S) -> None:
        self._store.save(session.session_id, session)

    def load(self, session_id: str) -> S | None:
        record = self._store.load(session_id)
        return record.payload if record is not None else None

    def list(self) -> list[S]:
        return [record.payload for record in self._store.list()]

    def delete(self, session_id: str) -> bool:
        return self._store.delete(session_id)

    def stats(self) -> NamespaceStats:
        return self._store.stats()
