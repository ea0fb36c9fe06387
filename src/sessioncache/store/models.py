"""Data models for stored sessions.

``SessionRecord`` is what callers see; ``CacheEntry`` is the envelope
written to disk around it. Both are generic over the payload type, which the
store never inspects.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from sessioncache.config.constants import ENVELOPE_VERSION
from sessioncache.config.models import EvictionPolicy

T = TypeVar("T")


class SessionRecord(BaseModel, Generic[T]):
    """One session as seen by callers."""

    model_config = ConfigDict(frozen=True)

    session_id: str
    created_at: int  # ms since epoch, fixed at first save
    last_accessed_at: int  # ms since epoch, bumped on save and LRU load
    payload: T

    @model_validator(mode="after")
    def _check_access_order(self) -> SessionRecord[T]:
        if self.last_accessed_at < self.created_at:
            raise ValueError(
                f"last_accessed_at ({self.last_accessed_at}) precedes "
                f"created_at ({self.created_at})"
            )
        return self

    def touched(self, now: int) -> SessionRecord[T]:
        """Copy with last_accessed_at moved to ``now``."""
        return self.model_copy(update={"last_accessed_at": max(now, self.created_at)})


class CacheEntry(BaseModel, Generic[T]):
    """On-disk envelope: the record plus write and expiry timestamps.

    ``created_seq`` and ``accessed_seq`` order writes that share a
    millisecond. They are nanosecond-scale and strictly increasing within a
    process; eviction compares them only when the millisecond stamps tie.
    """

    model_config = ConfigDict(frozen=True)

    version: int = ENVELOPE_VERSION
    data: SessionRecord[T]
    saved_at: int
    expires_at: int = Field(description="saved_at + ttl as of the last save")
    created_seq: int = 0  # write sequence of the first save
    accessed_seq: int = 0  # write sequence of the latest save or LRU refresh

    @property
    def session_id(self) -> str:
        return self.data.session_id


@dataclass(frozen=True, slots=True)
class NamespaceConfig:
    """Effective settings for one namespace. Build via resolve_namespace_config."""

    namespace: str
    ttl_ms: int
    max_entries: int
    eviction_policy: EvictionPolicy


@dataclass(frozen=True, slots=True)
class NamespaceStats:
    """Read-only snapshot returned by NamespaceStore.stats()."""

    namespace: str
    live_count: int
    ttl_ms: int
    max_entries: int
    eviction_policy: EvictionPolicy
    storage_location: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "namespace": self.namespace,
            "live_count": self.live_count,
            "ttl_ms": self.ttl_ms,
            "max_entries": self.max_entries,
            "eviction_policy": self.eviction_policy.value,
            "storage_location": self.storage_location,
        }
