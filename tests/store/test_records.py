"""Tests for stored record models."""

from typing import Any

import pytest
from pydantic import ValidationError

from sessioncache.config.models import EvictionPolicy
from sessioncache.store.models import NamespaceStats, SessionRecord


class TestSessionRecord:
    def test_rejects_access_before_creation(self) -> None:
        with pytest.raises(ValidationError, match="precedes"):
            SessionRecord[Any](session_id="s", created_at=10, last_accessed_at=9, payload=None)

    def test_is_frozen(self) -> None:
        record = SessionRecord[Any](session_id="s", created_at=1, last_accessed_at=1, payload={})
        with pytest.raises(ValidationError):
            record.created_at = 5  # type: ignore[misc]

    def test_touched_moves_access_only(self) -> None:
        record = SessionRecord[Any](session_id="s", created_at=1, last_accessed_at=2, payload=[1])
        touched = record.touched(50)
        assert touched.last_accessed_at == 50
        assert touched.created_at == 1
        assert touched.payload == [1]
        assert record.last_accessed_at == 2

    def test_touched_never_goes_below_creation(self) -> None:
        record = SessionRecord[Any](session_id="s", created_at=100, last_accessed_at=100, payload=0)
        assert record.touched(40).last_accessed_at == 100


class TestNamespaceStats:
    def test_to_dict(self) -> None:
        stats = NamespaceStats(
            namespace="ns",
            live_count=3,
            ttl_ms=1_000,
            max_entries=5,
            eviction_policy=EvictionPolicy.FIFO,
            storage_location="/tmp/ns",
        )
        assert stats.to_dict() == {
            "namespace": "ns",
            "live_count": 3,
            "ttl_ms": 1_000,
            "max_entries": 5,
            "eviction_policy": "fifo",
            "storage_location": "/tmp/ns",
        }
