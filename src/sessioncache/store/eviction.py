"""Capacity enforcement.

When a namespace holds more than ``max_entries`` records, the surplus is
removed in policy order:

- FIFO: oldest ``created_at`` first
- LRU: oldest ``last_accessed_at`` first

Millisecond stamps tie easily, so each stamp is paired with the envelope's
write sequence, and only then with the storage key.
"""

from __future__ import annotations

from collections.abc import Sequence

from sessioncache.config.models import EvictionPolicy
from sessioncache.store.expiry import ScannedRecord


def ordering_key(record: ScannedRecord, policy: EvictionPolicy) -> tuple[int, int, str]:
    """Sort key for eviction; smaller is evicted first.

    Unreadable records sort before everything else.
    """
    entry = record.entry
    if entry is None:
        return (-1, -1, record.key)
    if policy is EvictionPolicy.FIFO:
        return (entry.data.created_at, entry.created_seq, record.key)
    return (entry.data.last_accessed_at, entry.accessed_seq, record.key)


def select_victims(
    candidates: Sequence[ScannedRecord],
    max_entries: int,
    policy: EvictionPolicy,
    keep: str | None = None,
) -> list[ScannedRecord]:
    """Return the records to drop so at most ``max_entries`` remain.

    ``keep`` names a key that is never selected (the record just written).
    """
    surplus = len(candidates) - max_entries
    if surplus <= 0:
        return []
    ordered = sorted(
        (rec for rec in candidates if rec.key != keep),
        key=lambda rec: ordering_key(rec, policy),
    )
    return ordered[:surplus]
