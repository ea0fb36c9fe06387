"""Freshness rules.

Expiry is enforced lazily: a record is checked when it is loaded, listed or
swept, and sweeps only run from inside store operations. There is no timer,
so a namespace nobody touches keeps its expired files until the next access.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from sessioncache.store.models import CacheEntry


@dataclass(frozen=True, slots=True)
class ScannedRecord:
    """One record file found while scanning a namespace.

    ``entry`` is None when the file could not be read or decoded.
    """

    key: str
    path: Path
    entry: CacheEntry[Any] | None

    @property
    def readable(self) -> bool:
        return self.entry is not None


def is_expired(entry: CacheEntry[Any], now: int) -> bool:
    """An entry is live through ``expires_at`` inclusive."""
    return now > entry.expires_at


def should_sweep(occupancy: int, max_entries: int, threshold: float) -> bool:
    """Whether a save at this occupancy should sweep before writing."""
    return occupancy >= threshold * max_entries


def select_sweepable(scanned: Iterable[ScannedRecord], now: int) -> list[ScannedRecord]:
    """Records a sweep removes: unreadable ones and expired ones."""
    return [
        rec for rec in scanned if rec.entry is None or is_expired(rec.entry, now)
    ]
