"""Session store module - per-namespace persistent TTL cache."""

from sessioncache.store.codec import RecordCodec
from sessioncache.store.keys import resolve_key
from sessioncache.store.models import (
    CacheEntry,
    NamespaceConfig,
    NamespaceStats,
    SessionRecord,
)
from sessioncache.store.namespace import NamespaceStore, wall_clock_ms
from sessioncache.store.policy import BUILTIN_NAMESPACES, resolve_namespace_config

__all__ = [
    "BUILTIN_NAMESPACES",
    "CacheEntry",
    "NamespaceConfig",
    "NamespaceStats",
    "NamespaceStore",
    "RecordCodec",
    "SessionRecord",
    "resolve_key",
    "resolve_namespace_config",
    "wall_clock_ms",
]
