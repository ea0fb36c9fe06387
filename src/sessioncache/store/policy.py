"""Effective per-namespace settings.

Resolution order for each field (first value found wins):
1. Explicit overrides passed by the caller
2. ``namespaces.<name>`` in loaded settings
3. The built-in table below
4. ``defaults`` in loaded settings (24h / 20 / lru unless configured)
"""

from __future__ import annotations

from typing import Any

from sessioncache.config.constants import (
    BRAINSTORM_NAMESPACE,
    CONVERSATION_NAMESPACE,
    DAY_MS,
    REVIEW_NAMESPACE,
)
from sessioncache.config.models import (
    EvictionPolicy,
    NamespaceOverrides,
    SessionCacheConfig,
)
from sessioncache.store.keys import validate_namespace
from sessioncache.store.models import NamespaceConfig

BUILTIN_NAMESPACES: dict[str, NamespaceOverrides] = {
    REVIEW_NAMESPACE: NamespaceOverrides(
        ttl_ms=DAY_MS,
        max_entries=20,
        eviction_policy=EvictionPolicy.FIFO,
    ),
    CONVERSATION_NAMESPACE: NamespaceOverrides(
        ttl_ms=7 * DAY_MS,
        max_entries=50,
        eviction_policy=EvictionPolicy.LRU,
    ),
    BRAINSTORM_NAMESPACE: NamespaceOverrides(
        ttl_ms=14 * DAY_MS,
        max_entries=30,
        eviction_policy=EvictionPolicy.LRU,
    ),
}

_FIELDS = ("ttl_ms", "max_entries", "eviction_policy")


def resolve_namespace_config(
    namespace: str,
    overrides: NamespaceOverrides | None = None,
    settings: SessionCacheConfig | None = None,
) -> NamespaceConfig:
    """Compute the effective config for ``namespace``.

    Raises:
        ConfigError: namespace is empty or not usable as a directory name.
    """
    validate_namespace(namespace)

    settings = settings or SessionCacheConfig()
    layers = [
        overrides,
        settings.namespaces.get(namespace),
        BUILTIN_NAMESPACES.get(namespace),
    ]

    resolved: dict[str, Any] = {}
    for name in _FIELDS:
        resolved[name] = getattr(settings.defaults, name)
        for layer in layers:
            value = getattr(layer, name) if layer is not None else None
            if value is not None:
                resolved[name] = value
                break

    return NamespaceConfig(namespace=namespace, **resolved)
