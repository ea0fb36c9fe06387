"""Config module exports."""

from sessioncache.config.loader import load_config
from sessioncache.config.models import (
    EvictionPolicy,
    LoggingConfig,
    NamespaceDefaults,
    NamespaceOverrides,
    SessionCacheConfig,
    StorageConfig,
)

__all__ = [
    "load_config",
    "EvictionPolicy",
    "LoggingConfig",
    "NamespaceDefaults",
    "NamespaceOverrides",
    "SessionCacheConfig",
    "StorageConfig",
]
