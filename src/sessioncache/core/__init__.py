"""Core module exports."""

from sessioncache.core.errors import (
    ConfigError,
    CorruptRecordError,
    ErrorCode,
    InternalError,
    PersistenceError,
    SessionCacheError,
)
from sessioncache.core.logging import configure_logging, get_logger

__all__ = [
    # Errors
    "ConfigError",
    "CorruptRecordError",
    "ErrorCode",
    "InternalError",
    "PersistenceError",
    "SessionCacheError",
    # Logging
    "configure_logging",
    "get_logger",
]
