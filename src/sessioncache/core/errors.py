"""Session cache error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Storage (30xx persistence, 31xx record decoding)
- 9xxx: Internal

Absence is never an error: ``load`` returns ``None`` and ``delete``
returns ``False``.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_MISSING_REQUIRED = 2003
    CONFIG_FILE_NOT_FOUND = 2004

    # Persistence (30xx)
    STORAGE_WRITE_FAILED = 3001
    STORAGE_READ_FAILED = 3002
    STORAGE_DELETE_FAILED = 3003
    STORAGE_SCOPE_FAILED = 3004

    # Records (31xx)
    RECORD_CORRUPT = 3101

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class SessionCacheError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'STORAGE_WRITE_FAILED')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(SessionCacheError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def missing_required(cls, field: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_MISSING_REQUIRED,
            message=f"Missing required config field: {field}",
            details={"field": field},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class PersistenceError(SessionCacheError):
    """Underlying storage failed for a reason other than absence.

    Operations that raise this are safe for the caller to retry; the store
    itself never retries.
    """

    @classmethod
    def write_failed(cls, namespace: str, path: str, reason: str) -> "PersistenceError":
        return cls(
            code=ErrorCode.STORAGE_WRITE_FAILED,
            message=f"Failed to write session record {path}: {reason}",
            retryable=True,
            details={"namespace": namespace, "path": path, "reason": reason},
        )

    @classmethod
    def read_failed(cls, namespace: str, path: str, reason: str) -> "PersistenceError":
        return cls(
            code=ErrorCode.STORAGE_READ_FAILED,
            message=f"Failed to read session record {path}: {reason}",
            retryable=True,
            details={"namespace": namespace, "path": path, "reason": reason},
        )

    @classmethod
    def delete_failed(cls, namespace: str, path: str, reason: str) -> "PersistenceError":
        return cls(
            code=ErrorCode.STORAGE_DELETE_FAILED,
            message=f"Failed to delete session record {path}: {reason}",
            retryable=True,
            details={"namespace": namespace, "path": path, "reason": reason},
        )

    @classmethod
    def scope_failed(cls, namespace: str, path: str, reason: str) -> "PersistenceError":
        return cls(
            code=ErrorCode.STORAGE_SCOPE_FAILED,
            message=f"Failed to prepare storage directory {path}: {reason}",
            retryable=True,
            details={"namespace": namespace, "path": path, "reason": reason},
        )


class CorruptRecordError(SessionCacheError):
    """Stored bytes are not a well-formed cache entry.

    Raised by the codec only. The store recovers locally by deleting the
    record, so callers of ``load``/``list`` never see it.
    """

    @classmethod
    def malformed(cls, reason: str, **details: Any) -> "CorruptRecordError":
        return cls(
            code=ErrorCode.RECORD_CORRUPT,
            message=f"Corrupt session record: {reason}",
            details=details,
        )


class InternalError(SessionCacheError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
