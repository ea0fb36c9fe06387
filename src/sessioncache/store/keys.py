"""Session id to storage key mapping.

Keys double as file names, so they are restricted to ``[A-Za-z0-9_-]``.
Distinct ids that sanitize to the same key (``"a/b"`` and ``"a:b"``) share
one record. That collision is accepted and not corrected.
"""

from __future__ import annotations

import re
from pathlib import Path

from sessioncache.config.constants import FALLBACK_KEY, RECORD_SUFFIX
from sessioncache.core.errors import ConfigError

_UNSAFE = re.compile(r"[^A-Za-z0-9_-]+")
_DASH_RUNS = re.compile(r"-{2,}")


def resolve_key(session_id: str) -> str:
    """Return the filesystem-safe storage key for a session id.

    Pure and idempotent: ``resolve_key(resolve_key(x)) == resolve_key(x)``.
    """
    key = _UNSAFE.sub("-", session_id)
    key = _DASH_RUNS.sub("-", key)
    key = key.strip("-")
    return key or FALLBACK_KEY


def record_path(scope: Path, key: str) -> Path:
    """Path of the record file for an already-resolved key."""
    return scope / f"{key}{RECORD_SUFFIX}"


def key_from_path(path: Path) -> str:
    """Inverse of record_path for files found while scanning."""
    return path.name.removesuffix(RECORD_SUFFIX)


def validate_namespace(namespace: str) -> str:
    """Return ``namespace`` unchanged if it is usable as a directory name.

    Raises:
        ConfigError: namespace is empty or is not already a storage key.
    """
    if not namespace:
        raise ConfigError.missing_required("namespace")
    if resolve_key(namespace) != namespace:
        raise ConfigError.invalid_value(
            "namespace",
            namespace,
            "must contain only letters, digits, '-' and '_' and not start or end with '-'",
        )
    return namespace
