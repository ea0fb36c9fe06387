"""File-backed session store for one namespace.

Layout::

    <base_dir>/<namespace>/<key>.json      one record per session
    <base_dir>/<namespace>/.<key>.*.tmp    in-flight writes (never scanned)

The directory listing is the only index. Every operation re-reads disk, so
several short-lived processes can share a namespace over time; concurrent
writers to the same key are last-writer-wins.

Recovery is local and silent: corrupt records are deleted when read, expired
records are deleted when found, and neither is reported to the caller as an
error. Failures to write or to explicitly delete raise PersistenceError.
"""

from __future__ import annotations

import contextlib
import os
import tempfile
import threading
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any, Generic, TypeVar

from sessioncache.config.constants import (
    DEFAULT_SWEEP_THRESHOLD,
    RECORD_SUFFIX,
    TEMP_PREFIX,
    TEMP_SUFFIX,
)
from sessioncache.config.models import EvictionPolicy
from sessioncache.core.errors import CorruptRecordError, PersistenceError
from sessioncache.core.logging import get_logger
from sessioncache.store.codec import RecordCodec
from sessioncache.store.eviction import select_victims
from sessioncache.store.expiry import (
    ScannedRecord,
    is_expired,
    select_sweepable,
    should_sweep,
)
from sessioncache.store.keys import (
    key_from_path,
    record_path,
    resolve_key,
    validate_namespace,
)
from sessioncache.store.models import (
    CacheEntry,
    NamespaceConfig,
    NamespaceStats,
    SessionRecord,
)

T = TypeVar("T")

Clock = Callable[[], int]


def wall_clock_ms() -> int:
    """Milliseconds since the Unix epoch."""
    return int(time.time() * 1000)


class _WriteSequence:
    """Strictly increasing nanosecond stamps for ordering same-millisecond writes."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._last = 0

    def next(self) -> int:
        with self._lock:
            self._last = max(time.time_ns(), self._last + 1)
            return self._last


_write_seq = _WriteSequence()


class NamespaceStore(Generic[T]):
    """Persistent TTL + capacity bounded store for one namespace.

    Args:
        config: Effective namespace settings (see resolve_namespace_config).
        base_dir: Root directory; the namespace directory is created under it
            on first save, never at construction.
        payload_type: Type used to validate payloads on save and load.
            Defaults to ``Any`` (any JSON value, returned as parsed).
        clock: Returns the current time in epoch milliseconds.
        sweep_threshold: Fraction of max_entries at which a save sweeps
            expired records before writing.

    Raises:
        ConfigError: config.namespace is not usable as a directory name.
    """

    def __init__(
        self,
        config: NamespaceConfig,
        base_dir: Path,
        *,
        payload_type: Any = Any,
        clock: Clock | None = None,
        sweep_threshold: float = DEFAULT_SWEEP_THRESHOLD,
    ) -> None:
        self._config = config
        self._scope = Path(base_dir).expanduser() / validate_namespace(config.namespace)
        self._codec: RecordCodec[T] = RecordCodec(payload_type)
        self._clock = clock or wall_clock_ms
        self._sweep_threshold = sweep_threshold
        self._log = get_logger("sessioncache.store", namespace=config.namespace)

    @property
    def config(self) -> NamespaceConfig:
        return self._config

    @property
    def namespace(self) -> str:
        return self._config.namespace

    @property
    def scope(self) -> Path:
        """Directory holding this namespace's records."""
        return self._scope

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def save(self, session_id: str, payload: T) -> SessionRecord[T]:
        """Create or replace the record for ``session_id``.

        ``created_at`` survives from a live prior record; everything else is
        stamped with the current time and the namespace TTL.

        Raises:
            PersistenceError: The directory or record could not be written.
            InternalError: The payload does not fit the store's payload type.
        """
        key = resolve_key(session_id)
        path = record_path(self._scope, key)
        self._ensure_scope()
        now = self._clock()

        occupancy = len(self._record_paths())
        if should_sweep(occupancy, self._config.max_entries, self._sweep_threshold):
            self._sweep(now)

        created_at = now
        created_seq: int | None = None
        prior = self._read_live(path, now)
        if prior is not None:
            created_at = prior.data.created_at
            created_seq = prior.created_seq

        entry: CacheEntry[T] = self._codec.build(
            session_id=session_id,
            payload=payload,
            created_at=created_at,
            now=now,
            ttl_ms=self._config.ttl_ms,
            seq=_write_seq.next(),
            created_seq=created_seq,
        )
        self._write(path, entry)
        self._log.debug(
            "session_saved", key=key, created_at=created_at, expires_at=entry.expires_at
        )

        self._enforce_capacity(keep=key)
        return entry.data

    def load(self, session_id: str) -> SessionRecord[T] | None:
        """Return the live record for ``session_id``, or None.

        Missing, expired, corrupt and unreadable records all come back as
        None. Expired and corrupt records are deleted on the way; finding an
        expired record also sweeps the namespace. Under LRU the record's
        ``last_accessed_at`` is bumped and written back.
        """
        key = resolve_key(session_id)
        path = record_path(self._scope, key)
        now = self._clock()

        try:
            raw = self._read_raw(path)
        except PersistenceError as e:
            self._log.warning("session_unreadable", key=key, error=str(e))
            return None
        if raw is None:
            self._log.debug("session_not_found", key=key)
            return None

        try:
            entry: CacheEntry[T] = self._codec.decode(raw)
        except CorruptRecordError as e:
            self._log.warning("session_corrupt_removed", key=key, error=str(e))
            self._discard(path)
            return None

        if is_expired(entry, now):
            self._log.debug("session_expired_removed", key=key, expires_at=entry.expires_at)
            self._discard(path)
            self._sweep(now)
            return None

        record = entry.data
        if self._config.eviction_policy is EvictionPolicy.LRU:
            record = record.touched(now)
            try:
                self._write(path, self._codec.with_record(entry, record, _write_seq.next()))
            except PersistenceError as e:
                self._log.warning("session_touch_failed", key=key, error=str(e))

        self._log.debug("session_loaded", key=key)
        return record

    def list(self) -> list[SessionRecord[T]]:
        """All live records, ordered by storage key. Access times are untouched."""
        now = self._clock()
        return [
            rec.entry.data
            for rec in self._scan()
            if rec.entry is not None and not is_expired(rec.entry, now)
        ]

    def delete(self, session_id: str) -> bool:
        """Remove the record for ``session_id``. False if there was none.

        Raises:
            PersistenceError: The record exists but could not be removed.
        """
        key = resolve_key(session_id)
        path = record_path(self._scope, key)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise PersistenceError.delete_failed(self.namespace, str(path), str(e)) from e
        self._log.debug("session_deleted", key=key)
        return True

    def stats(self) -> NamespaceStats:
        return NamespaceStats(
            namespace=self.namespace,
            live_count=len(self.list()),
            ttl_ms=self._config.ttl_ms,
            max_entries=self._config.max_entries,
            eviction_policy=self._config.eviction_policy,
            storage_location=str(self._scope),
        )

    def sweep(self) -> int:
        """Remove every expired or undecodable record now. Returns files removed."""
        return self._sweep(self._clock())

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _ensure_scope(self) -> None:
        try:
            self._scope.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PersistenceError.scope_failed(self.namespace, str(self._scope), str(e)) from e

    def _record_paths(self) -> list[Path]:
        try:
            children = list(self._scope.iterdir())
        except FileNotFoundError:
            return []
        except OSError as e:
            self._log.warning("namespace_scan_failed", error=str(e))
            return []
        return sorted(
            p
            for p in children
            if p.name.endswith(RECORD_SUFFIX) and not p.name.startswith(TEMP_PREFIX)
        )

    def _read_raw(self, path: Path) -> bytes | None:
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise PersistenceError.read_failed(self.namespace, str(path), str(e)) from e

    def _read_live(self, path: Path, now: int) -> CacheEntry[T] | None:
        """Prior entry at ``path`` if it is readable and unexpired."""
        try:
            raw = self._read_raw(path)
        except PersistenceError as e:
            self._log.warning("prior_session_unreadable", key=key_from_path(path), error=str(e))
            return None
        if raw is None:
            return None
        try:
            entry: CacheEntry[T] = self._codec.decode(raw)
        except CorruptRecordError:
            return None
        return None if is_expired(entry, now) else entry

    def _scan(self) -> list[ScannedRecord]:
        scanned: list[ScannedRecord] = []
        for path in self._record_paths():
            key = key_from_path(path)
            try:
                raw = self._read_raw(path)
            except PersistenceError as e:
                self._log.warning("session_unreadable", key=key, error=str(e))
                scanned.append(ScannedRecord(key=key, path=path, entry=None))
                continue
            if raw is None:
                # Removed between listing and reading
                continue
            try:
                entry: CacheEntry[Any] | None = self._codec.decode(raw)
            except CorruptRecordError as e:
                self._log.warning("session_corrupt", key=key, error=str(e))
                entry = None
            scanned.append(ScannedRecord(key=key, path=path, entry=entry))
        return scanned

    def _write(self, path: Path, entry: CacheEntry[T]) -> None:
        """Replace ``path`` atomically: temp file, fsync, rename."""
        data = self._codec.encode(entry)
        tmp_name: str | None = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="wb",
                dir=str(self._scope),
                prefix=f"{TEMP_PREFIX}{path.stem}.",
                suffix=TEMP_SUFFIX,
                delete=False,
            ) as f:
                tmp_name = f.name
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
            raise PersistenceError.write_failed(self.namespace, str(path), str(e)) from e

    def _discard(self, path: Path) -> bool:
        """Best-effort delete used by read-repair, sweeps and eviction."""
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            self._log.warning("session_remove_failed", key=key_from_path(path), error=str(e))
            return False
        return True

    def _sweep(self, now: int) -> int:
        removed = sum(self._discard(rec.path) for rec in select_sweepable(self._scan(), now))
        if removed:
            self._log.debug("namespace_swept", removed=removed)
        return removed

    def _enforce_capacity(self, keep: str | None = None) -> None:
        """Evict down to max_entries, never choosing ``keep``."""
        paths = self._record_paths()
        if len(paths) <= self._config.max_entries:
            return
        victims = select_victims(
            self._scan(),
            self._config.max_entries,
            self._config.eviction_policy,
            keep=keep,
        )
        removed = sum(self._discard(rec.path) for rec in victims)
        self._log.debug(
            "namespace_evicted",
            removed=removed,
            policy=self._config.eviction_policy.value,
        )
