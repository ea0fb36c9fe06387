"""Cache entry <-> bytes.

Entries are stored as indented UTF-8 JSON so a record can be inspected with
any text editor. There is no compression and no framing: a file holds exactly
one envelope, and anything that does not validate as one (truncated writes,
hand edits, foreign files) is reported as CorruptRecordError.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from sessioncache.config.constants import ENVELOPE_VERSION
from sessioncache.core.errors import CorruptRecordError, InternalError
from sessioncache.store.models import CacheEntry, SessionRecord

T = TypeVar("T")


class RecordCodec(Generic[T]):
    """Encodes and decodes envelopes for one payload type.

    ``payload_type`` may be anything pydantic can validate (a BaseModel
    subclass, ``dict[str, Any]``, ``list[int]``...). The default ``Any``
    accepts any JSON value unchanged.
    """

    def __init__(self, payload_type: Any = Any) -> None:
        self._payload_type = payload_type
        self._record_type: type[SessionRecord[Any]] = SessionRecord[payload_type]  # type: ignore[valid-type]
        self._entry_type: type[CacheEntry[Any]] = CacheEntry[payload_type]  # type: ignore[valid-type]

    @property
    def payload_type(self) -> Any:
        return self._payload_type

    def build(
        self,
        *,
        session_id: str,
        payload: Any,
        created_at: int,
        now: int,
        ttl_ms: int,
        seq: int = 0,
        created_seq: int | None = None,
    ) -> CacheEntry[T]:
        """Assemble a fresh envelope for a save at ``now``.

        ``seq`` is this write's sequence number; ``created_seq`` carries over
        from a prior record and defaults to ``seq`` for a new one.

        Raises:
            InternalError: payload does not validate against payload_type.
        """
        try:
            record = self._record_type(
                session_id=session_id,
                created_at=created_at,
                last_accessed_at=now,
                payload=payload,
            )
        except ValidationError as e:
            raise InternalError.unexpected(
                "payload does not match the store's payload type",
                session_id=session_id,
                errors=e.error_count(),
            ) from e
        entry = self._entry_type(
            data=record,
            saved_at=now,
            expires_at=now + ttl_ms,
            created_seq=seq if created_seq is None else created_seq,
            accessed_seq=seq,
        )
        return entry  # type: ignore[return-value]

    def with_record(
        self,
        entry: CacheEntry[T],
        record: SessionRecord[T],
        accessed_seq: int | None = None,
    ) -> CacheEntry[T]:
        """Same envelope timestamps, different record (used for LRU refresh)."""
        update: dict[str, Any] = {"data": record}
        if accessed_seq is not None:
            update["accessed_seq"] = accessed_seq
        return entry.model_copy(update=update)

    def encode(self, entry: CacheEntry[T]) -> bytes:
        try:
            return entry.model_dump_json(indent=2).encode("utf-8")
        except PydanticSerializationError as e:
            raise InternalError.unexpected(
                "session payload is not JSON serializable",
                session_id=entry.session_id,
                error=str(e),
            ) from e

    def decode(self, raw: bytes) -> CacheEntry[T]:
        """Parse one stored envelope.

        Raises:
            CorruptRecordError: raw is not a complete, valid envelope.
        """
        if not raw.strip():
            raise CorruptRecordError.malformed("empty record")
        try:
            entry = self._entry_type.model_validate_json(raw)
        except ValidationError as e:
            first = e.errors()[0]
            raise CorruptRecordError.malformed(
                first["msg"],
                location=".".join(str(loc) for loc in first["loc"]),
                errors=e.error_count(),
            ) from e
        except ValueError as e:
            # Undecodable bytes that never reach the validator
            raise CorruptRecordError.malformed(str(e)) from e
        if entry.version != ENVELOPE_VERSION:
            raise CorruptRecordError.malformed(
                f"unsupported envelope version {entry.version}",
                version=entry.version,
            )
        return entry  # type: ignore[return-value]
