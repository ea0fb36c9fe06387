"""Tests for the record codec."""

import json
from typing import Any

import pytest
from pydantic import BaseModel

from sessioncache.core.errors import CorruptRecordError, ErrorCode, InternalError
from sessioncache.store.codec import RecordCodec


class Notes(BaseModel):
    title: str
    tags: list[str] = []


def _entry(codec: RecordCodec[Any], payload: Any, *, now: int = 1_000) -> Any:
    return codec.build(session_id="s-1", payload=payload, created_at=now, now=now, ttl_ms=500)


class TestBuild:
    def test_stamps_envelope(self) -> None:
        codec: RecordCodec[Any] = RecordCodec()
        entry = codec.build(session_id="s", payload=[1], created_at=100, now=250, ttl_ms=1_000)
        assert entry.version == 1
        assert entry.saved_at == 250
        assert entry.expires_at == 1_250
        assert entry.data.created_at == 100
        assert entry.data.last_accessed_at == 250
        assert entry.session_id == "s"

    def test_write_sequence_carries_over(self) -> None:
        codec: RecordCodec[Any] = RecordCodec()
        fresh = codec.build(session_id="s", payload=1, created_at=1, now=1, ttl_ms=1, seq=10)
        assert (fresh.created_seq, fresh.accessed_seq) == (10, 10)

        rewritten = codec.build(
            session_id="s", payload=2, created_at=1, now=2, ttl_ms=1, seq=20, created_seq=10
        )
        assert (rewritten.created_seq, rewritten.accessed_seq) == (10, 20)

        touched = codec.with_record(rewritten, rewritten.data.touched(3), accessed_seq=30)
        assert (touched.created_seq, touched.accessed_seq) == (10, 30)

    def test_payload_type_mismatch_is_internal_error(self) -> None:
        codec: RecordCodec[Notes] = RecordCodec(Notes)
        with pytest.raises(InternalError) as exc_info:
            codec.build(session_id="s", payload={"tags": "x"}, created_at=1, now=1, ttl_ms=1)
        assert exc_info.value.code == ErrorCode.INTERNAL_ERROR


class TestEncodeDecode:
    def test_encoded_form_is_readable_json(self) -> None:
        codec: RecordCodec[Any] = RecordCodec()
        raw = codec.encode(_entry(codec, {"k": "v"}))
        doc = json.loads(raw.decode("utf-8"))
        assert doc["version"] == 1
        assert doc["data"]["session_id"] == "s-1"
        assert doc["data"]["payload"] == {"k": "v"}
        assert b"\n  " in raw

    def test_typed_payload_decodes_to_model(self) -> None:
        codec: RecordCodec[Notes] = RecordCodec(Notes)
        entry = _entry(codec, Notes(title="t", tags=["a"]))
        decoded = codec.decode(codec.encode(entry))
        assert isinstance(decoded.data.payload, Notes)
        assert decoded.data.payload.tags == ["a"]
        assert decoded == entry

    def test_unserializable_payload_is_internal_error(self) -> None:
        codec: RecordCodec[Any] = RecordCodec()
        entry = _entry(codec, {"when": object()})
        with pytest.raises(InternalError) as exc_info:
            codec.encode(entry)
        assert exc_info.value.code == ErrorCode.INTERNAL_ERROR
        assert exc_info.value.details["session_id"] == "s-1"
        assert exc_info.value.details["error"]

    def test_with_record_keeps_envelope_timestamps(self) -> None:
        codec: RecordCodec[Any] = RecordCodec()
        entry = _entry(codec, "p")
        updated = codec.with_record(entry, entry.data.touched(1_400))
        assert updated.saved_at == entry.saved_at
        assert updated.expires_at == entry.expires_at
        assert updated.data.last_accessed_at == 1_400


class TestDecodeFailures:
    @pytest.mark.parametrize(
        "raw",
        [
            b"",
            b"   \n",
            b"{",
            b"not json at all",
            b"[]",
            b'{"version": 1}',
            b'{"version": 1, "data": {"session_id": "s"}, "saved_at": 1, "expires_at": 2}',
            b"\xff\xfe\x00garbage",
        ],
    )
    def test_corrupt_input(self, raw: bytes) -> None:
        codec: RecordCodec[Any] = RecordCodec()
        with pytest.raises(CorruptRecordError) as exc_info:
            codec.decode(raw)
        assert exc_info.value.code == ErrorCode.RECORD_CORRUPT

    def test_unknown_version(self) -> None:
        codec: RecordCodec[Any] = RecordCodec()
        doc = json.loads(codec.encode(_entry(codec, 1)))
        doc["version"] = 99
        with pytest.raises(CorruptRecordError) as exc_info:
            codec.decode(json.dumps(doc).encode())
        assert exc_info.value.details["version"] == 99

    def test_access_before_creation_is_corrupt(self) -> None:
        codec: RecordCodec[Any] = RecordCodec()
        doc = json.loads(codec.encode(_entry(codec, 1)))
        doc["data"]["last_accessed_at"] = doc["data"]["created_at"] - 1
        with pytest.raises(CorruptRecordError):
            codec.decode(json.dumps(doc).encode())

    def test_payload_not_matching_type_is_corrupt(self) -> None:
        loose: RecordCodec[Any] = RecordCodec()
        raw = loose.encode(_entry(loose, {"nope": True}))
        strict: RecordCodec[Notes] = RecordCodec(Notes)
        with pytest.raises(CorruptRecordError):
            strict.decode(raw)
