"""Tests for the base64 / registry / ledger boundary."""

from __future__ import annotations

from datetime import datetime

import pytest
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from pyairq._tools.frame_builder import b64, build_inline_frame, sign_frame
from pyairq.config import AirqConfig
from pyairq.exceptions import MalformedFrameError
from pyairq.ingestion import decode_base64, device_key, ingest_message, rejection_message
from pyairq.models import DecodedRecord, DecodeFailure, DecodeSuccess, DeviceIdentity, FailureReason


class _FakeRegistry:
    def __init__(self, devices: dict[str, DeviceIdentity]) -> None:
        self.devices = devices
        self.lookups: list[str] = []

    def get_device(self, key: str) -> DeviceIdentity | None:
        self.lookups.append(key)
        return self.devices.get(key)


class _FakeLedger:
    def __init__(self) -> None:
        self.records: dict[str, DecodedRecord] = {}

    def put_record(self, transaction_id: str, record: DecodedRecord) -> None:
        self.records[transaction_id] = record


def _b64(frame: bytes, signature: bytes) -> tuple[str, str]:
    return b64(frame), b64(signature)


def test_captured_message_reaches_ledger(
    captured_frame: bytes,
    captured_signature: bytes,
    captured_device: DeviceIdentity,
    reference_time: datetime,
) -> None:
    registry = _FakeRegistry({"Device1": captured_device})
    ledger = _FakeLedger()
    frame_b64, signature_b64 = _b64(captured_frame, captured_signature)

    result = ingest_message(frame_b64, signature_b64, registry, ledger, now=reference_time)

    assert isinstance(result, DecodeSuccess)
    assert registry.lookups == ["Device1"]
    assert ledger.records == {result.transaction_id: result.record}
    assert rejection_message(result) == ""


def test_revoked_device_is_rejected_before_decoding(
    captured_frame: bytes,
    captured_signature: bytes,
    captured_device: DeviceIdentity,
) -> None:
    revoked = captured_device.model_copy(update={"validation_flag": False})
    ledger = _FakeLedger()
    frame_b64, signature_b64 = _b64(captured_frame, captured_signature)

    result = ingest_message(
        frame_b64,
        signature_b64,
        _FakeRegistry({"Device1": revoked}),
        ledger,
        config=AirqConfig(enforce_validation_flag=False),
    )

    assert isinstance(result, DecodeFailure)
    assert result.reason == FailureReason.DEVICE_NOT_VALIDATED
    assert ledger.records == {}
    assert rejection_message(result) == "Device is not validated"


def test_unknown_device(captured_frame: bytes, captured_signature: bytes) -> None:
    frame_b64, signature_b64 = _b64(captured_frame, captured_signature)
    result = ingest_message(frame_b64, signature_b64, _FakeRegistry({}))
    assert isinstance(result, DecodeFailure)
    assert result.reason == FailureReason.UNKNOWN_DEVICE
    assert result.as_pair() == (DecodedRecord.zero(), "")


def test_tampered_signature_is_not_stored(
    captured_frame: bytes,
    captured_signature: bytes,
    captured_device: DeviceIdentity,
) -> None:
    ledger = _FakeLedger()
    tampered = bytes([captured_signature[0] ^ 0x01]) + captured_signature[1:]
    frame_b64, signature_b64 = _b64(captured_frame, tampered)

    result = ingest_message(frame_b64, signature_b64, _FakeRegistry({"Device1": captured_device}), ledger)

    assert isinstance(result, DecodeFailure)
    assert result.reason == FailureReason.SIGNATURE_INVALID
    assert rejection_message(result) == "Signature verification failed"
    assert ledger.records == {}


@pytest.mark.parametrize(
    ("frame_b64", "signature_b64"),
    [
        ("not*base64", "AAAA"),
        ("qgAB", "not*base64"),
        ("", "AAAA"),
        ("qwAB", "AAAA"),
    ],
)
def test_malformed_transport_text(frame_b64: str, signature_b64: str) -> None:
    registry = _FakeRegistry({})
    result = ingest_message(frame_b64, signature_b64, registry)
    assert isinstance(result, DecodeFailure)
    assert result.reason == FailureReason.MALFORMED_FRAME
    assert registry.lookups == []
    assert rejection_message(result) == "Malformed frame"


def test_inline_message_without_detached_signature(
    private_key: Ed25519PrivateKey, device: DeviceIdentity, reference_time: datetime
) -> None:
    frame = build_inline_frame(private_key, 42, pm10=10.0, pm25=2.5)
    ledger = _FakeLedger()

    result = ingest_message(b64(frame), None, _FakeRegistry({"Device42": device}), ledger, now=reference_time)

    assert isinstance(result, DecodeSuccess)
    assert result.record.pm25 == 2.5
    assert list(ledger.records) == [result.transaction_id]


def test_registry_key_uses_config_prefix(
    private_key: Ed25519PrivateKey, device: DeviceIdentity, detached_frame: bytes
) -> None:
    registry = _FakeRegistry({"node1": device})
    result = ingest_message(
        b64(detached_frame),
        b64(sign_frame(private_key, detached_frame)),
        registry,
        config=AirqConfig(device_label_prefix="node"),
    )
    assert isinstance(result, DecodeSuccess)
    assert result.record.device_id == "node1"


def test_decode_base64_rejects_garbage() -> None:
    with pytest.raises(MalformedFrameError, match="frame is not valid base64"):
        decode_base64("@@@", name="frame")


def test_device_key() -> None:
    assert device_key(b"\xaa\x01\x02", "Device") == "Device258"
    with pytest.raises(MalformedFrameError):
        device_key(b"\xaa\x01", "Device")
    with pytest.raises(MalformedFrameError, match="header"):
        device_key(b"\x00\x01\x02", "Device")
