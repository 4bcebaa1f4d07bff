"""Ingestion boundary: base64 text in, ledger record out.

This is the caller side of the decoder. It owns the steps the decoder
deliberately does not: transport decoding, looking up the device in the
registry, refusing devices whose validation flag is cleared, and handing
successful records to the ledger. Registry and ledger are injected; this
module keeps no state of its own.
"""

from __future__ import annotations

import base64
import binascii
import logging
from datetime import datetime
from typing import Protocol

from pyairq._constants import HEADER_BYTE
from pyairq._redact import redact_for_log
from pyairq.config import AirqConfig
from pyairq.dispatch import decode_frame
from pyairq.exceptions import AirqFrameError, MalformedFrameError
from pyairq.frame import read_device_id
from pyairq.models import DecodedRecord, DecodeFailure, DecodeResult, DecodeSuccess, DeviceIdentity, FailureReason

_logger = logging.getLogger(__name__)


class DeviceRegistry(Protocol):
    """Read side of the device registry collaborator."""

    def get_device(self, key: str) -> DeviceIdentity | None: ...


class LedgerWriter(Protocol):
    """Write side of the ledger collaborator, keyed by transaction id."""

    def put_record(self, transaction_id: str, record: DecodedRecord) -> None: ...


_REJECTION_MESSAGES: dict[FailureReason, str] = {
    FailureReason.MALFORMED_FRAME: "Malformed frame",
    FailureReason.KEY_DECODE_FAILURE: "Signature verification failed",
    FailureReason.SIGNATURE_INVALID: "Signature verification failed",
    FailureReason.UNSUPPORTED_SCHEME: "Signature verification failed",
    FailureReason.DEVICE_NOT_VALIDATED: "Device is not validated",
    FailureReason.UNKNOWN_DEVICE: "Device is not registered",
}


def decode_base64(text: str, *, name: str) -> bytes:
    """Decode standard (padded) base64 transport text.

    Raises
    ------
    MalformedFrameError
        If *text* is not valid base64.
    """
    try:
        return base64.b64decode(text.strip(), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise MalformedFrameError(f"{name} is not valid base64: {exc}") from exc


def device_key(frame: bytes, prefix: str) -> str:
    """Registry key for the device that sent *frame*, e.g. ``"Device1"``."""
    if not frame or frame[0] != HEADER_BYTE:
        raise MalformedFrameError("header mismatch or empty frame")
    return f"{prefix}{read_device_id(frame)}"


def rejection_message(result: DecodeResult) -> str:
    """User-visible text for a rejected frame; empty for a success.

    Key and signature problems share one message so the response does not
    reveal which check failed.
    """
    if isinstance(result, DecodeSuccess):
        return ""
    return _REJECTION_MESSAGES.get(result.reason, "Frame rejected")


def ingest_message(
    frame_b64: str,
    signature_b64: str | None,
    registry: DeviceRegistry,
    ledger: LedgerWriter | None = None,
    *,
    now: datetime | None = None,
    config: AirqConfig | None = None,
) -> DecodeResult:
    """Authenticate, decode and store one base64 frame.

    Parameters
    ----------
    frame_b64 : str
        Base64 frame as delivered by the transport.
    signature_b64 : str or None
        Base64 detached signature (revised protocol). ``None`` for frames
        carrying their signature inline.
    registry : DeviceRegistry
        Device lookup, keyed by :func:`device_key`.
    ledger : LedgerWriter or None
        Receives successful records keyed by transaction id.
    now : datetime or None
        Reference instant for dating the frame.
    config : AirqConfig or None
        Decoder configuration.

    Returns
    -------
    DecodeResult
        The decode outcome. A device whose ``validation_flag`` is cleared
        yields ``DEVICE_NOT_VALIDATED`` without the frame being decoded.
    """
    config = config or AirqConfig()
    try:
        frame = decode_base64(frame_b64, name="frame")
        signature = decode_base64(signature_b64, name="signature") if signature_b64 is not None else None
        key = device_key(frame, config.device_label_prefix)
    except AirqFrameError as exc:
        _logger.debug("Message rejected (%s): %s", exc.reason, exc)
        return DecodeFailure(reason=exc.reason, detail=str(exc))

    device = registry.get_device(key)
    if device is None:
        _logger.debug("Message rejected: %s is not registered", key)
        return DecodeFailure(reason=FailureReason.UNKNOWN_DEVICE, detail=f"{key} is not registered")
    if not device.validation_flag:
        _logger.debug("Message rejected: %s is not validated", key)
        return DecodeFailure(reason=FailureReason.DEVICE_NOT_VALIDATED, detail=f"{key} is not validated")

    if config.log_frames:
        _logger.debug(
            "Ingesting %s",
            redact_for_log({"device": key, "frame_b64": frame_b64, "signature_b64": signature_b64}),
        )

    result = decode_frame(frame, device, signature, now=now, config=config)
    if isinstance(result, DecodeSuccess) and ledger is not None:
        ledger.put_record(result.transaction_id, result.record)
    return result
