"""Frame decoders, one per encoding scheme.

Each decoder turns a raw frame plus the device's identity into a
:data:`~pyairq.models.result.DecodeResult`. Structural, key and signature
problems are raised internally as :class:`AirqFrameError` and returned as
:class:`DecodeFailure` at this boundary; callers never see them raised.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Protocol

from pyairq._constants import (
    HUMIDITY_OFFSET,
    LATITUDE_LEN,
    LATITUDE_OFFSET,
    LONGITUDE_LEN,
    LONGITUDE_OFFSET,
    PM10_OFFSET,
    PM25_OFFSET,
    SENSOR_VALUE_LEN,
    TEMPERATURE_OFFSET,
    TIMESTAMP_LEN,
    TIMESTAMP_OFFSET,
)
from pyairq._crypto import verify_or_raise
from pyairq._redact import redact_for_log
from pyairq.config import AirqConfig
from pyairq.exceptions import AirqFrameError, DeviceRejectedError, UnsupportedSchemeError
from pyairq.fields import (
    humidity_value,
    latitude_string,
    longitude_string,
    pm_value,
    temperature_value,
    timestamp_value,
)
from pyairq.frame import FrameRevision, ParsedFrame, layout_for, parse_frame
from pyairq.models import DecodedRecord, DecodeFailure, DecodeResult, DecodeSuccess, DeviceIdentity

_logger = logging.getLogger(__name__)


class FrameDecoder(Protocol):
    """Decoder for one encoding scheme."""

    def decode(
        self,
        frame: bytes,
        device: DeviceIdentity,
        signature: bytes | None = None,
        *,
        now: datetime | None = None,
    ) -> DecodeResult: ...


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _pair(parsed: ParsedFrame, offset: int) -> tuple[int, int]:
    low, high = parsed.field(offset, SENSOR_VALUE_LEN)
    return low, high


class DefaultSchemeDecoder:
    """Scheme 0: Ed25519-signed frames in the inline or detached revision.

    Passing *signature* selects the detached (revised) layout; without it
    the signature is read from the end of an inline frame.
    """

    def __init__(self, config: AirqConfig | None = None) -> None:
        self._config = config or AirqConfig()

    def decode(
        self,
        frame: bytes,
        device: DeviceIdentity,
        signature: bytes | None = None,
        *,
        now: datetime | None = None,
    ) -> DecodeResult:
        try:
            return self._decode(frame, device, signature, now=now)
        except AirqFrameError as exc:
            _logger.debug("Frame rejected (%s): %s", exc.reason, exc)
            return DecodeFailure(reason=exc.reason, detail=str(exc))

    def _decode(
        self,
        frame: bytes,
        device: DeviceIdentity,
        signature: bytes | None,
        *,
        now: datetime | None,
    ) -> DecodeSuccess:
        if self._config.enforce_validation_flag and not device.validation_flag:
            raise DeviceRejectedError("device is not validated")

        parsed = parse_frame(frame, layout_for(signature), signature)
        if self._config.log_frames:
            _logger.debug(
                "Decoding frame %s",
                redact_for_log(
                    {
                        "revision": str(parsed.layout.revision),
                        "device_id": parsed.device_id,
                        "transaction_id": parsed.transaction_id,
                        "frame": parsed.raw,
                        "signature": parsed.signature,
                        "public_key": device.public_key,
                    }
                ),
            )

        verify_or_raise(device.public_key, parsed.message, parsed.signature)

        reference = now if now is not None else datetime.now(UTC)
        record = self._build_record(parsed, reference)
        return DecodeSuccess(record=record, transaction_id=parsed.transaction_id)

    def _build_record(self, parsed: ParsedFrame, reference: datetime) -> DecodedRecord:
        label = f"{self._config.device_label_prefix}{parsed.device_id}"
        pm10 = pm_value(*_pair(parsed, PM10_OFFSET))
        pm25 = pm_value(*_pair(parsed, PM25_OFFSET))

        if parsed.layout.revision == FrameRevision.INLINE:
            # The original revision carries particulate values only.
            return DecodedRecord(device_id=label, pm10=pm10, pm25=pm25, timestamp=_as_utc(reference))

        return DecodedRecord(
            device_id=label,
            pm10=pm10,
            pm25=pm25,
            humidity=humidity_value(*_pair(parsed, HUMIDITY_OFFSET)),
            temperature=temperature_value(*_pair(parsed, TEMPERATURE_OFFSET)),
            timestamp=timestamp_value(parsed.field(TIMESTAMP_OFFSET, TIMESTAMP_LEN), reference),
            latitude=latitude_string(parsed.field(LATITUDE_OFFSET, LATITUDE_LEN)),
            longitude=longitude_string(parsed.field(LONGITUDE_OFFSET, LONGITUDE_LEN)),
        )


class AlternateSchemeDecoder:
    """Scheme 1: reserved. Always fails with ``UNSUPPORTED_SCHEME``."""

    def __init__(self, config: AirqConfig | None = None) -> None:
        self._config = config or AirqConfig()

    def decode(
        self,
        frame: bytes,
        device: DeviceIdentity,
        signature: bytes | None = None,
        *,
        now: datetime | None = None,
    ) -> DecodeResult:
        exc = UnsupportedSchemeError("alternate encoding scheme is not implemented")
        _logger.debug("Frame rejected (%s): %s", exc.reason, exc)
        return DecodeFailure(reason=exc.reason, detail=str(exc))
