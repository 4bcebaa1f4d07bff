"""Decode result types.

A decode either succeeds with a record and its transaction id, or fails
with a :class:`FailureReason`. :meth:`as_pair` gives the collapsed view
where every failure is ``(DecodedRecord.zero(), "")``.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Literal

from pyairq.models.record import DecodedRecord


class FailureReason(enum.StrEnum):
    """Why a frame did not produce a trusted record."""

    MALFORMED_FRAME = "malformed_frame"
    KEY_DECODE_FAILURE = "key_decode_failure"
    SIGNATURE_INVALID = "signature_invalid"
    UNSUPPORTED_SCHEME = "unsupported_scheme"
    DEVICE_NOT_VALIDATED = "device_not_validated"
    UNKNOWN_DEVICE = "unknown_device"


@dataclass(frozen=True)
class DecodeSuccess:
    """Authenticated and decoded frame."""

    record: DecodedRecord
    transaction_id: str
    ok: Literal[True] = True

    def as_pair(self) -> tuple[DecodedRecord, str]:
        return self.record, self.transaction_id


@dataclass(frozen=True)
class DecodeFailure:
    """Frame rejected; ``detail`` is diagnostic text, not for end users."""

    reason: FailureReason
    detail: str = ""
    ok: Literal[False] = False

    def as_pair(self) -> tuple[DecodedRecord, str]:
        return DecodedRecord.zero(), ""


DecodeResult = DecodeSuccess | DecodeFailure
