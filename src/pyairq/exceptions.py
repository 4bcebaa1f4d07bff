"""Custom exception hierarchy for pyairq."""

from __future__ import annotations

from pyairq.models.result import FailureReason


class AirqError(Exception):
    """Base exception for all pyairq errors."""


class AirqConfigError(AirqError):
    """Invalid or missing configuration."""


class AirqFrameError(AirqError):
    """A frame could not be turned into a trusted record.

    These never reach callers of the frame decoder: they are converted
    into a :class:`~pyairq.models.result.DecodeFailure` carrying
    :attr:`reason`.
    """

    reason: FailureReason = FailureReason.MALFORMED_FRAME

    def __init__(self, message: str, *, reason: FailureReason | None = None) -> None:
        if reason is not None:
            self.reason = reason
        super().__init__(message)


class MalformedFrameError(AirqFrameError):
    """Wrong header byte, short frame, or undecodable field block."""

    reason = FailureReason.MALFORMED_FRAME


class KeyDecodeError(AirqFrameError):
    """Device public key cannot be decoded from its base64 text."""

    reason = FailureReason.KEY_DECODE_FAILURE


class SignatureInvalidError(AirqFrameError):
    """Ed25519 verification of the frame's message region failed."""

    reason = FailureReason.SIGNATURE_INVALID


class UnsupportedSchemeError(AirqFrameError):
    """Encoding scheme is reserved but has no decoder yet."""

    reason = FailureReason.UNSUPPORTED_SCHEME


class DeviceRejectedError(AirqFrameError):
    """Device is unknown to the registry or not validated.

    Raised by the ingestion layer before any frame decoding happens.
    """

    reason = FailureReason.DEVICE_NOT_VALIDATED
