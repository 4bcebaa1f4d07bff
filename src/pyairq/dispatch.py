"""Encoding scheme dispatch.

Devices carry an ``encoding_scheme`` integer. Known values map to a
decoder through :data:`_DECODERS`; any other value is decoded with the
default scheme rather than rejected.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from datetime import datetime

from pyairq.config import AirqConfig
from pyairq.decoder import AlternateSchemeDecoder, DefaultSchemeDecoder, FrameDecoder
from pyairq.models import DecodeResult, DeviceIdentity

_logger = logging.getLogger(__name__)


class EncodingScheme(enum.IntEnum):
    """Frame encoding schemes a device can be registered with."""

    DEFAULT = 0
    ALTERNATE = 1


_DECODERS: dict[EncodingScheme, Callable[[AirqConfig | None], FrameDecoder]] = {
    EncodingScheme.DEFAULT: DefaultSchemeDecoder,
    EncodingScheme.ALTERNATE: AlternateSchemeDecoder,
}


def resolve_scheme(value: int) -> EncodingScheme:
    """Map a registry scheme id to an :class:`EncodingScheme`.

    Unrecognised ids fall back to :attr:`EncodingScheme.DEFAULT`. Devices
    registered with an unknown id therefore keep decoding as scheme 0.
    """
    try:
        return EncodingScheme(value)
    except ValueError:
        _logger.debug("Unknown encoding scheme %r, falling back to %s", value, EncodingScheme.DEFAULT.name)
        return EncodingScheme.DEFAULT


def decoder_for(value: int, config: AirqConfig | None = None) -> FrameDecoder:
    """Return the decoder for scheme id *value*."""
    return _DECODERS[resolve_scheme(value)](config)


def decode_frame(
    frame: bytes,
    device: DeviceIdentity,
    signature: bytes | None = None,
    *,
    now: datetime | None = None,
    config: AirqConfig | None = None,
) -> DecodeResult:
    """Decode *frame* with the decoder selected by ``device.encoding_scheme``.

    Parameters
    ----------
    frame : bytes
        Raw frame bytes (already base64-decoded).
    device : DeviceIdentity
        Registry record of the sending device.
    signature : bytes or None
        Detached 64-byte signature for revised frames. ``None`` reads the
        signature inline from the end of the frame.
    now : datetime or None
        Reference instant used to date the frame's time of day. Defaults
        to the current UTC time.
    config : AirqConfig or None
        Decoder configuration.

    Returns
    -------
    DecodeResult
        :class:`DecodeSuccess` or :class:`DecodeFailure`; never raises for
        malformed frames, bad keys or bad signatures.
    """
    return decoder_for(device.encoding_scheme, config).decode(frame, device, signature, now=now)
