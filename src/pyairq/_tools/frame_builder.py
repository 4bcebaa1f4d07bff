"""Build and sign sensor frames.

Used to produce test vectors and to emulate a sensor from
``scripts/build_frame.py``. This mirrors the decoders in
:mod:`pyairq.fields`; values are rounded to one decimal place.
"""

from __future__ import annotations

import base64
import uuid as uuid_mod

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from pyairq._constants import (
    DEVICE_ID_LEN,
    HEADER_BYTE,
    LATITUDE_LEN,
    LONGITUDE_LEN,
    MAGNITUDE_MASK,
    SIGN_BIT,
    TIMESTAMP_LEN,
    UUID_LEN,
    VALUE_SCALE,
)


def encode_value(value: float) -> bytes:
    """Encode a non-negative value with one decimal as ``low, high``."""
    scaled = int(round(value * VALUE_SCALE))
    if not 0 <= scaled <= 0xFFFF:
        raise ValueError(f"value out of range: {value}")
    return bytes((scaled & 0xFF, scaled >> 8))


def encode_temperature(value: float) -> bytes:
    """Encode a temperature as sign-magnitude ``low, high``."""
    scaled = int(round(abs(value) * VALUE_SCALE))
    if scaled > (MAGNITUDE_MASK << 8 | 0xFF):
        raise ValueError(f"temperature out of range: {value}")
    high = scaled >> 8
    if value < 0:
        high |= SIGN_BIT
    return bytes((scaled & 0xFF, high))


def _ascii(text: str, length: int, name: str) -> bytes:
    raw = text.encode("ascii")
    if len(raw) != length:
        raise ValueError(f"{name} must be {length} ASCII characters, got {text!r}")
    return raw


def _header(device_id: int, frame_uuid: bytes | None) -> bytes:
    uuid_bytes = frame_uuid if frame_uuid is not None else uuid_mod.uuid4().bytes
    if len(uuid_bytes) != UUID_LEN:
        raise ValueError(f"uuid must be {UUID_LEN} bytes")
    return bytes((HEADER_BYTE,)) + device_id.to_bytes(DEVICE_ID_LEN, "big") + uuid_bytes


def build_detached_frame(
    device_id: int,
    *,
    pm10: float,
    pm25: float,
    humidity: float,
    temperature: float,
    time_of_day: str,
    latitude: str,
    longitude: str,
    frame_uuid: bytes | None = None,
) -> bytes:
    """Build a 56-byte revised frame (signature not included).

    *time_of_day* is ``HHMMSS``; *latitude* and *longitude* are the raw
    11 and 12 character blocks, e.g. ``"0490033624N"``.
    """
    return (
        _header(device_id, frame_uuid)
        + encode_value(pm10)
        + encode_value(pm25)
        + encode_value(humidity)
        + encode_temperature(temperature)
        + _ascii(time_of_day, TIMESTAMP_LEN, "time_of_day")
        + _ascii(latitude, LATITUDE_LEN, "latitude")
        + _ascii(longitude, LONGITUDE_LEN, "longitude")
    )


def build_inline_frame(
    private_key: Ed25519PrivateKey,
    device_id: int,
    *,
    pm10: float,
    pm25: float,
    frame_uuid: bytes | None = None,
) -> bytes:
    """Build an 87-byte original-revision frame with its trailing signature."""
    message = _header(device_id, frame_uuid) + encode_value(pm10) + encode_value(pm25)
    return message + private_key.sign(message)


def sign_frame(private_key: Ed25519PrivateKey, frame: bytes) -> bytes:
    """Detached 64-byte Ed25519 signature over a revised frame."""
    return private_key.sign(frame)


def public_key_text(private_key: Ed25519PrivateKey) -> str:
    """Registry form of the public key: unpadded standard base64."""
    raw = private_key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)
    return base64.b64encode(raw).decode("ascii").rstrip("=")


def b64(data: bytes) -> str:
    """Transport form of frames and signatures: padded standard base64."""
    return base64.b64encode(data).decode("ascii")
