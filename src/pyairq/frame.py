"""Frame layouts and slicing.

Two protocol revisions share the default encoding scheme:

* **inline** (original): ``header | device id | uuid | pm10 | pm25 |
  signature(64)``, the signature covering bytes ``[0:23]``.
* **detached** (revised): ``header | device id | uuid | pm10 | pm25 |
  humidity | temperature | HHMMSS | latitude(11) | longitude(12)``, the
  64-byte signature delivered separately and covering bytes ``[0:56]``.

Slicing never reads past the frame: the length is checked against the
layout minimum before any field is touched.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from pyairq._constants import (
    DETACHED_MESSAGE_LEN,
    DEVICE_ID_LEN,
    DEVICE_ID_OFFSET,
    HEADER_BYTE,
    INLINE_MESSAGE_LEN,
    SIGNATURE_LEN,
    UUID_LEN,
    UUID_OFFSET,
)
from pyairq.exceptions import MalformedFrameError


class FrameRevision(enum.StrEnum):
    """Where the frame's signature lives."""

    INLINE = "inline"
    DETACHED = "detached"


@dataclass(frozen=True)
class FrameLayout:
    """Byte geometry of one frame revision."""

    revision: FrameRevision
    message_len: int
    inline_signature: bool

    @property
    def min_len(self) -> int:
        if self.inline_signature:
            return self.message_len + SIGNATURE_LEN
        return self.message_len


INLINE_LAYOUT = FrameLayout(FrameRevision.INLINE, INLINE_MESSAGE_LEN, inline_signature=True)
DETACHED_LAYOUT = FrameLayout(FrameRevision.DETACHED, DETACHED_MESSAGE_LEN, inline_signature=False)


def layout_for(signature: bytes | None) -> FrameLayout:
    """Pick the revision: a detached signature implies the revised layout."""
    if signature is None:
        return INLINE_LAYOUT
    return DETACHED_LAYOUT


@dataclass(frozen=True)
class ParsedFrame:
    """Structural view of a frame; nothing here is authenticated yet."""

    layout: FrameLayout
    device_id: int
    uuid: bytes
    message: bytes
    signature: bytes
    raw: bytes

    @property
    def transaction_id(self) -> str:
        return self.uuid.hex()

    def field(self, offset: int, length: int) -> bytes:
        end = offset + length
        if end > self.layout.message_len:
            raise MalformedFrameError(
                f"field [{offset}:{end}] is outside the {self.layout.revision} message region",
            )
        return self.message[offset:end]


def read_device_id(frame: bytes) -> int:
    """Return the unsigned big-endian device id from bytes ``[1:3]``."""
    end = DEVICE_ID_OFFSET + DEVICE_ID_LEN
    if len(frame) < end:
        raise MalformedFrameError(f"frame too short for device id ({len(frame)} bytes)")
    return int.from_bytes(frame[DEVICE_ID_OFFSET:end], "big")


def parse_frame(frame: bytes, layout: FrameLayout, signature: bytes | None = None) -> ParsedFrame:
    """Validate *frame* against *layout* and slice its regions.

    Raises
    ------
    MalformedFrameError
        If the frame is shorter than the layout requires or its header is
        not ``0xAA``.
    """
    data = bytes(frame)
    if len(data) < layout.min_len:
        raise MalformedFrameError(
            f"{layout.revision} frame needs at least {layout.min_len} bytes (got {len(data)})",
        )
    if data[0] != HEADER_BYTE:
        raise MalformedFrameError(f"header mismatch: expected 0x{HEADER_BYTE:02X}, got 0x{data[0]:02X}")

    message = data[: layout.message_len]
    if layout.inline_signature:
        sig = data[layout.message_len : layout.message_len + SIGNATURE_LEN]
    else:
        sig = bytes(signature or b"")

    return ParsedFrame(
        layout=layout,
        device_id=read_device_id(data),
        uuid=data[UUID_OFFSET : UUID_OFFSET + UUID_LEN],
        message=message,
        signature=sig,
        raw=data,
    )
