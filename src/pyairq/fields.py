"""Field decoders for sensor frame values.

Sensor values arrive as two single bytes, low then high, combined as
``low + high * 256`` with one implied decimal digit. Geocoordinates and
the time of day arrive as fixed-width ASCII blocks.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from pyairq._constants import (
    LATITUDE_LEN,
    LONGITUDE_LEN,
    MAGNITUDE_MASK,
    PM_CLAMP,
    SIGN_BIT,
    TIMESTAMP_LEN,
    VALUE_SCALE,
)
from pyairq.exceptions import MalformedFrameError

_ROLLBACK_HOUR = "23"


def _byte(value: int, name: str) -> int:
    widened = int(value)
    if not 0 <= widened <= 0xFF:
        raise ValueError(f"{name} must be a single byte (0-255), got {value}")
    return widened


def pm_value(low: int, high: int) -> float:
    """Decode a particulate matter concentration in µg/m³.

    Each widened component is clamped to 9999 before summing and the sum
    is clamped again, so the result saturates at 999.9 (the sensor's
    measuring range). For single-byte input only the high component can
    reach the clamp.
    """
    low_part = min(_byte(low, "low"), PM_CLAMP)
    high_part = min(_byte(high, "high") << 8, PM_CLAMP)
    return min(low_part + high_part, PM_CLAMP) / VALUE_SCALE


def humidity_value(low: int, high: int) -> float:
    """Decode relative humidity in percent."""
    return (_byte(low, "low") + (_byte(high, "high") << 8)) / VALUE_SCALE


def temperature_value(low: int, high: int) -> float:
    """Decode a sign-magnitude temperature in °C.

    The top bit of *high* is the sign flag; the remaining 15 bits are the
    magnitude in tenths of a degree. This is not two's complement.
    """
    high = _byte(high, "high")
    magnitude = _byte(low, "low") + ((high & MAGNITUDE_MASK) << 8)
    value = magnitude / VALUE_SCALE
    if high & SIGN_BIT:
        return -value
    return value


def _ascii_block(block: bytes, expected: int, name: str) -> str:
    if len(block) != expected:
        raise MalformedFrameError(f"{name} block must be {expected} bytes (got {len(block)})")
    # latin-1 maps every byte to one character, so content is copied through unchanged.
    return bytes(block).decode("latin-1")


def _format_coordinate(degrees: str, minutes: str, seconds: str, hemisphere: str) -> str:
    return f"{degrees}°{minutes}'{seconds}\"{hemisphere}"


def latitude_string(block: bytes) -> str:
    """Format an 11-character ``DDDMMSSSSSH`` latitude block.

    ``b"0490033624N"`` becomes ``049°00'33624"N``.
    Digits are not validated or reinterpreted.
    """
    text = _ascii_block(block, LATITUDE_LEN, "latitude")
    return _format_coordinate(text[0:3], text[3:5], text[5:10], text[10])


def longitude_string(block: bytes) -> str:
    """Format a 12-character ``DDDDMMSSSSSH`` longitude block."""
    text = _ascii_block(block, LONGITUDE_LEN, "longitude")
    return _format_coordinate(text[0:4], text[4:6], text[6:11], text[11])


def timestamp_value(digits: bytes, reference: datetime) -> datetime:
    """Resolve an ``HHMMSS`` time of day to an absolute UTC datetime.

    The date comes from *reference* (the validating node's clock). When the
    frame reports hour 23 but the reference clock has already moved past
    it, the reading is taken to belong to the previous day. This only holds
    while delivery latency stays under one hour.

    Raises
    ------
    MalformedFrameError
        If the block is not six ASCII digits forming a valid time of day.
    """
    text = _ascii_block(digits, TIMESTAMP_LEN, "timestamp")
    if not (text.isascii() and text.isdigit()):
        raise MalformedFrameError(f"timestamp must be ASCII digits HHMMSS, got {text!r}")

    hour_text = text[0:2]
    hour, minute, second = int(hour_text), int(text[2:4]), int(text[4:6])

    day = reference.date()
    if hour_text == _ROLLBACK_HOUR and reference.strftime("%H") != _ROLLBACK_HOUR:
        day -= timedelta(days=1)

    try:
        return datetime(day.year, day.month, day.day, hour, minute, second, tzinfo=UTC)
    except ValueError as exc:
        raise MalformedFrameError(f"timestamp {text!r} is not a valid time of day") from exc
