"""Tests for the sensor field decoders."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from pyairq.exceptions import MalformedFrameError
from pyairq.fields import (
    humidity_value,
    latitude_string,
    longitude_string,
    pm_value,
    temperature_value,
    timestamp_value,
)

# ------------------------------------------------------------------
# PM
# ------------------------------------------------------------------


class TestPmValue:
    def test_low_high_combine(self) -> None:
        assert pm_value(10, 2) == 52.2

    def test_low_byte_only(self) -> None:
        assert pm_value(0xD7, 0x00) == 21.5

    def test_zero(self) -> None:
        assert pm_value(0, 0) == 0.0

    def test_saturates_at_sensor_range(self) -> None:
        # 0x0F + 0x27 * 256 == 9999
        assert pm_value(0x0F, 0x27) == 999.9
        assert pm_value(0x10, 0x27) == 999.9
        assert pm_value(0xFF, 0xFF) == 999.9

    def test_low_byte_never_reaches_clamp(self) -> None:
        for low in range(256):
            assert pm_value(low, 0) == low / 10

    def test_monotonic_in_each_byte(self) -> None:
        for fixed in (0, 1, 38, 39, 255):
            highs = [pm_value(fixed, high) for high in range(256)]
            lows = [pm_value(low, fixed) for low in range(256)]
            assert highs == sorted(highs)
            assert lows == sorted(lows)

    def test_rejects_values_wider_than_a_byte(self) -> None:
        with pytest.raises(ValueError, match="single byte"):
            pm_value(256, 0)


# ------------------------------------------------------------------
# Humidity / temperature
# ------------------------------------------------------------------


def test_humidity() -> None:
    assert humidity_value(0x8C, 0x02) == 65.2


def test_humidity_is_not_clamped() -> None:
    assert humidity_value(0xFF, 0xFF) == 6553.5


class TestTemperature:
    def test_positive(self) -> None:
        assert temperature_value(0x5F, 0x01) == 35.1

    def test_sign_bit_negates(self) -> None:
        assert temperature_value(0x5F, 0x81) == -35.1

    def test_sign_magnitude_not_twos_complement(self) -> None:
        # Two's complement 0xFFFF would be -0.1; sign-magnitude gives -3276.7.
        assert temperature_value(0xFF, 0xFF) == -3276.7

    def test_sign_bit_exactly_negates_for_all_bytes(self) -> None:
        for low in range(256):
            for high in range(256):
                assert temperature_value(low, high | 0x80) == -temperature_value(low, high & 0x7F)


# ------------------------------------------------------------------
# Geocoordinates
# ------------------------------------------------------------------


def test_latitude() -> None:
    block = bytes([ord(c) for c in "0490033624N"])
    assert latitude_string(block) == "049°00'33624\"N"


def test_longitude() -> None:
    assert longitude_string(b"00082531116E") == "0008°25'31116\"E"


def test_coordinates_copy_non_digits_verbatim() -> None:
    assert latitude_string(b"ABCDEFGHIJK") == "ABC°DE'FGHIJ\"K"
    assert longitude_string(b"12 4-5x.789W") == "12 4°-5'x.789\"W"


@pytest.mark.parametrize("block", [b"", b"049003362N", b"0490033624NN"])
def test_latitude_wrong_width(block: bytes) -> None:
    with pytest.raises(MalformedFrameError, match="latitude"):
        latitude_string(block)


def test_longitude_wrong_width() -> None:
    with pytest.raises(MalformedFrameError, match="longitude"):
        longitude_string(b"0008253111E")


# ------------------------------------------------------------------
# Timestamp
# ------------------------------------------------------------------


class TestTimestamp:
    def test_anchors_to_reference_date(self) -> None:
        reference = datetime(2019, 7, 6, 17, 45, 2, tzinfo=UTC)
        result = timestamp_value(b"174300", reference)
        assert result == datetime(2019, 7, 6, 17, 43, 0, tzinfo=UTC)
        cest = timezone(timedelta(hours=2))
        assert result.astimezone(cest).replace(tzinfo=None) == datetime(2019, 7, 6, 19, 43, 0)

    def test_hour_23_after_midnight_rolls_back(self) -> None:
        reference = datetime(2019, 7, 7, 0, 1, 2, tzinfo=UTC)
        assert timestamp_value(b"235959", reference) == datetime(2019, 7, 6, 23, 59, 59, tzinfo=UTC)

    def test_hour_23_before_midnight_keeps_date(self) -> None:
        reference = datetime(2019, 7, 6, 23, 59, 59, tzinfo=UTC)
        assert timestamp_value(b"231500", reference) == datetime(2019, 7, 6, 23, 15, 0, tzinfo=UTC)

    def test_rollback_crosses_month_boundary(self) -> None:
        reference = datetime(2020, 3, 1, 0, 20, 0, tzinfo=UTC)
        assert timestamp_value(b"235000", reference) == datetime(2020, 2, 29, 23, 50, 0, tzinfo=UTC)

    def test_other_hours_never_roll_back(self) -> None:
        reference = datetime(2019, 7, 7, 0, 1, 2, tzinfo=UTC)
        assert timestamp_value(b"220000", reference).date() == reference.date()

    def test_uses_reference_wall_clock_hour(self) -> None:
        # 23:30 at +02:00 is 21:30 UTC; the wall clock says 23, so no rollback.
        reference = datetime(2019, 7, 6, 23, 30, 0, tzinfo=timezone(timedelta(hours=2)))
        assert timestamp_value(b"231000", reference) == datetime(2019, 7, 6, 23, 10, 0, tzinfo=UTC)

    def test_naive_reference(self) -> None:
        result = timestamp_value(b"060015", datetime(2024, 1, 2, 6, 1, 0))
        assert result == datetime(2024, 1, 2, 6, 0, 15, tzinfo=UTC)
        assert result.microsecond == 0

    @pytest.mark.parametrize("digits", [b"12a400", b"250000", b"126100", b"12 400"])
    def test_invalid_digits(self, digits: bytes) -> None:
        with pytest.raises(MalformedFrameError, match="timestamp"):
            timestamp_value(digits, datetime(2019, 7, 6, tzinfo=UTC))

    def test_wrong_width(self) -> None:
        with pytest.raises(MalformedFrameError, match="6 bytes"):
            timestamp_value(b"12000", datetime(2019, 7, 6, tzinfo=UTC))
