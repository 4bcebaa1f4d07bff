"""Decoded measurement record model."""

from __future__ import annotations

from datetime import UTC, datetime

from pyairq.models._base import AirqBaseModel

_ZERO_TIME = datetime.min.replace(tzinfo=UTC)


class DecodedRecord(AirqBaseModel):
    """One authenticated air-quality measurement.

    Only built after the frame's signature verified. Serialises with
    camelCase keys (``deviceId``, ``pm10``, ``pm25``...) for the ledger.

    Parameters
    ----------
    device_id : str
        Device label, e.g. ``"Device1"``.
    pm10, pm25 : float
        Particulate matter concentrations in µg/m³.
    humidity : float
        Relative humidity in percent.
    temperature : float
        Temperature in °C.
    timestamp : datetime
        Measurement time (UTC).
    latitude, longitude : str
        Formatted as ``DDD°MM'SSSSS"H`` with the sensor's digits verbatim.
    """

    device_id: str = ""
    pm10: float = 0.0
    pm25: float = 0.0
    humidity: float = 0.0
    temperature: float = 0.0
    timestamp: datetime = _ZERO_TIME
    latitude: str = ""
    longitude: str = ""

    @classmethod
    def zero(cls) -> DecodedRecord:
        """Return the all-defaults record used in the failure sentinel pair."""
        return cls()

    @property
    def is_zero(self) -> bool:
        return self == DecodedRecord.zero()
