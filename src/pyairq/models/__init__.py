"""Data models for pyairq."""

from pyairq.models._base import AirqBaseModel
from pyairq.models.device import DeviceIdentity
from pyairq.models.record import DecodedRecord
from pyairq.models.result import DecodeFailure, DecodeResult, DecodeSuccess, FailureReason

__all__ = [
    "AirqBaseModel",
    "DecodeFailure",
    "DecodeResult",
    "DecodeSuccess",
    "DecodedRecord",
    "DeviceIdentity",
    "FailureReason",
]
