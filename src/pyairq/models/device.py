"""Registered device identity model."""

from __future__ import annotations

from pydantic import field_validator

from pyairq.models._base import AirqBaseModel


class DeviceIdentity(AirqBaseModel):
    """Device record as supplied by the registry collaborator.

    Parameters
    ----------
    public_key : str
        Ed25519 public key as unpadded standard base64 text.
    encoding_scheme : int
        Scheme identifier selecting the frame decoder. Unknown values
        decode as the default scheme.
    owner : str
        Opaque owner reference (organisation name in the registry).
    validation_flag : bool
        ``False`` once the device has been revoked. Frames from such a
        device are never decoded into a trusted record.
    """

    public_key: str
    encoding_scheme: int = 0
    owner: str = ""
    validation_flag: bool = False

    @field_validator("public_key", mode="before")
    @classmethod
    def _strip_key(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value
