"""Shared fixtures: a deterministic signing key and a captured field frame."""

from __future__ import annotations

import base64
from datetime import UTC, datetime

import pytest
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from pyairq._tools.frame_builder import build_detached_frame, public_key_text
from pyairq.models import DeviceIdentity

# Frame, detached signature and registry key captured from a deployed sensor.
CAPTURED_FRAME_B64 = "qgABoAFwhAQ+AVjJqBFIAIQAAtcAOACmAq4AMDYwMDE1MDQ5MDA1OTU2ME4wMDA4MjU1MTY2MEU="
CAPTURED_SIGNATURE_B64 = "3xRcKIUbrdehGRbcZOWfFd01z6n6yge3Zsnl9J/L2plU2HiAhAw2RQdG91nmEYsvN005oyf1wy1PaRH09v4oAQ=="
CAPTURED_PUBLIC_KEY = "pQBakw2oxXklWGruTdMVnbbNsNG+nsojdlusAiaRVLU"

REFERENCE_TIME = datetime(2019, 7, 6, 17, 45, 2, tzinfo=UTC)
FRAME_UUID = bytes([128, 23, 72, 1, 33, 112, 114, 72, 196, 96, 18, 136, 161, 84, 49, 63])


@pytest.fixture
def private_key() -> Ed25519PrivateKey:
    return Ed25519PrivateKey.from_private_bytes(bytes(range(32)))


@pytest.fixture
def device(private_key: Ed25519PrivateKey) -> DeviceIdentity:
    return DeviceIdentity(
        public_key=public_key_text(private_key),
        encoding_scheme=0,
        owner="org1",
        validation_flag=True,
    )


@pytest.fixture
def captured_device() -> DeviceIdentity:
    return DeviceIdentity.model_validate(
        {"publicKey": CAPTURED_PUBLIC_KEY, "encodingScheme": 0, "owner": "org1", "validationFlag": True}
    )


@pytest.fixture
def detached_frame() -> bytes:
    return build_detached_frame(
        1,
        pm10=5.4,
        pm25=4.3,
        humidity=44.4,
        temperature=4.3,
        time_of_day="174300",
        latitude="0490033624N",
        longitude="00082531116E",
        frame_uuid=FRAME_UUID,
    )


@pytest.fixture
def captured_frame() -> bytes:
    return base64.b64decode(CAPTURED_FRAME_B64)


@pytest.fixture
def captured_signature() -> bytes:
    return base64.b64decode(CAPTURED_SIGNATURE_B64)


@pytest.fixture
def reference_time() -> datetime:
    return REFERENCE_TIME
