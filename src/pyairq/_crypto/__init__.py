"""Cryptographic primitives for frame authentication."""

from __future__ import annotations

from pyairq._crypto.ed25519 import decode_public_key, verify_or_raise, verify_signature

__all__ = [
    "decode_public_key",
    "verify_or_raise",
    "verify_signature",
]
