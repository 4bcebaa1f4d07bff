"""Ed25519 signature verification for sensor frames.

Device public keys are stored by the registry as unpadded standard
base64. A key that cannot be decoded is reported as
:class:`KeyDecodeError`, never as an invalid signature.
"""

from __future__ import annotations

import base64
import binascii

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from pyairq._constants import PUBLIC_KEY_LEN, SIGNATURE_LEN
from pyairq.exceptions import KeyDecodeError, SignatureInvalidError


def _b64_raw(text: str) -> bytes:
    stripped = text.strip().rstrip("=")
    padded = stripped + "=" * (-len(stripped) % 4)
    return base64.b64decode(padded, validate=True)


def decode_public_key(text: str) -> Ed25519PublicKey:
    """Decode a device public key from its base64 text.

    Parameters
    ----------
    text : str
        Unpadded (or padded) standard base64 of the 32 raw key bytes.

    Returns
    -------
    Ed25519PublicKey
        Key ready for verification.

    Raises
    ------
    KeyDecodeError
        If *text* is not valid base64 or does not hold a 32-byte key.
    """
    if not text or not text.strip():
        raise KeyDecodeError("public key is empty")
    try:
        raw = _b64_raw(text)
    except (binascii.Error, ValueError) as exc:
        raise KeyDecodeError(f"public key is not valid base64: {exc}") from exc
    if len(raw) != PUBLIC_KEY_LEN:
        raise KeyDecodeError(f"public key must be {PUBLIC_KEY_LEN} bytes (got {len(raw)})")
    try:
        return Ed25519PublicKey.from_public_bytes(raw)
    except ValueError as exc:
        raise KeyDecodeError(f"public key rejected: {exc}") from exc


def verify_or_raise(public_key_text: str, message: bytes, signature: bytes) -> None:
    """Verify *signature* over *message*.

    Raises
    ------
    KeyDecodeError
        If the public key text cannot be decoded.
    SignatureInvalidError
        If the signature is malformed or does not verify.
    """
    key = decode_public_key(public_key_text)
    if len(signature) != SIGNATURE_LEN:
        raise SignatureInvalidError(f"signature must be {SIGNATURE_LEN} bytes (got {len(signature)})")
    try:
        key.verify(bytes(signature), bytes(message))
    except InvalidSignature as exc:
        raise SignatureInvalidError("signature does not match frame message") from exc


def verify_signature(public_key_text: str, message: bytes, signature: bytes) -> bool:
    """Return ``True`` when *signature* authenticates *message*.

    Key decode failures still raise :class:`KeyDecodeError` so they stay
    distinguishable from a signature that simply does not verify.
    """
    try:
        verify_or_raise(public_key_text, message, signature)
    except SignatureInvalidError:
        return False
    return True
