"""PIN hashing and PIN-derived keys for protecting remote configuration."""

from __future__ import annotations

import base64
import hashlib
import hmac
import secrets
from typing import Dict, Optional, Tuple

KEY_DERIVATION_ITERATIONS = 480_000
KEY_LENGTH = 32
DEFAULT_SALT_LENGTH = 16


def _b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _b64decode(text: str) -> bytes:
    """Strict standard base64 decoding; raises ValueError on malformed input."""
    return base64.b64decode(text, validate=True)


def _salted_digest(pin: str, salt: bytes) -> str:
    return hashlib.sha256(salt + pin.strip().encode("utf-8")).hexdigest()


def generate_salt(length: int = DEFAULT_SALT_LENGTH) -> bytes:
    """Cryptographically secure random bytes."""
    return secrets.token_bytes(length)


def hash_pin(pin: str, salt: Optional[bytes] = None) -> Tuple[str, str]:
    """Salted SHA-256 of the trimmed PIN.

    Returns ``(hex_hash, base64_salt)``; a fresh 16-byte salt is used when
    none is given.
    """
    if salt is None:
        salt = generate_salt()
    return _salted_digest(pin, salt), _b64encode(salt)


def verify_pin_hash(pin: str, stored_hash: str, salt_b64: str) -> bool:
    """Check ``pin`` against a stored hash in constant time."""
    try:
        salt = _b64decode(salt_b64)
    except ValueError:
        return False
    computed = _salted_digest(pin, salt)
    return hmac.compare_digest(computed.encode("utf-8"), stored_hash.encode("utf-8"))


def derive_key_from_pin(pin: str, salt_b64: str) -> bytes:
    """Derive a 32-byte key from the trimmed PIN with PBKDF2-HMAC-SHA256.

    If ``salt_b64`` is not valid base64 its raw UTF-8 bytes are used as salt.
    """
    try:
        salt = _b64decode(salt_b64)
    except ValueError:
        salt = salt_b64.encode("utf-8")
    return hashlib.pbkdf2_hmac(
        "sha256",
        pin.strip().encode("utf-8"),
        salt,
        KEY_DERIVATION_ITERATIONS,
        KEY_LENGTH,
    )


def generate_remote_config_secrets(pin: str) -> Dict[str, str]:
    """Hash, PIN salt and encryption salt to publish in a remote config."""
    pin_hash, pin_salt = hash_pin(pin)
    encryption_salt = _b64encode(generate_salt())
    return {
        "pin_hash": pin_hash,
        "pin_salt": pin_salt,
        "encryption_salt": encryption_salt,
        "_instructions": (
            "Use these values in your remote config. To encrypt fields, "
            "use derive_key_from_pin then encrypt_field"
        ),
    }