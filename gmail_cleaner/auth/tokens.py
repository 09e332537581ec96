"""Token encryption for the credential cache.

Encryption is opt-in: when TOKEN_ENCRYPTION_KEY holds a 64-character hex
string the cached credential is serialized as JSON and sealed with
AES-256-GCM, otherwise it is stored as plain JSON. The envelope written to
disk is ``{"iv": <hex>, "ciphertext": <hex>}``; a fresh 96-bit IV is drawn
for every save.
"""

from __future__ import annotations

import json
import logging
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from gmail_cleaner.utils.errors import TokenError

logger = logging.getLogger(__name__)

ENCRYPTION_KEY_ENV = "TOKEN_ENCRYPTION_KEY"
KEY_SIZE_BYTES = 32
IV_SIZE_BYTES = 12


def key_from_hex(hex_key: str) -> bytes:
    """Parse a TOKEN_ENCRYPTION_KEY value into a 32-byte key.

    Surrounding whitespace is ignored.

    Raises:
        TokenError: If the value is not 64 hexadecimal characters.
    """
    hex_key = hex_key.strip()
    if len(hex_key) != KEY_SIZE_BYTES * 2:
        raise TokenError(
            f"Invalid {ENCRYPTION_KEY_ENV} format: expected "
            f"{KEY_SIZE_BYTES * 2} hex characters, got {len(hex_key)}",
        )

    try:
        return bytes.fromhex(hex_key)
    except ValueError as e:
        raise TokenError(
            f"Invalid {ENCRYPTION_KEY_ENV} format: not hexadecimal",
            details={"error": str(e)},
        ) from e


def get_encryption_key() -> bytes | None:
    """Get the cache encryption key from the environment.

    Returns:
        The 32-byte key, or None when TOKEN_ENCRYPTION_KEY is not set.

    Raises:
        TokenError: If TOKEN_ENCRYPTION_KEY is set but malformed.
    """
    hex_key = os.getenv(ENCRYPTION_KEY_ENV)
    if not hex_key:
        return None

    try:
        return key_from_hex(hex_key)
    except TokenError as e:
        logger.error("%s", e.message)
        raise


def is_encrypted(payload: dict[str, object]) -> bool:
    """Check whether a decoded cache file holds an encrypted token."""
    return set(payload) == {"iv", "ciphertext"}


def encrypt_token(token_data: dict[str, object], key: bytes) -> dict[str, str]:
    """Encrypt token data for storage.

    Args:
        token_data: Dictionary containing OAuth token fields.
        key: 32-byte encryption key.

    Returns:
        A dictionary with hex-encoded "iv" and "ciphertext" (the GCM tag is
        appended to the ciphertext).

    Raises:
        TokenError: If the key has the wrong size or encryption fails.
    """
    try:
        iv = os.urandom(IV_SIZE_BYTES)
        plaintext = json.dumps(token_data).encode("utf-8")
        ciphertext = AESGCM(key).encrypt(iv, plaintext, None)
    except (TypeError, ValueError) as e:
        logger.error("Failed to encrypt token: %s", e)
        raise TokenError(
            "Failed to encrypt token data",
            details={"error_type": type(e).__name__, "error_message": str(e)},
        ) from e

    return {"iv": iv.hex(), "ciphertext": ciphertext.hex()}


def decrypt_token(encrypted: dict[str, object], key: bytes) -> dict[str, object]:
    """Decrypt token data produced by encrypt_token.

    Raises:
        TokenError: If the envelope is malformed, the key is wrong, the
            ciphertext was tampered with, or the plaintext is not a JSON
            object.
    """
    try:
        iv = bytes.fromhex(str(encrypted["iv"]))
        ciphertext = bytes.fromhex(str(encrypted["ciphertext"]))
    except KeyError as e:
        raise TokenError(
            "Invalid encrypted token format - missing required field",
            details={"missing_field": str(e)},
        ) from e
    except ValueError as e:
        raise TokenError(
            "Invalid encrypted token format - invalid hex encoding",
            details={"error_message": str(e)},
        ) from e

    try:
        plaintext = AESGCM(key).decrypt(iv, ciphertext, None)
    except (InvalidTag, ValueError) as e:
        logger.error("Failed to decrypt token: %s", type(e).__name__)
        raise TokenError(
            "Failed to decrypt token - invalid key or corrupted ciphertext",
            details={"error_type": type(e).__name__},
        ) from e

    try:
        token_data = json.loads(plaintext.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise TokenError(
            "Decrypted data is not valid JSON",
            details={"error_message": str(e)},
        ) from e

    if not isinstance(token_data, dict):
        raise TokenError("Decrypted token is not a JSON object")

    logger.debug("Token decrypted successfully")
    return token_data


__all__ = [
    "ENCRYPTION_KEY_ENV",
    "key_from_hex",
    "get_encryption_key",
    "is_encrypted",
    "encrypt_token",
    "decrypt_token",
]
