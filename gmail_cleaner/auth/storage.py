"""File-based credential cache.

The cache is a single JSON file (``token.json`` in the working directory by
default) holding the OAuth token fields. When an encryption key is
configured the file holds an AES-256-GCM envelope instead, see
:mod:`gmail_cleaner.auth.tokens`. File permissions are restricted to the
owner.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from gmail_cleaner.auth.tokens import (
    decrypt_token,
    encrypt_token,
    get_encryption_key,
    is_encrypted,
)
from gmail_cleaner.utils.errors import TokenError

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_FILE = Path("token.json")


class TokenStorage:
    """Stores one cached credential at an explicit path.

    Attributes:
        _path: Location of the token file.
        _key: Optional 32-byte encryption key.

    Example:
        >>> storage = TokenStorage(Path("token.json"))
        >>> storage.save({"access_token": "ya29..."})
        >>> storage.load()["access_token"]
        'ya29...'
    """

    def __init__(
        self, path: Path = DEFAULT_TOKEN_FILE, key: bytes | None = None
    ) -> None:
        """Initialize token storage.

        Args:
            path: Token file location.
            key: Encryption key. Taken from TOKEN_ENCRYPTION_KEY when omitted;
                the cache is stored unencrypted if neither is available.
        """
        self._path = Path(path)
        self._key = key if key is not None else get_encryption_key()

    @property
    def path(self) -> Path:
        """Location of the token file."""
        return self._path

    @property
    def encrypted(self) -> bool:
        """Whether tokens are encrypted on save."""
        return self._key is not None

    def save(self, token_data: dict[str, object]) -> None:
        """Write the credential, replacing any previous one.

        Raises:
            TokenError: If encryption or file writing fails.
        """
        logger.info("Saving credential file to: %s", self._path)

        try:
            payload: dict[str, object] = (
                dict(encrypt_token(token_data, self._key))
                if self._key is not None
                else token_data
            )
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(payload, indent=2))
            self._path.chmod(0o600)

        except TokenError:
            raise
        except PermissionError as e:
            logger.error("Permission denied writing token file: %s", e)
            raise TokenError(
                "Permission denied writing token file",
                details={"path": str(self._path), "error": str(e)},
            ) from e
        except Exception as e:
            logger.error("Failed to save token to %s: %s", self._path, e)
            raise TokenError(
                f"Failed to save token: {e}",
                details={"path": str(self._path), "error_type": type(e).__name__},
            ) from e

    def load(self) -> dict[str, object] | None:
        """Read the cached credential.

        Returns:
            The token data dictionary, or None if no token file exists.

        Raises:
            TokenError: If the file cannot be read or decoded.
        """
        if not self._path.exists():
            logger.debug("No token found at %s", self._path)
            return None

        try:
            payload = json.loads(self._path.read_text())
        except json.JSONDecodeError as e:
            logger.error("Invalid JSON in token file %s: %s", self._path, e)
            raise TokenError(
                "Token file contains invalid JSON",
                details={"path": str(self._path), "error": str(e)},
            ) from e
        except OSError as e:
            logger.error("Failed to read token file %s: %s", self._path, e)
            raise TokenError(
                f"Failed to read token file: {e}",
                details={"path": str(self._path), "error_type": type(e).__name__},
            ) from e

        if not isinstance(payload, dict):
            raise TokenError(
                "Token file does not contain a JSON object",
                details={"path": str(self._path)},
            )

        if is_encrypted(payload):
            if self._key is None:
                raise TokenError(
                    "Token file is encrypted but no encryption key is configured",
                    details={"hint": "Set TOKEN_ENCRYPTION_KEY"},
                )
            payload = decrypt_token(payload, self._key)

        logger.debug("Loaded token from %s", self._path)
        return payload


__all__ = [
    "DEFAULT_TOKEN_FILE",
    "TokenStorage",
]
