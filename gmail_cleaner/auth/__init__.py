"""Authentication for gmail-cleaner.

This module provides:

- OAuth 2.0 authorization code exchange against Google
- A file-based credential cache, optionally encrypted (AES-256-GCM)
- The session that combines both into an authorized Gmail client

Usage:
    >>> from gmail_cleaner.auth import AuthSession, TokenStorage
    >>>
    >>> storage = TokenStorage(Path("token.json"))
    >>> session = AuthSession(Path("credentials.json"), storage)
    >>> mailbox = session.obtain_client()
"""

from gmail_cleaner.auth.oauth import (
    GMAIL_SCOPES,
    GOOGLE_TOKEN_URI,
    OAuthManager,
)
from gmail_cleaner.auth.session import AuthSession
from gmail_cleaner.auth.storage import DEFAULT_TOKEN_FILE, TokenStorage
from gmail_cleaner.auth.tokens import decrypt_token, encrypt_token, get_encryption_key

__all__ = [
    # OAuth
    "OAuthManager",
    "GMAIL_SCOPES",
    "GOOGLE_TOKEN_URI",
    # Session
    "AuthSession",
    # Token Storage
    "TokenStorage",
    "DEFAULT_TOKEN_FILE",
    # Token Encryption
    "encrypt_token",
    "decrypt_token",
    "get_encryption_key",
]
