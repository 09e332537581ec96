"""Shared helpers for gmail-cleaner: the exception hierarchy."""

from gmail_cleaner.utils.errors import (
    AuthenticationError,
    ConfigError,
    GmailAPIError,
    GmailCleanerError,
    MutationError,
    SearchError,
    TokenError,
)

__all__ = [
    "GmailCleanerError",
    "ConfigError",
    "AuthenticationError",
    "TokenError",
    "GmailAPIError",
    "SearchError",
    "MutationError",
]
