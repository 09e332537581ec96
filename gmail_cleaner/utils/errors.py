"""Custom exception hierarchy for gmail-cleaner.

Every failure in a cleanup run is fatal: errors are raised where they
happen, wrapped at the library boundary, and surface at the command line
where they are logged before the process exits with a non-zero status.
"""

from __future__ import annotations


class GmailCleanerError(Exception):
    """Base exception for all gmail-cleaner errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigError(GmailCleanerError):
    """Exception raised for unusable configuration.

    Examples:
        - Client secret file is missing or unreadable
        - Client secret file is not valid JSON or lacks a client section
        - Command-line values fail validation
    """

    pass


class AuthenticationError(GmailCleanerError):
    """Exception raised when an authorized client cannot be obtained.

    Examples:
        - Authorization code could not be read from the operator
        - Authorization code exchange was rejected by the token endpoint
    """

    pass


class TokenError(AuthenticationError):
    """Exception raised for credential cache I/O, decode or encryption errors.

    Examples:
        - Token file is not valid JSON
        - Token file is encrypted but no key is configured
        - Token file could not be written
    """

    pass


class GmailAPIError(GmailCleanerError):
    """Exception raised when a single Gmail API call fails.

    Attributes:
        status_code: HTTP status code from the API response, if known.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, object] | None = None,
    ) -> None:
        """Initialize the Gmail API error exception.

        Args:
            message: Human-readable error description.
            status_code: HTTP status code from the API response.
            details: Optional dictionary containing additional error context.
        """
        super().__init__(message, details)
        self.status_code = status_code


class SearchError(GmailCleanerError):
    """Exception raised when listing or fetching messages fails during search."""

    pass


class MutationError(GmailCleanerError):
    """Exception raised when trashing or deleting a message fails.

    Messages mutated before the failure stay mutated.
    """

    pass


__all__ = [
    "GmailCleanerError",
    "ConfigError",
    "AuthenticationError",
    "TokenError",
    "GmailAPIError",
    "SearchError",
    "MutationError",
]
