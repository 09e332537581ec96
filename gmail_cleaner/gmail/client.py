"""Authenticated Gmail API client."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import Resource, build

from gmail_cleaner.gmail import messages
from gmail_cleaner.utils.errors import GmailAPIError

logger = logging.getLogger(__name__)


class MailProvider(Protocol):
    """The four mailbox operations a cleanup run needs.

    Implementations raise GmailAPIError when a call fails.
    """

    def list_messages(
        self, query: str, page_token: str | None = None
    ) -> dict[str, Any]: ...

    def get_message(self, message_id: str) -> dict[str, Any]: ...

    def trash_message(self, message_id: str) -> None: ...

    def delete_message(self, message_id: str) -> None: ...


class GmailMailbox:
    """MailProvider backed by the Gmail v1 API for the authorized user."""

    def __init__(self, service: Resource) -> None:
        self._service = service

    def list_messages(
        self, query: str, page_token: str | None = None
    ) -> dict[str, Any]:
        return messages.list_messages(self._service, query, page_token)

    def get_message(self, message_id: str) -> dict[str, Any]:
        return messages.get_message(self._service, message_id)

    def trash_message(self, message_id: str) -> None:
        messages.trash_message(self._service, message_id)

    def delete_message(self, message_id: str) -> None:
        messages.delete_message(self._service, message_id)


def build_mailbox(credentials: Credentials) -> GmailMailbox:
    """Build a Gmail client.

    google-auth refreshes an expired access token on the first request.
    """
    try:
        service = build("gmail", "v1", credentials=credentials, cache_discovery=False)
    except Exception as e:
        logger.error("Failed to build Gmail service: %s", e)
        raise GmailAPIError(f"Unable to retrieve Gmail client: {e}") from e
    logger.debug("Created Gmail service")
    return GmailMailbox(service)


__all__ = ["MailProvider", "GmailMailbox", "build_mailbox"]
