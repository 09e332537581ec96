"""Gmail message operations."""

from __future__ import annotations

import logging
from typing import Any

from googleapiclient.discovery import Resource
from googleapiclient.errors import HttpError

from gmail_cleaner.schemas.records import MessageRecord
from gmail_cleaner.utils.errors import GmailAPIError

logger = logging.getLogger(__name__)

USER_ID = "me"


def _status_code(error: Exception) -> int | None:
    if isinstance(error, HttpError):
        return int(error.resp.status)
    return None


def list_messages(
    service: Resource, query: str, page_token: str | None = None
) -> dict[str, Any]:
    """List one page of messages matching query.

    Returns:
        The raw response: "messages" (id/threadId summaries, absent when
        nothing matched) and "nextPageToken" (absent on the last page).
    """
    try:
        kwargs: dict[str, Any] = {"userId": USER_ID, "q": query}
        if page_token:
            kwargs["pageToken"] = page_token
        response: dict[str, Any] = service.users().messages().list(**kwargs).execute()
        logger.debug(
            "Listed %d messages for %r", len(response.get("messages", [])), query
        )
        return response
    except Exception as e:
        logger.error("Failed to list messages: %s", e)
        raise GmailAPIError(
            f"Unable to retrieve messages: {e}",
            status_code=_status_code(e),
            details={"query": query},
        ) from e


def get_message(
    service: Resource, message_id: str, format: str = "full"
) -> dict[str, Any]:
    """Get a specific message by ID."""
    try:
        message: dict[str, Any] = (
            service.users()
            .messages()
            .get(userId=USER_ID, id=message_id, format=format)
            .execute()
        )
        logger.debug("Retrieved message %s", message_id)
        return message
    except Exception as e:
        logger.error("Failed to get message %s: %s", message_id, e)
        raise GmailAPIError(
            f"Unable to retrieve message {message_id}: {e}",
            status_code=_status_code(e),
        ) from e


def trash_message(service: Resource, message_id: str) -> None:
    """Move message to trash."""
    try:
        service.users().messages().trash(userId=USER_ID, id=message_id).execute()
        logger.debug("Trashed message %s", message_id)
    except Exception as e:
        logger.error("Failed to trash message %s: %s", message_id, e)
        raise GmailAPIError(
            f"Unable to trash message {message_id}: {e}",
            status_code=_status_code(e),
        ) from e


def delete_message(service: Resource, message_id: str) -> None:
    """Permanently delete a message."""
    try:
        service.users().messages().delete(userId=USER_ID, id=message_id).execute()
        logger.debug("Permanently deleted message %s", message_id)
    except Exception as e:
        logger.error("Failed to delete message %s: %s", message_id, e)
        raise GmailAPIError(
            f"Unable to delete message {message_id}: {e}",
            status_code=_status_code(e),
        ) from e


def header_value(message: dict[str, Any], name: str) -> str:
    """Return the first header named exactly ``name``, or "" if absent.

    Header names are matched case-sensitively, in the order Gmail returns them.
    """
    payload = message.get("payload") or {}
    for header in payload.get("headers") or []:
        if header.get("name") == name:
            return str(header.get("value", ""))
    return ""


def to_record(message_id: str, message: dict[str, Any]) -> MessageRecord:
    """Build a MessageRecord from a fetched message."""
    return MessageRecord(
        id=message_id,
        subject=header_value(message, "Subject"),
        date=header_value(message, "Date"),
    )


__all__ = [
    "list_messages",
    "get_message",
    "trash_message",
    "delete_message",
    "header_value",
    "to_record",
]
