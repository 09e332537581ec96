"""Pytest configuration and fixtures for gmail-cleaner tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from gmail_cleaner.utils.errors import GmailAPIError


class FakeMailbox:
    """In-memory MailProvider that records every call.

    Pages are registered per query; page N>0 of query Q is requested with
    the token "Q#N", which is what the previous page hands out.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, ...]] = []
        self._pages: dict[tuple[str, str | None], dict[str, Any]] = {}
        self._messages: dict[str, dict[str, Any]] = {}
        self.failing: set[tuple[str, str]] = set()

    def add_query(self, query: str, *pages: list[str]) -> None:
        for index, ids in enumerate(pages):
            token = None if index == 0 else f"{query}#{index}"
            response: dict[str, Any] = {
                "messages": [{"id": msg_id, "threadId": msg_id} for msg_id in ids],
                "resultSizeEstimate": len(ids),
            }
            if index + 1 < len(pages):
                response["nextPageToken"] = f"{query}#{index + 1}"
            self._pages[(query, token)] = response

    def add_message(
        self,
        msg_id: str,
        subject: str | None = None,
        date: str | None = None,
    ) -> None:
        headers = [{"name": "From", "value": "sender@example.com"}]
        if date is not None:
            headers.append({"name": "Date", "value": date})
        if subject is not None:
            headers.append({"name": "Subject", "value": subject})
        self._messages[msg_id] = {
            "id": msg_id,
            "threadId": msg_id,
            "payload": {"headers": headers},
        }

    def _check(self, operation: str, key: str) -> None:
        if (operation, key) in self.failing:
            raise GmailAPIError(f"{operation} failed for {key}", status_code=500)

    def list_messages(
        self, query: str, page_token: str | None = None
    ) -> dict[str, Any]:
        self.calls.append(("list", query, page_token or ""))
        self._check("list", query)
        return self._pages.get((query, page_token), {"resultSizeEstimate": 0})

    def get_message(self, message_id: str) -> dict[str, Any]:
        self.calls.append(("get", message_id))
        self._check("get", message_id)
        return self._messages.get(message_id, {"id": message_id, "payload": {}})

    def trash_message(self, message_id: str) -> None:
        self.calls.append(("trash", message_id))
        self._check("trash", message_id)

    def delete_message(self, message_id: str) -> None:
        self.calls.append(("delete", message_id))
        self._check("delete", message_id)

    def calls_of(self, operation: str) -> list[tuple[str, ...]]:
        return [call for call in self.calls if call[0] == operation]


@pytest.fixture(autouse=True)
def no_encryption_key(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's TOKEN_ENCRYPTION_KEY out of the tests."""
    monkeypatch.delenv("TOKEN_ENCRYPTION_KEY", raising=False)


@pytest.fixture
def mailbox() -> FakeMailbox:
    """Fixture providing an empty fake mailbox."""
    return FakeMailbox()


@pytest.fixture
def client_config() -> dict[str, Any]:
    """Fixture providing an installed-app client secret."""
    return {
        "installed": {
            "client_id": "test-client-id.apps.googleusercontent.com",
            "client_secret": "test-client-secret",
            "auth_uri": "https://accounts.google.com/o/oauth2/auth",
            "token_uri": "https://oauth2.googleapis.com/token",
            "redirect_uris": ["http://localhost"],
        }
    }


@pytest.fixture
def credentials_file(tmp_path: Path, client_config: dict[str, Any]) -> Path:
    """Fixture writing the client secret to a temporary credentials.json."""
    path = tmp_path / "credentials.json"
    path.write_text(json.dumps(client_config))
    return path


@pytest.fixture
def mock_token() -> dict[str, object]:
    """Fixture providing cached OAuth token data."""
    return {
        "access_token": "mock-access-token",
        "refresh_token": "mock-refresh-token",
        "token_uri": "https://oauth2.googleapis.com/token",
        "client_id": "test-client-id.apps.googleusercontent.com",
        "scopes": ["https://mail.google.com/"],
    }


@pytest.fixture
def sample_email() -> dict[str, Any]:
    """Fixture providing a full message as returned by messages.get."""
    return {
        "id": "18abc123def",
        "threadId": "18abc123def",
        "labelIds": ["INBOX", "UNREAD"],
        "snippet": "This is a test email snippet...",
        "payload": {
            "headers": [
                {"name": "From", "value": "sender@example.com"},
                {"name": "To", "value": "recipient@example.com"},
                {"name": "Subject", "value": "Test Email Subject"},
                {"name": "Date", "value": "Mon, 20 Jan 2026 10:00:00 -0500"},
            ],
            "mimeType": "text/plain",
            "body": {
                "data": "VGhpcyBpcyB0aGUgZW1haWwgYm9keSBjb250ZW50Lg==",
            },
        },
    }
