"""Tests for AuthSession: cached credential reuse and interactive authorization."""

from __future__ import annotations

import json
from collections.abc import Iterator
from datetime import UTC, datetime, timedelta
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from gmail_cleaner.auth.oauth import OAuthManager
from gmail_cleaner.auth.session import AUTH_CODE_PROMPT, AuthSession
from gmail_cleaner.auth.storage import TokenStorage
from gmail_cleaner.utils.errors import AuthenticationError, ConfigError, TokenError


@pytest.fixture
def token_path(tmp_path: Path) -> Path:
    return tmp_path / "token.json"


@pytest.fixture
def mock_flow() -> Iterator[MagicMock]:
    """Patch google-auth-oauthlib's Flow with a successful exchange."""
    flow = MagicMock()
    flow.authorization_url.return_value = (
        "https://accounts.google.com/o/oauth2/auth?client_id=x",
        "state-token-value",
    )
    flow.credentials.token = "fresh-access-token"
    flow.credentials.refresh_token = "fresh-refresh-token"
    flow.credentials.token_uri = "https://oauth2.googleapis.com/token"
    flow.credentials.client_id = "test-client-id.apps.googleusercontent.com"
    flow.credentials.scopes = ["https://mail.google.com/"]
    flow.credentials.expiry = datetime(2030, 1, 1)

    with patch("gmail_cleaner.auth.oauth.Flow") as flow_cls:
        flow_cls.from_client_config.return_value = flow
        yield flow


class Conversation:
    """Scripted operator: answers prompts and records what was shown."""

    def __init__(self, *answers: str) -> None:
        self.answers = list(answers)
        self.prompts: list[str] = []
        self.shown: list[str] = []

    def prompt(self, text: str) -> str:
        self.prompts.append(text)
        return self.answers.pop(0)

    def echo(self, text: str) -> None:
        self.shown.append(text)


def _session(
    credentials_file: Path,
    token_path: Path,
    conversation: Conversation,
    factory: MagicMock | None = None,
) -> AuthSession:
    return AuthSession(
        credentials_file,
        TokenStorage(token_path),
        prompt=conversation.prompt,
        echo=conversation.echo,
        mailbox_factory=factory or MagicMock(name="mailbox_factory"),
    )


class TestCachedCredential:
    """A usable cached token is reused without asking the operator."""

    def test_valid_token_is_reused(
        self,
        credentials_file: Path,
        token_path: Path,
        mock_token: dict[str, object],
    ) -> None:
        expiry = datetime.now(UTC) + timedelta(hours=1)
        TokenStorage(token_path).save({**mock_token, "expiry": expiry.isoformat()})
        conversation = Conversation()
        factory = MagicMock(name="mailbox_factory")

        session = _session(credentials_file, token_path, conversation, factory)

        mailbox = session.obtain_client()

        assert mailbox is factory.return_value
        creds = factory.call_args.args[0]
        assert creds.token == "mock-access-token"
        assert creds.client_secret == "test-client-secret"
        assert conversation.prompts == []

    def test_expired_token_is_refreshed_and_saved(
        self,
        credentials_file: Path,
        token_path: Path,
        mock_token: dict[str, object],
    ) -> None:
        TokenStorage(token_path).save({**mock_token, "expiry": "2001-01-01T00:00:00"})
        refreshed = {**mock_token, "access_token": "refreshed-access-token"}
        conversation = Conversation()

        with patch.object(
            OAuthManager, "refresh_credentials", return_value=refreshed
        ) as refresh:
            _session(credentials_file, token_path, conversation).obtain_client()

        refresh.assert_called_once()
        assert json.loads(token_path.read_text()) == refreshed
        assert conversation.prompts == []

    def test_refresh_failure_falls_back_to_authorization(
        self,
        credentials_file: Path,
        token_path: Path,
        mock_token: dict[str, object],
        mock_flow: MagicMock,
    ) -> None:
        TokenStorage(token_path).save({**mock_token, "expiry": "2001-01-01T00:00:00"})
        conversation = Conversation("4/new-code")

        with patch.object(
            OAuthManager,
            "refresh_credentials",
            side_effect=AuthenticationError("Failed to refresh token: revoked"),
        ):
            _session(credentials_file, token_path, conversation).obtain_client()

        mock_flow.fetch_token.assert_called_once_with(code="4/new-code")
        saved = json.loads(token_path.read_text())
        assert saved["access_token"] == "fresh-access-token"


class TestInteractiveAuthorization:
    """Cache miss or corrupted cache runs the authorization code exchange."""

    def test_cache_miss_prompts_for_code_and_saves(
        self, credentials_file: Path, token_path: Path, mock_flow: MagicMock
    ) -> None:
        conversation = Conversation("  4/auth-code \n")
        factory = MagicMock(name="mailbox_factory")

        _session(credentials_file, token_path, conversation, factory).obtain_client()

        assert "https://accounts.google.com/o/oauth2/auth?client_id=x" in (
            conversation.shown[0]
        )
        assert conversation.prompts == [AUTH_CODE_PROMPT]
        mock_flow.fetch_token.assert_called_once_with(code="4/auth-code")

        saved = json.loads(token_path.read_text())
        assert saved["refresh_token"] == "fresh-refresh-token"
        assert "client_secret" not in saved
        assert factory.call_args.args[0].token == "fresh-access-token"

    def test_corrupted_cache_is_replaced(
        self,
        credentials_file: Path,
        token_path: Path,
        mock_flow: MagicMock,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        token_path.write_text("{corrupted")
        conversation = Conversation("4/auth-code")

        _session(credentials_file, token_path, conversation).obtain_client()

        assert "Ignoring unusable cached token" in caplog.text
        saved = json.loads(token_path.read_text())
        assert saved["access_token"] == "fresh-access-token"

    def test_empty_code_is_fatal(
        self, credentials_file: Path, token_path: Path, mock_flow: MagicMock
    ) -> None:
        conversation = Conversation("   ")

        with pytest.raises(AuthenticationError, match="authorization code"):
            _session(credentials_file, token_path, conversation).obtain_client()

        mock_flow.fetch_token.assert_not_called()
        assert not token_path.exists()

    def test_read_failure_is_fatal(
        self, credentials_file: Path, token_path: Path, mock_flow: MagicMock
    ) -> None:
        def failing_prompt(text: str) -> str:
            raise EOFError()

        session = AuthSession(
            credentials_file,
            TokenStorage(token_path),
            prompt=failing_prompt,
            echo=lambda _: None,
            mailbox_factory=MagicMock(),
        )

        with pytest.raises(AuthenticationError, match="Unable to read"):
            session.obtain_client()

    def test_exchange_failure_is_fatal(
        self, credentials_file: Path, token_path: Path, mock_flow: MagicMock
    ) -> None:
        mock_flow.fetch_token.side_effect = ValueError("invalid_grant")
        conversation = Conversation("4/used-code")

        with pytest.raises(AuthenticationError, match="invalid_grant"):
            _session(credentials_file, token_path, conversation).obtain_client()

        assert not token_path.exists()

    def test_save_failure_is_fatal(
        self, credentials_file: Path, token_path: Path, mock_flow: MagicMock
    ) -> None:
        conversation = Conversation("4/auth-code")

        with patch.object(
            TokenStorage, "save", side_effect=TokenError("Failed to save token")
        ):
            with pytest.raises(TokenError, match="Failed to save token"):
                _session(credentials_file, token_path, conversation).obtain_client()


class TestSessionConfiguration:
    """The client secret file is required."""

    def test_missing_client_secret_file(self, tmp_path: Path, token_path: Path) -> None:
        conversation = Conversation()

        with pytest.raises(ConfigError):
            session = _session(tmp_path / "missing.json", token_path, conversation)
            session.obtain_client()

        assert conversation.prompts == []
