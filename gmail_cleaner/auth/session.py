"""Authorized session lifecycle.

Reuses the cached credential when possible and otherwise walks the
operator through the authorization code exchange, saving the result for
the next run.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from google.oauth2.credentials import Credentials

from gmail_cleaner import console
from gmail_cleaner.auth.oauth import OAuthManager
from gmail_cleaner.auth.storage import TokenStorage
from gmail_cleaner.console import Echo, Prompt
from gmail_cleaner.gmail.client import GmailMailbox, build_mailbox
from gmail_cleaner.utils.errors import AuthenticationError, TokenError

logger = logging.getLogger(__name__)

AUTH_CODE_PROMPT = "Authorization code:"


class AuthSession:
    """Obtains an authorized Gmail client.

    Args:
        credentials_file: Path of the OAuth client secret JSON file.
        token_storage: Cache for the user's credential.
        prompt: Reads the authorization code from the operator.
        echo: Shows the authorization URL to the operator.
        mailbox_factory: Builds the client from credentials.
    """

    def __init__(
        self,
        credentials_file: Path,
        token_storage: TokenStorage,
        prompt: Prompt = console.prompt_line,
        echo: Echo = console.echo,
        mailbox_factory: Callable[[Credentials], GmailMailbox] = build_mailbox,
    ) -> None:
        self._credentials_file = Path(credentials_file)
        self._token_storage = token_storage
        self._prompt = prompt
        self._echo = echo
        self._mailbox_factory = mailbox_factory

    def obtain_client(self) -> GmailMailbox:
        """Return a Gmail client authorized for the mailbox owner.

        Raises:
            ConfigError: If the client secret file is unusable.
            AuthenticationError: If no credential could be obtained.
        """
        credentials = self.obtain_credentials()
        return self._mailbox_factory(credentials)

    def obtain_credentials(self) -> Credentials:
        oauth = OAuthManager.from_client_secrets_file(self._credentials_file)

        credentials = self._load_cached(oauth)
        if credentials is None:
            credentials = self._authorize(oauth)
        return credentials

    def _load_cached(self, oauth: OAuthManager) -> Credentials | None:
        try:
            token_data = self._token_storage.load()
        except TokenError as e:
            logger.warning("Ignoring unusable cached token: %s", e)
            return None

        if token_data is None:
            return None

        credentials = oauth.get_credentials(token_data)
        if credentials.expired and credentials.refresh_token:
            try:
                refreshed = oauth.refresh_credentials(credentials)
            except AuthenticationError as e:
                logger.warning("Cached token could not be refreshed: %s", e)
                return None
            self._token_storage.save(refreshed)

        return credentials

    def _authorize(self, oauth: OAuthManager) -> Credentials:
        auth_url, _ = oauth.create_auth_url()
        self._echo(
            "Go to the following link in your browser then type the "
            f"authorization code: \n{auth_url}"
        )

        try:
            code = self._prompt(AUTH_CODE_PROMPT).strip()
        except Exception as e:
            raise AuthenticationError(
                f"Unable to read authorization code: {e}",
                details={"error_type": type(e).__name__},
            ) from e

        if not code:
            raise AuthenticationError("Unable to read authorization code: empty input")

        token_data = oauth.exchange_code(code)
        self._token_storage.save(token_data)
        return oauth.get_credentials(token_data)


__all__ = ["AuthSession", "AUTH_CODE_PROMPT"]
