"""Google OAuth 2.0 for Gmail API access.

The client identity comes from the client secret JSON file downloaded from
the Google Cloud console. Authorization runs out-of-band: the operator
opens the consent URL in any browser and pastes the authorization code
back, so the tool also works on headless hosts.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow

from gmail_cleaner.utils.errors import AuthenticationError, ConfigError

logger = logging.getLogger(__name__)

# Full mailbox access; permanent deletion is not allowed with narrower scopes.
# If modifying these scopes, delete the previously saved token file.
GMAIL_SCOPES = ["https://mail.google.com/"]

GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"
DEFAULT_REDIRECT_URI = "http://localhost"
CLIENT_TYPES = ("installed", "web")


class OAuthManager:
    """Runs the authorization code exchange and builds credentials.

    Attributes:
        _client_config: Parsed client secret file.
        _client_type: "installed" or "web".
        _flow: Flow created by the last create_auth_url() call.

    Example:
        >>> manager = OAuthManager.from_client_secrets_file(Path("credentials.json"))
        >>> url, state = manager.create_auth_url()
        >>> token_data = manager.exchange_code(input(url))
    """

    def __init__(
        self, client_config: dict[str, Any], scopes: list[str] | None = None
    ) -> None:
        """Initialize from a client configuration dictionary.

        Raises:
            ConfigError: If the configuration has no usable client section.
        """
        client_type = next((t for t in CLIENT_TYPES if t in client_config), None)
        if client_type is None:
            raise ConfigError(
                "Client secret file must contain an 'installed' or 'web' section",
                details={"keys": sorted(client_config)},
            )

        section = client_config[client_type]
        if not isinstance(section, dict) or not section.get("client_id"):
            raise ConfigError(
                "Client secret file is missing client_id",
                details={"client_type": client_type},
            )

        self._client_config = client_config
        self._client_type = client_type
        self._scopes = scopes or GMAIL_SCOPES
        self._flow: Flow | None = None

    @classmethod
    def from_client_secrets_file(
        cls, path: Path, scopes: list[str] | None = None
    ) -> OAuthManager:
        """Load the client configuration from a JSON file.

        Raises:
            ConfigError: If the file is unreadable or malformed.
        """
        try:
            client_config = json.loads(Path(path).read_text())
        except OSError as e:
            raise ConfigError(
                f"Unable to read client secret file: {e}",
                details={"path": str(path)},
            ) from e
        except json.JSONDecodeError as e:
            raise ConfigError(
                "Unable to parse client secret file to config",
                details={"path": str(path), "error": str(e)},
            ) from e

        if not isinstance(client_config, dict):
            raise ConfigError(
                "Client secret file does not contain a JSON object",
                details={"path": str(path)},
            )

        return cls(client_config, scopes=scopes)

    @property
    def client_id(self) -> str:
        return str(self._client_config[self._client_type]["client_id"])

    @property
    def client_secret(self) -> str | None:
        return self._client_config[self._client_type].get("client_secret")

    @property
    def token_uri(self) -> str:
        return str(
            self._client_config[self._client_type].get("token_uri", GOOGLE_TOKEN_URI)
        )

    @property
    def redirect_uri(self) -> str:
        uris = self._client_config[self._client_type].get("redirect_uris") or []
        return str(uris[0]) if uris else DEFAULT_REDIRECT_URI

    @property
    def scopes(self) -> list[str]:
        return list(self._scopes)

    def create_auth_url(self) -> tuple[str, str]:
        """Create the consent URL the operator has to open.

        Requests offline access so a refresh token is issued, and forces the
        consent screen so the refresh token is issued again on re-authorization.

        Returns:
            Tuple of (auth_url, state).
        """
        self._flow = Flow.from_client_config(
            self._client_config,
            scopes=self._scopes,
            redirect_uri=self.redirect_uri,
        )
        auth_url, state = self._flow.authorization_url(
            access_type="offline",
            prompt="consent",
        )
        logger.debug("Created auth URL with state: %s", state[:8] + "...")
        return auth_url, state

    def exchange_code(self, code: str) -> dict[str, object]:
        """Exchange an authorization code for tokens.

        Args:
            code: Authorization code pasted by the operator.

        Returns:
            Token data dictionary (access_token, refresh_token, token_uri,
            client_id, scopes and, when known, expiry).

        Raises:
            AuthenticationError: If the exchange fails.
        """
        if self._flow is None:
            self.create_auth_url()
        assert self._flow is not None

        try:
            self._flow.fetch_token(code=code)
        except Exception as e:
            logger.error("Failed to exchange authorization code: %s", e)
            raise AuthenticationError(
                f"Unable to retrieve token from web: {e}",
                details={"error_type": type(e).__name__},
            ) from e

        logger.info("Successfully exchanged authorization code for tokens")
        return credentials_to_token_data(self._flow.credentials, self._scopes)

    def get_credentials(self, token_data: dict[str, Any]) -> Credentials:
        """Build a Credentials object from cached token data.

        The client secret is never cached, it always comes from the client
        secret file. An unparseable expiry is dropped with a warning.
        """
        expiry = None
        if token_data.get("expiry"):
            try:
                expiry = _parse_expiry(str(token_data["expiry"]))
            except ValueError as e:
                logger.warning(
                    "Failed to parse token expiry '%s': %s", token_data["expiry"], e
                )

        return Credentials(  # type: ignore[no-untyped-call]
            token=token_data.get("access_token"),
            refresh_token=token_data.get("refresh_token"),
            token_uri=token_data.get("token_uri", self.token_uri),
            client_id=token_data.get("client_id", self.client_id),
            client_secret=self.client_secret,
            scopes=token_data.get("scopes", self._scopes),
            expiry=expiry,
        )

    def refresh_credentials(self, credentials: Credentials) -> dict[str, object]:
        """Refresh an expired access token.

        Returns:
            Token data for the refreshed credentials.

        Raises:
            AuthenticationError: If there is no refresh token or refresh fails.
        """
        if not credentials.refresh_token:
            raise AuthenticationError(
                "No refresh token available",
                details={"hint": "Re-authorize to obtain a refresh token"},
            )

        try:
            credentials.refresh(Request())
        except Exception as e:
            logger.error("Failed to refresh token: %s", e)
            raise AuthenticationError(
                f"Failed to refresh token: {e}",
                details={"error_type": type(e).__name__},
            ) from e

        logger.info("Successfully refreshed access token")
        return credentials_to_token_data(credentials, self._scopes)


def credentials_to_token_data(
    credentials: Credentials, default_scopes: list[str]
) -> dict[str, object]:
    """Serialize credentials for the token cache, without the client secret."""
    token_data: dict[str, object] = {
        "access_token": credentials.token,
        "refresh_token": credentials.refresh_token,
        "token_uri": credentials.token_uri,
        "client_id": credentials.client_id,
        "scopes": list(credentials.scopes) if credentials.scopes else default_scopes,
    }
    if credentials.expiry:
        token_data["expiry"] = credentials.expiry.isoformat()
    return token_data


def _parse_expiry(value: str) -> datetime:
    # google-auth compares expiry against a naive UTC timestamp
    expiry = datetime.fromisoformat(value)
    if expiry.tzinfo is not None:
        expiry = expiry.astimezone(UTC).replace(tzinfo=None)
    return expiry


__all__ = [
    "GMAIL_SCOPES",
    "GOOGLE_TOKEN_URI",
    "DEFAULT_REDIRECT_URI",
    "OAuthManager",
    "credentials_to_token_data",
]
