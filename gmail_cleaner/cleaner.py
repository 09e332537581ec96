"""A complete cleanup run: authorize, search, confirm, mutate."""

from __future__ import annotations

import logging

from gmail_cleaner import console
from gmail_cleaner.auth.session import AuthSession
from gmail_cleaner.auth.storage import TokenStorage
from gmail_cleaner.console import Echo, Prompt
from gmail_cleaner.gmail.mutations import MutationExecutor
from gmail_cleaner.gmail.search import SearchEngine
from gmail_cleaner.hitl.confirmation import ConfirmationGate
from gmail_cleaner.schemas.config import CleanerConfig

logger = logging.getLogger(__name__)


def run_cleanup(
    config: CleanerConfig,
    session: AuthSession | None = None,
    *,
    prompt: Prompt = console.prompt_line,
    echo: Echo = console.echo,
) -> int:
    """Run one cleanup.

    Args:
        config: Queries, mode and file locations.
        session: Session to authorize with; built from config when omitted.
        prompt: Reads operator input (authorization code, confirmation).
        echo: Writes progress and prompts for the operator.

    Returns:
        Number of messages trashed or deleted; 0 when nothing matched or the
        operator declined.

    Raises:
        GmailCleanerError: On any configuration, auth, search or mutation
            failure.
    """
    if session is None:
        session = AuthSession(
            config.credentials_file,
            TokenStorage(config.token_file),
            prompt=prompt,
            echo=echo,
        )

    mailbox = session.obtain_client()
    records = SearchEngine(mailbox, echo=echo).search(config.queries)

    gate = ConfirmationGate(
        config.mode, prompt=prompt, echo=echo, assume_yes=config.assume_yes
    )
    if not gate.confirm(len(records)):
        return 0

    return MutationExecutor(mailbox).apply(records, config.mode)


__all__ = ["run_cleanup"]
