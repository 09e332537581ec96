"""Applies the trash or delete action to confirmed messages."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from gmail_cleaner.gmail.client import MailProvider
from gmail_cleaner.schemas.records import MessageRecord, MutationMode
from gmail_cleaner.utils.errors import GmailAPIError, MutationError

logger = logging.getLogger(__name__)


class MutationExecutor:
    """Trashes or permanently deletes messages, one call per record."""

    def __init__(self, provider: MailProvider) -> None:
        self._provider = provider

    def apply(self, records: Sequence[MessageRecord], mode: MutationMode) -> int:
        """Mutate every record in order with the same mode.

        Stops at the first failure; messages already handled stay trashed
        or deleted. The error details count the records completed before the
        failure and those after it that were never attempted.

        Returns:
            Number of messages mutated.

        Raises:
            MutationError: If a trash or delete call fails.
        """
        done = 0
        for record in records:
            try:
                if mode is MutationMode.DELETE:
                    logger.info('Deleting "%s"', record.subject)
                    self._provider.delete_message(record.id)
                else:
                    logger.info('Trashing "%s"', record.subject)
                    self._provider.trash_message(record.id)
            except GmailAPIError as e:
                raise MutationError(
                    f"Unable to {mode.value} message: {e.message}",
                    details={
                        "message_id": record.id,
                        "completed": done,
                        "remaining": len(records) - done - 1,
                    },
                ) from e
            done += 1

        action = "Deleted" if mode is MutationMode.DELETE else "Trashed"
        logger.info("%s %d messages", action, done)
        return done


__all__ = ["MutationExecutor"]
