"""Collects every message matching a list of Gmail queries."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from gmail_cleaner import console
from gmail_cleaner.console import Echo
from gmail_cleaner.gmail.client import MailProvider
from gmail_cleaner.gmail.messages import to_record
from gmail_cleaner.schemas.records import MessageRecord, ResultSet
from gmail_cleaner.utils.errors import GmailAPIError, SearchError

logger = logging.getLogger(__name__)


class SearchEngine:
    """Pages through each query and fetches every listed message.

    Results keep encounter order (query, then page, then Gmail's order) and
    are not deduplicated: a message matched by two queries appears twice.
    Each match is echoed as it is found.
    """

    def __init__(self, provider: MailProvider, echo: Echo = console.echo) -> None:
        self._provider = provider
        self._echo = echo

    def search(self, queries: Iterable[str]) -> ResultSet:
        """Run every query and return the matches.

        Raises:
            SearchError: On the first failed list or get call.
        """
        records: ResultSet = []
        for query in queries:
            logger.info('Searching messages with "%s"', query)
            records.extend(self._search_query(query))

        logger.info("%d messages found with these criteria...", len(records))
        return records

    def _search_query(self, query: str) -> ResultSet:
        records: ResultSet = []
        page_token: str | None = None

        while True:
            try:
                response = self._provider.list_messages(query, page_token)
            except GmailAPIError as e:
                raise SearchError(
                    f"Unable to retrieve messages: {e.message}",
                    details={"query": query, "status_code": e.status_code},
                ) from e

            for summary in response.get("messages") or []:
                records.append(self._fetch(summary["id"]))

            page_token = response.get("nextPageToken")
            if not page_token:
                return records

    def _fetch(self, message_id: str) -> MessageRecord:
        try:
            message = self._provider.get_message(message_id)
        except GmailAPIError as e:
            raise SearchError(
                f"Unable to retrieve message {message_id}: {e.message}",
                details={"message_id": message_id, "status_code": e.status_code},
            ) from e

        record = to_record(message_id, message)
        self._echo(f'==> "{record.subject}" - {record.date}')
        return record


__all__ = ["SearchEngine"]
