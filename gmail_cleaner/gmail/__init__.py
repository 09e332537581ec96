"""Gmail API operations module."""

from gmail_cleaner.gmail.client import GmailMailbox, MailProvider, build_mailbox
from gmail_cleaner.gmail.messages import (
    delete_message,
    get_message,
    header_value,
    list_messages,
    to_record,
    trash_message,
)
from gmail_cleaner.gmail.mutations import MutationExecutor
from gmail_cleaner.gmail.search import SearchEngine

__all__ = [
    "MailProvider",
    "GmailMailbox",
    "build_mailbox",
    "list_messages",
    "get_message",
    "trash_message",
    "delete_message",
    "header_value",
    "to_record",
    "SearchEngine",
    "MutationExecutor",
]
