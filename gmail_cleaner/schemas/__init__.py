"""Pydantic schemas for gmail-cleaner."""

from gmail_cleaner.schemas.config import CleanerConfig
from gmail_cleaner.schemas.records import MessageRecord, MutationMode, ResultSet

__all__ = [
    "CleanerConfig",
    "MessageRecord",
    "MutationMode",
    "ResultSet",
]
