"""Pydantic models for messages found by a search."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MutationMode(str, Enum):
    """What happens to confirmed messages.

    Attributes:
        TRASH: Move to Trash, reversible from the Gmail UI.
        DELETE: Permanent deletion, irreversible.
    """

    TRASH = "trash"
    DELETE = "delete"


class MessageRecord(BaseModel):
    """A matched message with the headers shown to the operator.

    Attributes:
        id: Gmail message ID.
        subject: Raw Subject header, empty when absent.
        date: Raw Date header, unparsed, empty when absent.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Gmail message ID")
    subject: str = Field(default="", description="Subject header value")
    date: str = Field(default="", description="Date header value")


ResultSet = list[MessageRecord]


__all__ = ["MutationMode", "MessageRecord", "ResultSet"]
