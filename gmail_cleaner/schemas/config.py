"""Run configuration produced by the command line."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from gmail_cleaner.schemas.records import MutationMode


class CleanerConfig(BaseModel):
    """Parameters of one cleanup run.

    Queries use Gmail's search syntax and are passed through unchanged.
    """

    queries: list[str] = Field(
        ...,
        min_length=1,
        description="Gmail search queries (e.g., 'from:user@example.com')",
    )
    mode: MutationMode = Field(
        default=MutationMode.TRASH,
        description="Trash (default) or permanently delete matches",
    )
    credentials_file: Path = Field(
        default=Path("credentials.json"),
        description="OAuth client secret file",
    )
    token_file: Path = Field(
        default=Path("token.json"),
        description="Credential cache file",
    )
    assume_yes: bool = Field(
        default=False,
        description="Skip the confirmation prompt",
    )

    @field_validator("queries")
    @classmethod
    def _queries_not_blank(cls, queries: list[str]) -> list[str]:
        if any(not query.strip() for query in queries):
            raise ValueError("search queries must not be empty")
        return queries


__all__ = ["CleanerConfig"]
