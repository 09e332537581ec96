"""Console I/O seams.

Components that talk to the operator take a ``prompt`` and an ``echo``
callable so tests can script the conversation.
"""

from __future__ import annotations

from collections.abc import Callable

import click

Prompt = Callable[[str], str]
Echo = Callable[[str], None]


def prompt_line(text: str) -> str:
    """Read one line from the terminal; empty input is allowed."""
    return str(click.prompt(text, default="", show_default=False, prompt_suffix=" "))


def echo(text: str) -> None:
    click.echo(text)


__all__ = ["Prompt", "Echo", "prompt_line", "echo"]
