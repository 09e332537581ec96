"""Human-in-the-loop confirmation before messages are mutated."""

from __future__ import annotations

import logging

import click

from gmail_cleaner import console
from gmail_cleaner.console import Echo, Prompt
from gmail_cleaner.schemas.records import MutationMode

logger = logging.getLogger(__name__)

AFFIRMATIVE_ANSWERS = frozenset({"y", "yes"})


class ConfirmationGate:
    """Asks the operator to approve a trash or delete run.

    Only "y" or "yes" (any case) approve. Empty input, any other answer
    and a failed read all decline.

    Args:
        mode: Action that will be applied, shown in the prompt.
        prompt: Reads the operator's answer.
        echo: Shows the summary line.
        assume_yes: Approve without asking.
    """

    def __init__(
        self,
        mode: MutationMode = MutationMode.TRASH,
        prompt: Prompt = console.prompt_line,
        echo: Echo = console.echo,
        assume_yes: bool = False,
    ) -> None:
        self._mode = mode
        self._prompt = prompt
        self._echo = echo
        self._assume_yes = assume_yes

    def confirm(self, count: int) -> bool:
        """Return True if the operator approves mutating ``count`` messages."""
        if count <= 0:
            return False

        self._echo(f"{count} messages will be {self._past_tense}.")
        if self._assume_yes:
            logger.info("Confirmation skipped (--yes)")
            return True

        try:
            answer = self._prompt(
                f"Are you sure you want to {self._mode.value} these {count} "
                "messages ? (yes/No)"
            )
        except (EOFError, click.Abort, OSError) as e:
            logger.debug("Unable to read response: %r", e)
            answer = ""

        if answer.strip().lower() in AFFIRMATIVE_ANSWERS:
            return True

        self._echo("Aborted")
        logger.info("Aborted")
        return False

    @property
    def _past_tense(self) -> str:
        if self._mode is MutationMode.DELETE:
            return "permanently deleted"
        return "moved to Trash"


__all__ = ["ConfirmationGate", "AFFIRMATIVE_ANSWERS"]
