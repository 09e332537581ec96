"""Command-line interface for gmail-cleaner."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
import pydantic
from dotenv import load_dotenv

from gmail_cleaner.cleaner import run_cleanup
from gmail_cleaner.schemas.config import CleanerConfig
from gmail_cleaner.schemas.records import MutationMode
from gmail_cleaner.utils.errors import ConfigError, GmailCleanerError

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def configure_logging(level_name: str = "INFO") -> None:
    """Send logs to stderr, keeping stdout for progress lines."""
    log_level = logging.getLevelNamesMapping().get(level_name.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    # Reduce noise from Google libraries
    logging.getLogger("googleapiclient").setLevel(logging.WARNING)
    logging.getLogger("google.auth").setLevel(logging.WARNING)
    logging.getLogger("google_auth_oauthlib").setLevel(logging.WARNING)


def build_config(
    queries: tuple[str, ...],
    delete: bool,
    credentials_file: Path,
    token_file: Path,
    assume_yes: bool,
) -> CleanerConfig:
    """Validate command-line values into a CleanerConfig.

    Raises:
        ConfigError: If a value is rejected.
    """
    try:
        return CleanerConfig(
            queries=list(queries),
            mode=MutationMode.DELETE if delete else MutationMode.TRASH,
            credentials_file=credentials_file,
            token_file=token_file,
            assume_yes=assume_yes,
        )
    except pydantic.ValidationError as e:
        raise ConfigError(
            "Unable to read configuration",
            details={"errors": [err["msg"] for err in e.errors()]},
        ) from e


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "-s",
    "--search",
    "queries",
    multiple=True,
    required=True,
    help="Search criteria in Gmail query syntax. Repeat for several queries.",
)
@click.option(
    "-d",
    "--delete",
    is_flag=True,
    help="Permanently delete messages instead of moving them to Trash.",
)
@click.option(
    "--credentials-file",
    type=click.Path(path_type=Path, dir_okay=False),
    default=Path("credentials.json"),
    show_default=True,
    help="OAuth client secret file for the Gmail API.",
)
@click.option(
    "--token-file",
    type=click.Path(path_type=Path, dir_okay=False),
    default=Path("token.json"),
    show_default=True,
    help="Where the authorized credential is cached.",
)
@click.option(
    "-y",
    "--yes",
    "assume_yes",
    is_flag=True,
    help="Do not ask for confirmation.",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    envvar="LOG_LEVEL",
    default="INFO",
    show_default=True,
)
def cli(
    queries: tuple[str, ...],
    delete: bool,
    credentials_file: Path,
    token_file: Path,
    assume_yes: bool,
    log_level: str,
) -> None:
    """Search Gmail and trash (or delete) every matching message."""
    configure_logging(log_level)

    try:
        config = build_config(queries, delete, credentials_file, token_file, assume_yes)
        run_cleanup(config)
    except GmailCleanerError as e:
        logger.error("%s", e)
        sys.exit(1)


def main() -> None:
    """Console script entry point; loads .env before options are parsed."""
    load_dotenv()
    cli()


__all__ = ["cli", "main", "configure_logging", "build_config"]
