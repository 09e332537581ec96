"""gmail-cleaner: search a Gmail mailbox and trash or delete the matches."""

__version__ = "0.1.0"
