"""Entry point for ``python -m gmail_cleaner``."""

from gmail_cleaner.cli import main

if __name__ == "__main__":
    main()
