"""Human-in-the-Loop (HITL) confirmation for destructive actions.

Trashing or deleting messages only happens after the operator answers
"yes" to a prompt showing how many messages are affected.
"""

from gmail_cleaner.hitl.confirmation import AFFIRMATIVE_ANSWERS, ConfirmationGate

__all__ = [
    "ConfirmationGate",
    "AFFIRMATIVE_ANSWERS",
]
