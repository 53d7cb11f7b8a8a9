"""
Exception hierarchy for the dictation engine.

Every error raised by the core derives from DictationError so callers
can catch the whole family at the tool boundary.
"""

from __future__ import annotations


class DictationError(Exception):
    """Base class for dictation errors."""


class UnknownScaleError(DictationError, ValueError):
    """The requested key is not in the supported key table."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Unknown or unsupported key: {key!r}")


class UnreachableBudgetError(DictationError, RuntimeError):
    """
    No duration unit fits the remaining beat budget.

    Cannot happen with the built-in duration set and an integer beat
    target; seeing it means the duration table or the target is broken.
    """

    def __init__(self, remaining: object, consumed: object, target: object) -> None:
        self.remaining = remaining
        self.consumed = consumed
        self.target = target
        super().__init__(
            f"No duration fits remaining budget {remaining} "
            f"(consumed {consumed} of {target} beats)"
        )


class NoExerciseError(DictationError):
    """A session action needs an exercise but none has been generated."""


class NotationError(DictationError, ValueError):
    """A notation record could not be decoded."""
