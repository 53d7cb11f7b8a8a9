"""
Randomness sources for the generators.

Generators never touch the global random module. They take anything with
``choice`` and ``random`` methods - ``random.Random`` in production, a
seeded ``random.Random`` or a ScriptedRandom in tests.
"""

from __future__ import annotations

import random
from collections.abc import Iterable, Sequence
from typing import Protocol, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """The two draws the generators need."""

    def choice(self, seq: Sequence[T]) -> T:
        """Pick one element uniformly."""
        ...

    def random(self) -> float:
        """A float in [0.0, 1.0)."""
        ...


class ScriptedRandom:
    """
    A fully deterministic source replaying prepared draws.

    ``choices`` are indices into whatever sequence ``choice`` receives,
    ``floats`` are returned by ``random`` in order. Running out of either
    raises IndexError so a test notices an unexpected extra draw.

    Example:
        rng = ScriptedRandom(choices=[2, 0], floats=[0.9, 0.1])
    """

    def __init__(self, choices: Iterable[int] = (), floats: Iterable[float] = ()) -> None:
        self._choices = list(choices)
        self._floats = list(floats)
        self.choice_calls: list[int] = []  # Size of each sequence offered

    def choice(self, seq: Sequence[T]) -> T:
        if not self._choices:
            raise IndexError("ScriptedRandom ran out of scripted choices")
        self.choice_calls.append(len(seq))
        index = self._choices.pop(0)
        return seq[index % len(seq)]

    def random(self) -> float:
        if not self._floats:
            raise IndexError("ScriptedRandom ran out of scripted floats")
        return self._floats.pop(0)


def make_rng(seed: int | None = None) -> random.Random:
    """Create an independent random source, reproducible when seeded."""
    return random.Random(seed)
