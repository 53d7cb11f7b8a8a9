"""
Rhythm generator - fills a beat budget with random durations.

The skeleton always sums to exactly measures x beats_per_measure:
each step only draws from the durations that still fit, and the eighth
note (the smallest unit) fits any positive remainder that is a multiple
of half a beat.
"""

from __future__ import annotations

import logging
from fractions import Fraction

from chuk_mcp_dictation.constants import REST_PROBABILITY
from chuk_mcp_dictation.core.rhythm import DurationUnit, RhythmEvent
from chuk_mcp_dictation.dictation.randomness import RandomSource
from chuk_mcp_dictation.exceptions import UnreachableBudgetError

logger = logging.getLogger(__name__)


def generate_rhythm(
    measures: int,
    beats_per_measure: int,
    rng: RandomSource,
    rest_probability: float = REST_PROBABILITY,
) -> list[RhythmEvent]:
    """
    Generate a rhythmic skeleton that exactly fills the given measures.

    Each step draws a duration uniformly from those that fit the remaining
    budget, then an independent draw decides whether it is a rest. Whole
    notes are never rests.

    Args:
        measures: Number of bars to fill
        beats_per_measure: Beats in one bar
        rng: Source of random draws
        rest_probability: Chance that a non-whole event is a rest

    Returns:
        Rhythm events in temporal order

    Raises:
        ValueError: If measures or beats_per_measure is not positive
        UnreachableBudgetError: If no duration fits a positive remainder
    """
    if measures <= 0:
        raise ValueError(f"Measures must be positive, got {measures}")
    if beats_per_measure <= 0:
        raise ValueError(f"Beats per measure must be positive, got {beats_per_measure}")

    target = Fraction(measures * beats_per_measure)
    consumed = Fraction(0)
    rhythm: list[RhythmEvent] = []

    while consumed < target:
        remaining = target - consumed
        candidates = DurationUnit.fitting(remaining)
        if not candidates:
            raise UnreachableBudgetError(remaining, consumed, target)

        duration = rng.choice(candidates)
        # One float draw per event, whole notes included
        is_rest = rng.random() < rest_probability and duration is not DurationUnit.WHOLE

        rhythm.append(RhythmEvent(duration, is_rest))
        consumed += duration.beats

    logger.debug(
        "Generated rhythm: %s (%d events, %s beats)",
        " ".join(str(event) for event in rhythm),
        len(rhythm),
        consumed,
    )
    return rhythm


def rhythm_beats(rhythm: list[RhythmEvent]) -> Fraction:
    """Total beats of a rhythm."""
    return sum((event.beats for event in rhythm), Fraction(0))
