"""
Melody generator - puts scale pitches on a rhythmic skeleton.

Pitches are drawn uniformly from a fixed pool: every scale tone in the
lower octave, plus the scale tones spelled C, D or E one octave up.
Rests pass through untouched, and durations are copied, so the melody
fills exactly the same number of beats as its rhythm.
"""

from __future__ import annotations

import logging

from chuk_mcp_dictation.constants import (
    DEFAULT_MEASURES,
    LOWER_OCTAVE,
    UPPER_OCTAVE,
    UPPER_OCTAVE_LETTERS,
)
from chuk_mcp_dictation.core.events import MelodicEvent, Melody
from chuk_mcp_dictation.core.pitch import Pitch
from chuk_mcp_dictation.core.rhythm import RhythmEvent, TimeSignature
from chuk_mcp_dictation.core.scale import Scale, tones_of
from chuk_mcp_dictation.dictation.randomness import RandomSource
from chuk_mcp_dictation.dictation.rhythm import generate_rhythm

logger = logging.getLogger(__name__)


def available_pitches(scale: Scale) -> list[Pitch]:
    """
    Build the pitch pool for a scale.

    The upper-octave whitelist matches natural letters only: C# or Eb in
    a scale stays in the lower octave.

    Args:
        scale: A supported scale

    Returns:
        Lower-octave tones in scale order, then the whitelisted upper tones
    """
    tones = tones_of(scale)
    pool = [Pitch(tone, LOWER_OCTAVE) for tone in tones]
    pool.extend(
        Pitch(tone, UPPER_OCTAVE)
        for tone in tones
        if tone.is_natural and tone.letter in UPPER_OCTAVE_LETTERS
    )
    return pool


def generate_melody(
    scale: Scale,
    rhythm: list[RhythmEvent],
    rng: RandomSource,
    time_signature: TimeSignature = TimeSignature.COMMON_TIME,
) -> Melody:
    """
    Give every sounding slot of a rhythm a pitch from the scale.

    Args:
        scale: Scale to draw pitches from
        rhythm: Skeleton produced by generate_rhythm
        rng: Source of random draws
        time_signature: Signature the rhythm was built for

    Returns:
        The melody, one event per rhythm event
    """
    pool = available_pitches(scale)
    events = [
        MelodicEvent.rest(slot.duration)
        if slot.is_rest
        else MelodicEvent(slot.duration, rng.choice(pool))
        for slot in rhythm
    ]
    return Melody(tuple(events), time_signature=time_signature, key=scale.name)


def new_melody(
    key: Scale | str,
    rng: RandomSource,
    measures: int = DEFAULT_MEASURES,
    time_signature: TimeSignature = TimeSignature.COMMON_TIME,
) -> Melody:
    """
    Generate a complete exercise melody for a key.

    The key is resolved before anything is drawn, so an unsupported key
    fails without consuming randomness.

    Args:
        key: Scale or key name ('C Major', 'A Minor', ...)
        rng: Source of random draws
        measures: Number of bars (default 2)
        time_signature: Meter, 4/4 by default

    Returns:
        The generated Melody

    Raises:
        UnknownScaleError: If the key is not supported
    """
    scale = Scale.parse(key) if isinstance(key, str) else key
    tones_of(scale)  # Rejects scales outside the supported table

    beats_per_measure = time_signature.bar_beats
    if beats_per_measure.denominator != 1:
        raise ValueError(f"Time signature {time_signature} does not fill whole beats")

    rhythm = generate_rhythm(measures, int(beats_per_measure), rng)
    melody = generate_melody(scale, rhythm, rng, time_signature)
    logger.debug("New melody in %s: %s", scale.name, melody)
    return melody
