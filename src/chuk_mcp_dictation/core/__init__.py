"""
Core music primitives.

These are the invariants the dictation engine composes on:
- PitchClass: The 12 chromatic pitch classes (0-11)
- Pitch: A pitch class in an octave (C4, F#5)
- Mode: Major / natural minor offset patterns
- Scale: Root + mode, with the supported key table
- DurationUnit: Whole, half, quarter, eighth as exact beat fractions
- TimeSignature: Beats per bar and beat unit
- RhythmEvent: Duration + rest flag
- MelodicEvent, Melody, UserAnswer: Notes and rests in order
"""

from chuk_mcp_dictation.core.events import MelodicEvent, Melody, UserAnswer, total_beats
from chuk_mcp_dictation.core.pitch import Pitch, PitchClass
from chuk_mcp_dictation.core.rhythm import DurationUnit, RhythmEvent, TimeSignature
from chuk_mcp_dictation.core.scale import SUPPORTED_KEYS, Mode, Scale, tones_of

__all__ = [
    # Pitch
    "PitchClass",
    "Pitch",
    # Scale
    "Mode",
    "Scale",
    "SUPPORTED_KEYS",
    "tones_of",
    # Rhythm
    "DurationUnit",
    "TimeSignature",
    "RhythmEvent",
    # Events
    "MelodicEvent",
    "Melody",
    "UserAnswer",
    "total_beats",
]
