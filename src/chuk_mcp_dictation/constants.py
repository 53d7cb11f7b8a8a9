"""
Constants and enums for the dictation system.

No magic strings - use enums and Literal types for constrained values.
"""

from enum import Enum
from typing import Literal


class Verdict(str, Enum):
    """
    Outcome of comparing a learner's answer with the target melody.

    Values are the literals the UI switches on for feedback styling.
    """

    CORRECT = "correct"
    INCORRECT = "incorrect"
    INCOMPLETE = "incomplete"


class MismatchReason(str, Enum):
    """Why a single answer position failed to match the target."""

    REST_MISMATCH = "rest_mismatch"  # One side is a rest, the other a note
    DURATION_MISMATCH = "duration_mismatch"
    PITCH_MISMATCH = "pitch_mismatch"


# Rhythm generation
DEFAULT_MEASURES = 2
MAX_MEASURES = 8
REST_PROBABILITY = 0.15

# Pitch pool: every scale tone in the lower octave, plus the scale tones
# whose letter is whitelisted in the octave above.
LOWER_OCTAVE = 4
UPPER_OCTAVE = LOWER_OCTAVE + 1
UPPER_OCTAVE_LETTERS: frozenset[str] = frozenset({"C", "D", "E"})

# Playback
DEFAULT_TEMPO = 90
MIN_TEMPO = 40
MAX_TEMPO = 240
MELODY_VELOCITY = 96
MELODY_CHANNEL = 0

# Notation wire format
REST_SUFFIX = "r"
REST_POSITION_KEY = "b/4"  # Staff position used to draw rests
DEFAULT_TIME_SIGNATURE = "4/4"

# Schema versions
SchemaVersion = Literal["notation/v1"]


class ErrorMessages:
    """Standardized error messages."""

    SESSION_NOT_FOUND = "Session '{session}' not found."
    NO_EXERCISE = "No exercise yet. Call new_exercise first."
    INVALID_TEMPO = "Invalid tempo: {tempo}. Must be between 40 and 240 BPM."
    INVALID_MEASURES = "Invalid measure count: {measures}. Must be between 1 and 8."
    ANSWER_LOCKED = "Answer already graded correct; start a new exercise."


class SuccessMessages:
    """Standardized success messages."""

    EXERCISE_CREATED = "New {measures}-measure exercise in {key}."
    MIDI_EXPORTED = "Exported exercise '{session}' to {path}."
