"""
Boundary adapters - hand the core's events to external collaborators.

- notation: wire records for the score renderer and the answer UI
- midi: MIDI files for the playback collaborator
"""

from chuk_mcp_dictation.compiler.midi import (
    TICKS_PER_BEAT,
    MidiEvent,
    events_to_midi,
    melody_to_midi,
    melody_to_midi_events,
)
from chuk_mcp_dictation.compiler.notation import (
    NotationEvent,
    ScoreSheet,
    melody_to_notation,
    notation_to_event,
    notation_to_events,
    parse_duration_code,
    score_sheet,
)

__all__ = [
    # MIDI
    "TICKS_PER_BEAT",
    "MidiEvent",
    "events_to_midi",
    "melody_to_midi",
    "melody_to_midi_events",
    # Notation
    "NotationEvent",
    "ScoreSheet",
    "melody_to_notation",
    "notation_to_event",
    "notation_to_events",
    "parse_duration_code",
    "score_sheet",
]
