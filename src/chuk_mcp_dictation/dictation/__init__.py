"""
Dictation engine - generation, grading and session state.

This module provides:
- generate_rhythm: Random rhythm that exactly fills N measures
- generate_melody / new_melody: Scale pitches on a rhythm
- compare / check_answer: Positional answer grading
- DictationSession: One learner's exercise lifecycle
- SessionManager: In-memory sessions keyed by id
"""

from chuk_mcp_dictation.dictation.manager import SessionManager, SessionMetadata
from chuk_mcp_dictation.dictation.melody import available_pitches, generate_melody, new_melody
from chuk_mcp_dictation.dictation.randomness import RandomSource, ScriptedRandom, make_rng
from chuk_mcp_dictation.dictation.rhythm import generate_rhythm, rhythm_beats
from chuk_mcp_dictation.dictation.session import DictationSession
from chuk_mcp_dictation.dictation.validator import AnswerCheck, Mismatch, check_answer, compare

__all__ = [
    "AnswerCheck",
    "DictationSession",
    "Mismatch",
    "RandomSource",
    "ScriptedRandom",
    "SessionManager",
    "SessionMetadata",
    "available_pitches",
    "check_answer",
    "compare",
    "generate_melody",
    "generate_rhythm",
    "make_rng",
    "new_melody",
    "rhythm_beats",
]
