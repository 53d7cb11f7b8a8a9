"""
Pitch primitives - PitchClass and Pitch.

PitchClass represents the 12 chromatic pitches (octave-independent).
Pitch pins a pitch class to an octave, which is what a dictation
melody is made of.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum

# Display name mappings (module level to avoid IntEnum member issues)
_SHARP_NAMES: list[str] = [
    "C",
    "C#",
    "D",
    "D#",
    "E",
    "F",
    "F#",
    "G",
    "G#",
    "A",
    "A#",
    "B",
]
_FLAT_NAMES: list[str] = [
    "C",
    "Db",
    "D",
    "Eb",
    "E",
    "F",
    "Gb",
    "G",
    "Ab",
    "A",
    "Bb",
    "B",
]

_PITCH_RE = re.compile(r"^\s*([A-Ga-g])([#b]?)(-?\d+)\s*$")


class PitchClass(IntEnum):
    """
    The 12 chromatic pitch classes (0-11).

    Octave-independent - C4 and C5 are both PitchClass.C.
    Enharmonic equivalents share the same value (C# == Db == 1).

    Spelling is a display concern, handled at serialization.
    Internally, we use sharp names (Cs, Ds, etc.).
    """

    C = 0
    Cs = 1  # C# / Db
    D = 2
    Ds = 3  # D# / Eb
    E = 4
    F = 5
    Fs = 6  # F# / Gb
    G = 7
    Gs = 8  # G# / Ab
    A = 9
    As = 10  # A# / Bb
    B = 11

    def transpose(self, semitones: int) -> PitchClass:
        """Transpose by a number of semitones (positive or negative)."""
        return PitchClass((self.value + semitones) % 12)

    def to_midi(self, octave: int = 4) -> int:
        """Convert to MIDI note number. C4 = 60."""
        return self.value + (octave + 1) * 12

    def spell(self, prefer_flats: bool = False) -> str:
        """Get human-readable name."""
        names = _FLAT_NAMES if prefer_flats else _SHARP_NAMES
        return names[self.value]

    @property
    def letter(self) -> str:
        """Natural letter of the sharp spelling ('C' for both C and C#)."""
        return _SHARP_NAMES[self.value][0]

    @property
    def is_natural(self) -> bool:
        """True for the seven white-key pitch classes."""
        return len(_SHARP_NAMES[self.value]) == 1

    @classmethod
    def from_midi(cls, midi_note: int) -> PitchClass:
        """Extract pitch class from MIDI note number."""
        return cls(midi_note % 12)

    @classmethod
    def parse(cls, name: str) -> PitchClass:
        """Parse a pitch class from a string like 'C', 'C#', 'Db'."""
        name = name.strip()
        if name[:1].islower():
            name = name[:1].upper() + name[1:]

        # Try sharp names first
        if name in _SHARP_NAMES:
            return cls(_SHARP_NAMES.index(name))

        # Try flat names
        if name in _FLAT_NAMES:
            return cls(_FLAT_NAMES.index(name))

        # Try enum names (C, Cs, D, Ds, etc.)
        name_upper = name.upper()
        for member in cls:
            if member.name.upper() == name_upper:
                return member

        raise ValueError(f"Unknown pitch class: {name}")


@dataclass(frozen=True)
class Pitch:
    """
    A pitch class in a specific octave.

    Examples:
        Pitch(PitchClass.C, 4) = middle C
        Pitch.parse("F#5")
    """

    pitch_class: PitchClass
    octave: int

    def __post_init__(self) -> None:
        # Allow plain ints (e.g. PitchClass values) and normalise to the enum
        object.__setattr__(self, "pitch_class", PitchClass(self.pitch_class))
        if not -1 <= self.octave <= 9:
            raise ValueError(f"Octave must be -1 to 9, got {self.octave}")
        if not 0 <= self.to_midi() <= 127:
            raise ValueError(f"Pitch {self.spell()} is outside the MIDI range 0-127")

    def to_midi(self) -> int:
        """MIDI note number (C4 = 60)."""
        return self.pitch_class.to_midi(self.octave)

    def spell(self, prefer_flats: bool = False) -> str:
        """Scientific pitch notation, e.g. 'C#4' or 'Db4'."""
        return f"{self.pitch_class.spell(prefer_flats)}{self.octave}"

    @classmethod
    def from_midi(cls, midi_note: int) -> Pitch:
        """Create from a MIDI note number."""
        return cls(PitchClass.from_midi(midi_note), midi_note // 12 - 1)

    @classmethod
    def parse(cls, text: str) -> Pitch:
        """
        Parse scientific pitch notation.

        Accepts 'C4', 'c#4', 'Bb3'. The accidental is a single '#' or 'b'.
        """
        match = _PITCH_RE.match(text)
        if match is None:
            raise ValueError(f"Invalid pitch: {text!r}. Expected a form like 'C4' or 'F#5'")
        letter, accidental, octave = match.groups()
        return cls(PitchClass.parse(letter.upper() + accidental), int(octave))

    def __str__(self) -> str:
        return self.spell()

    def __repr__(self) -> str:
        return f"Pitch({self.pitch_class.spell()!r}, {self.octave})"
