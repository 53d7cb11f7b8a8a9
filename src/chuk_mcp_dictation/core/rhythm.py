"""
Rhythm primitives - DurationUnit, TimeSignature, RhythmEvent.

Time primitives for representing rhythmic values.
Uses Fraction for exact subdivision representation, so beat sums never
drift the way float sums would.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from typing import ClassVar


class DurationUnit(str, Enum):
    """
    The closed set of note lengths used in dictation exercises.

    Values are the symbolic codes of the notation wire format.
    A quarter note in 4/4 time is 1 beat.
    """

    WHOLE = "w"
    HALF = "h"
    QUARTER = "q"
    EIGHTH = "8"

    @property
    def code(self) -> str:
        """Symbolic duration code ('w', 'h', 'q', '8')."""
        return self.value

    @property
    def beats(self) -> Fraction:
        """Length in beats, as an exact fraction."""
        return _DURATION_BEATS[self]

    def to_ticks(self, ticks_per_beat: int) -> int:
        """
        Convert to MIDI ticks.

        Args:
            ticks_per_beat: MIDI resolution (typically 480)

        Returns:
            Number of ticks
        """
        return int(self.beats * ticks_per_beat)

    @classmethod
    def from_code(cls, code: str) -> DurationUnit:
        """Look up a unit by its code or name ('q', 'quarter', 'QUARTER')."""
        code = code.strip()
        for member in cls:
            if code == member.value or code.upper() == member.name:
                return member
        raise ValueError(f"Unknown duration: {code}")

    @classmethod
    def fitting(cls, remaining: Fraction) -> list[DurationUnit]:
        """All units no longer than the remaining beats, longest first."""
        return [unit for unit in cls if unit.beats <= remaining]

    def __str__(self) -> str:
        return self.name.lower()


_DURATION_BEATS: dict[DurationUnit, Fraction] = {
    DurationUnit.WHOLE: Fraction(4),
    DurationUnit.HALF: Fraction(2),
    DurationUnit.QUARTER: Fraction(1),
    DurationUnit.EIGHTH: Fraction(1, 2),
}


@dataclass(frozen=True)
class TimeSignature:
    """
    A time signature defining beats per bar and beat unit.

    Exercises are generated in 4/4; the signature travels with the melody
    so the score renderer can draw it.

    Examples:
        TimeSignature(4, DurationUnit.QUARTER) = 4/4
        TimeSignature(2, DurationUnit.HALF) = 2/2
    """

    beats_per_bar: int
    beat_unit: DurationUnit = DurationUnit.QUARTER

    COMMON_TIME: ClassVar[TimeSignature]  # 4/4

    def __post_init__(self) -> None:
        if self.beats_per_bar <= 0:
            raise ValueError(f"Beats per bar must be positive, got {self.beats_per_bar}")

    @property
    def bar_beats(self) -> Fraction:
        """Length of one bar in quarter-note beats."""
        return self.beat_unit.beats * self.beats_per_bar

    def total_beats(self, bars: int) -> Fraction:
        """Length of a number of bars in quarter-note beats."""
        return self.bar_beats * bars

    def __str__(self) -> str:
        denominator_map = {
            DurationUnit.WHOLE: 1,
            DurationUnit.HALF: 2,
            DurationUnit.QUARTER: 4,
            DurationUnit.EIGHTH: 8,
        }
        return f"{self.beats_per_bar}/{denominator_map[self.beat_unit]}"

    def __repr__(self) -> str:
        return f"TimeSignature({self.beats_per_bar}, {self.beat_unit!r})"


TimeSignature.COMMON_TIME = TimeSignature(4, DurationUnit.QUARTER)


@dataclass(frozen=True)
class RhythmEvent:
    """
    One slot of a rhythmic skeleton: a duration, sounding or silent.

    Whole-bar rests are never generated; constructing one is an error.
    """

    duration: DurationUnit
    is_rest: bool = False

    def __post_init__(self) -> None:
        if self.is_rest and self.duration is DurationUnit.WHOLE:
            raise ValueError("A whole-note event cannot be a rest")

    @property
    def beats(self) -> Fraction:
        """Length in beats."""
        return self.duration.beats

    def __str__(self) -> str:
        return f"{self.duration.code}{'r' if self.is_rest else ''}"
