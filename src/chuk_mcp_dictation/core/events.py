"""
Melodic events - the values a melody and an answer are made of.

A MelodicEvent is a duration plus an optional pitch; a missing pitch
means a rest. Melody is the immutable generated target, UserAnswer the
learner's editable transcription.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from fractions import Fraction

from chuk_mcp_dictation.core.pitch import Pitch
from chuk_mcp_dictation.core.rhythm import DurationUnit, TimeSignature


@dataclass(frozen=True)
class MelodicEvent:
    """
    A single note or rest.

    is_rest is derived from the pitch, so a rest can never carry a pitch
    and a note can never lack one.
    """

    duration: DurationUnit
    pitch: Pitch | None = None

    @property
    def is_rest(self) -> bool:
        """True when the event is silent."""
        return self.pitch is None

    @property
    def beats(self) -> Fraction:
        """Length in beats."""
        return self.duration.beats

    @classmethod
    def note(cls, pitch: Pitch | str, duration: DurationUnit | str) -> MelodicEvent:
        """Create a sounding event, parsing string arguments."""
        if isinstance(pitch, str):
            pitch = Pitch.parse(pitch)
        if isinstance(duration, str):
            duration = DurationUnit.from_code(duration)
        return cls(duration, pitch)

    @classmethod
    def rest(cls, duration: DurationUnit | str) -> MelodicEvent:
        """Create a silent event."""
        if isinstance(duration, str):
            duration = DurationUnit.from_code(duration)
        return cls(duration, None)

    def __str__(self) -> str:
        if self.pitch is None:
            return f"rest/{self.duration}"
        return f"{self.pitch}/{self.duration}"


def total_beats(events: Iterable[MelodicEvent]) -> Fraction:
    """Sum of the beat values of a sequence of events."""
    return sum((event.beats for event in events), Fraction(0))


@dataclass(frozen=True)
class Melody:
    """
    A generated target melody.

    Order is temporal order. Created once per exercise and never mutated.
    """

    events: tuple[MelodicEvent, ...]
    time_signature: TimeSignature = TimeSignature.COMMON_TIME
    key: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "events", tuple(self.events))

    @property
    def total_beats(self) -> Fraction:
        """Sum of all event durations in beats."""
        return total_beats(self.events)

    @property
    def measures(self) -> Fraction:
        """Length in bars of the melody's time signature."""
        return self.total_beats / self.time_signature.bar_beats

    @property
    def pitches(self) -> list[Pitch]:
        """Pitches of the sounding events, in order."""
        return [e.pitch for e in self.events if e.pitch is not None]

    def __getitem__(self, index: int) -> MelodicEvent:
        return self.events[index]

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self) -> Iterator[MelodicEvent]:
        return iter(self.events)

    def __str__(self) -> str:
        return " ".join(str(e) for e in self.events)


@dataclass
class UserAnswer:
    """
    The learner's transcription, built one event at a time.

    No beat budget is enforced while editing; the validator judges
    the finished answer.
    """

    events: list[MelodicEvent] = field(default_factory=list)

    def append(self, event: MelodicEvent) -> None:
        """Add an event at the end."""
        self.events.append(event)

    def remove_last(self) -> MelodicEvent | None:
        """Remove and return the last event, or None if empty."""
        if not self.events:
            return None
        return self.events.pop()

    def clear(self) -> None:
        """Drop every event."""
        self.events.clear()

    @property
    def total_beats(self) -> Fraction:
        """Sum of entered durations in beats."""
        return total_beats(self.events)

    def __getitem__(self, index: int) -> MelodicEvent:
        return self.events[index]

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self) -> Iterator[MelodicEvent]:
        return iter(self.events)
