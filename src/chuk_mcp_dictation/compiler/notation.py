"""
Notation wire format - what the score renderer and the UI exchange.

Each event is a record with staff keys ('c#/4'), a duration code
('w', 'h', 'q', '8', with an 'r' suffix for rests), a pitch spelling
('C#4', absent for rests) and an explicit rest flag.

Spelling is a boundary concern: the core only knows Pitch values.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from chuk_mcp_dictation.constants import (
    DEFAULT_TIME_SIGNATURE,
    REST_POSITION_KEY,
    REST_SUFFIX,
    SchemaVersion,
)
from chuk_mcp_dictation.core.events import MelodicEvent, Melody
from chuk_mcp_dictation.core.pitch import Pitch
from chuk_mcp_dictation.core.rhythm import DurationUnit, TimeSignature
from chuk_mcp_dictation.exceptions import NotationError


class NotationEvent(BaseModel):
    """
    A single note or rest as the renderer consumes it.

    Example:
        {"keys": ["c#/4"], "duration": "q", "pitch": "C#4", "is_rest": false}
        {"keys": ["b/4"], "duration": "hr", "pitch": null, "is_rest": true}
    """

    keys: list[str] = Field(default_factory=list, description="Staff keys, e.g. 'c#/4'")
    duration: str = Field(..., description="Duration code, 'r' suffix for rests")
    pitch: str | None = Field(None, description="Scientific pitch, e.g. 'C#4'")
    is_rest: bool = Field(False, description="True for rests")

    model_config = {"frozen": True}


class ScoreSheet(BaseModel):
    """An ordered event list plus the time signature to draw it in."""

    schema_version: SchemaVersion = Field(
        "notation/v1", alias="schema", description="Schema version"
    )
    time_signature: str = Field(DEFAULT_TIME_SIGNATURE, description="Time signature, e.g. '4/4'")
    key: str | None = Field(None, description="Key name, e.g. 'G Major'")
    events: list[NotationEvent] = Field(default_factory=list, description="Events in order")

    model_config = {"populate_by_name": True}


def pitch_to_key(pitch: Pitch, prefer_flats: bool = False) -> str:
    """Staff key for a pitch: C#4 -> 'c#/4'."""
    return f"{pitch.pitch_class.spell(prefer_flats).lower()}/{pitch.octave}"


def key_to_pitch(key: str) -> Pitch:
    """Parse a staff key: 'c#/4' -> C#4."""
    name, sep, octave = key.partition("/")
    if not sep:
        raise NotationError(f"Invalid staff key: {key!r}. Expected a form like 'c#/4'")
    try:
        return Pitch.parse(f"{name}{octave}")
    except ValueError as e:
        raise NotationError(str(e)) from None


def duration_code(duration: DurationUnit, is_rest: bool) -> str:
    """Wire duration code: 'q' for a quarter note, 'qr' for a quarter rest."""
    return f"{duration.code}{REST_SUFFIX if is_rest else ''}"


def parse_duration_code(code: str) -> tuple[DurationUnit, bool]:
    """
    Split a wire duration code into a unit and a rest flag.

    Returns:
        (duration, is_rest)
    """
    code = code.strip()
    codes = {unit.code: unit for unit in DurationUnit}
    if code in codes:
        return codes[code], False
    base = code.removesuffix(REST_SUFFIX)
    if base != code and base in codes:
        return codes[base], True
    raise NotationError(f"Unknown duration code: {code!r}")


def event_to_notation(event: MelodicEvent, prefer_flats: bool = False) -> NotationEvent:
    """Encode one event."""
    if event.pitch is None:
        return NotationEvent(
            keys=[REST_POSITION_KEY],
            duration=duration_code(event.duration, True),
            pitch=None,
            is_rest=True,
        )
    return NotationEvent(
        keys=[pitch_to_key(event.pitch, prefer_flats)],
        duration=duration_code(event.duration, False),
        pitch=event.pitch.spell(prefer_flats),
        is_rest=False,
    )


def notation_to_event(record: NotationEvent | dict[str, Any]) -> MelodicEvent:
    """
    Decode one record.

    The 'r' suffix and is_rest may both be given and must agree. A note
    takes its pitch from 'pitch' when present, otherwise from the first
    staff key.

    Raises:
        NotationError: If the record is malformed or contradictory
    """
    if isinstance(record, dict):
        try:
            record = NotationEvent.model_validate(record)
        except ValidationError as e:
            raise NotationError(f"Invalid notation record: {e}") from None

    duration, suffix_rest = parse_duration_code(record.duration)
    if suffix_rest and "is_rest" in record.model_fields_set and not record.is_rest:
        raise NotationError(f"Duration {record.duration!r} marks a rest but is_rest is false")
    is_rest = suffix_rest or record.is_rest

    if is_rest:
        if record.pitch is not None:
            raise NotationError(f"Rest cannot carry a pitch: {record.pitch!r}")
        return MelodicEvent.rest(duration)

    if record.pitch is not None:
        try:
            pitch = Pitch.parse(record.pitch)
        except ValueError as e:
            raise NotationError(str(e)) from None
    elif record.keys:
        pitch = key_to_pitch(record.keys[0])
    else:
        raise NotationError("Note has neither a pitch nor a staff key")
    return MelodicEvent(duration, pitch)


def melody_to_notation(
    events: Iterable[MelodicEvent], prefer_flats: bool = False
) -> list[NotationEvent]:
    """Encode an event sequence in order."""
    return [event_to_notation(event, prefer_flats) for event in events]


def notation_to_events(records: Sequence[NotationEvent | dict[str, Any]]) -> list[MelodicEvent]:
    """Decode a record sequence in order."""
    return [notation_to_event(record) for record in records]


def score_sheet(
    events: Iterable[MelodicEvent],
    time_signature: TimeSignature = TimeSignature.COMMON_TIME,
    key: str | None = None,
    prefer_flats: bool = False,
) -> ScoreSheet:
    """
    Build the sheet handed to the score renderer.

    A Melody carries its own time signature and key; pass them explicitly
    for an answer.
    """
    if isinstance(events, Melody):
        time_signature = events.time_signature
        key = key or events.key
    return ScoreSheet(
        time_signature=str(time_signature),
        key=key,
        events=melody_to_notation(events, prefer_flats),
    )
