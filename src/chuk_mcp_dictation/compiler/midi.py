"""
MIDI export - hands a melody to the playback collaborator.

This module converts melodic events to MIDI files using mido.
Durations stay beat-relative until here; the tempo turns them into time.
All operations are deterministic: same input -> same output.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from mido import Message, MetaMessage, MidiFile, MidiTrack

from chuk_mcp_dictation.constants import DEFAULT_TEMPO, MELODY_CHANNEL, MELODY_VELOCITY
from chuk_mcp_dictation.core.events import MelodicEvent

logger = logging.getLogger(__name__)

# Standard ticks per beat (quarter note) - industry standard
TICKS_PER_BEAT = 480


@dataclass(frozen=True)
class MidiEvent:
    """
    A single MIDI note event.

    This is the lowest-level representation before writing to MIDI.
    All times are in ticks (absolute from start of track).
    """

    pitch: int  # MIDI note number (0-127)
    start_ticks: int  # Absolute start time in ticks
    duration_ticks: int  # Duration in ticks
    velocity: int  # 0-127
    channel: int = 0  # 0-15

    def __post_init__(self) -> None:
        """Validate MIDI ranges."""
        if not 0 <= self.pitch <= 127:
            raise ValueError(f"Pitch must be 0-127, got {self.pitch}")
        if not 0 <= self.velocity <= 127:
            raise ValueError(f"Velocity must be 0-127, got {self.velocity}")
        if not 0 <= self.channel <= 15:
            raise ValueError(f"Channel must be 0-15, got {self.channel}")
        if self.start_ticks < 0:
            raise ValueError(f"Start ticks must be >= 0, got {self.start_ticks}")
        if self.duration_ticks < 0:
            raise ValueError(f"Duration ticks must be >= 0, got {self.duration_ticks}")


def melody_to_midi_events(
    events: Iterable[MelodicEvent],
    ticks_per_beat: int = TICKS_PER_BEAT,
    velocity: int = MELODY_VELOCITY,
    channel: int = MELODY_CHANNEL,
) -> list[MidiEvent]:
    """
    Lay melodic events end to end on a tick timeline.

    Rests produce no MidiEvent but still advance the clock.

    Args:
        events: Notes and rests in order
        ticks_per_beat: Resolution (default 480)
        velocity: Note velocity (0-127)
        channel: MIDI channel

    Returns:
        One MidiEvent per sounding note
    """
    midi_events: list[MidiEvent] = []
    cursor = 0
    for event in events:
        length = event.duration.to_ticks(ticks_per_beat)
        if event.pitch is not None:
            midi_events.append(
                MidiEvent(
                    pitch=event.pitch.to_midi(),
                    start_ticks=cursor,
                    duration_ticks=length,
                    velocity=velocity,
                    channel=channel,
                )
            )
        cursor += length
    return midi_events


def events_to_midi(
    events: Sequence[MidiEvent],
    tempo_bpm: int = DEFAULT_TEMPO,
    ticks_per_beat: int = TICKS_PER_BEAT,
    end_ticks: int | None = None,
) -> MidiFile:
    """
    Convert a sequence of MidiEvents to a MidiFile.

    Args:
        events: Sequence of MidiEvent objects
        tempo_bpm: Tempo in beats per minute
        ticks_per_beat: Resolution (default 480)
        end_ticks: Place end_of_track here if later than the last note
            (keeps trailing rests audible as silence)

    Returns:
        A mido MidiFile ready to be saved

    This function is deterministic: same events -> same MIDI file.
    """
    mid = MidiFile(ticks_per_beat=ticks_per_beat)
    track = MidiTrack()
    mid.tracks.append(track)

    # Set tempo (microseconds per beat)
    tempo_us = int(60_000_000 / tempo_bpm)
    track.append(MetaMessage("set_tempo", tempo=tempo_us, time=0))

    messages: list[tuple[int, Message]] = []

    for event in events:
        messages.append(
            (
                event.start_ticks,
                Message(
                    "note_on",
                    channel=event.channel,
                    note=event.pitch,
                    velocity=event.velocity,
                    time=0,  # Will be converted to delta
                ),
            )
        )
        messages.append(
            (
                event.start_ticks + event.duration_ticks,
                Message(
                    "note_off",
                    channel=event.channel,
                    note=event.pitch,
                    velocity=0,
                    time=0,  # Will be converted to delta
                ),
            )
        )

    # note_off before note_on at the same tick so repeated pitches re-attack
    messages.sort(key=lambda x: (x[0], x[1].type != "note_off"))

    # Convert to delta times
    current_time = 0
    for abs_time, msg in messages:
        msg.time = abs_time - current_time
        track.append(msg)
        current_time = abs_time

    tail = max(0, (end_ticks or 0) - current_time)
    track.append(MetaMessage("end_of_track", time=tail))

    return mid


def melody_to_midi(
    events: Sequence[MelodicEvent],
    tempo_bpm: int = DEFAULT_TEMPO,
    ticks_per_beat: int = TICKS_PER_BEAT,
) -> MidiFile:
    """
    Render a melody (or an answer) as a single-track MIDI file.

    Args:
        events: Notes and rests in order
        tempo_bpm: Playback tempo
        ticks_per_beat: Resolution (default 480)

    Returns:
        A mido MidiFile whose length covers every event, rests included
    """
    midi_events = melody_to_midi_events(events, ticks_per_beat)
    end_ticks = sum(event.duration.to_ticks(ticks_per_beat) for event in events)
    logger.debug(f"Rendering {len(midi_events)} notes over {end_ticks} ticks at {tempo_bpm} bpm")
    return events_to_midi(midi_events, tempo_bpm, ticks_per_beat, end_ticks=end_ticks)

