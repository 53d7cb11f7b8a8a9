#!/usr/bin/env python3
"""
Example: Play through one dictation exercise without the MCP server.

Generates a melody, writes it as MIDI so you can listen to it, then
enters an answer with one deliberate mistake, grades it, fixes it and
grades again.

Usage:
    python examples/run_dictation.py
    # Creates: examples/output/exercise.mid
"""

import random
from pathlib import Path

from chuk_mcp_dictation.compiler.midi import melody_to_midi
from chuk_mcp_dictation.compiler.notation import score_sheet
from chuk_mcp_dictation.core import SUPPORTED_KEYS, MelodicEvent, Pitch
from chuk_mcp_dictation.dictation import DictationSession


def main() -> None:
    """Run a scripted exercise."""
    output_dir = Path(__file__).parent / "output"
    output_dir.mkdir(exist_ok=True)

    print("Supported keys:", ", ".join(SUPPORTED_KEYS))

    session = DictationSession("G Major", rng=random.Random(2024))
    melody = session.new_exercise()
    print(f"\nTarget in {melody.key}: {melody}")

    path = output_dir / "exercise.mid"
    melody_to_midi(list(melody), tempo_bpm=80).save(str(path))
    print(f"  Listen: {path}")

    # Enter the melody, but get the first sounding note an octave too high
    wrong_index = next(i for i, e in enumerate(melody) if e.pitch is not None)
    for i, event in enumerate(melody):
        if i == wrong_index and event.pitch is not None:
            octave_up = Pitch.from_midi(event.pitch.to_midi() + 12)
            session.add_event(MelodicEvent(event.duration, octave_up))
        else:
            session.add_event(event)

    print("\nFirst try:", session.check())

    session.remove_last()
    print("After undo:", session.check())

    # Start over with the right notes
    while session.remove_last():
        pass
    for event in melody:
        session.add_event(event)
    print("Second try:", session.check())

    sheet = score_sheet(melody, prefer_flats=session.scale.prefer_flats)
    print("\nNotation records:")
    for record in sheet.events:
        print(" ", record.model_dump())


if __name__ == "__main__":
    main()
