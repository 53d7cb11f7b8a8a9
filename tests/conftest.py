"""
Pytest configuration and shared fixtures.
"""

import random
import tempfile
from pathlib import Path

import pytest

from chuk_mcp_dictation.core import MelodicEvent, Melody, Scale


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_midi_path(temp_dir: Path) -> Path:
    """Path for a temporary MIDI file."""
    return temp_dir / "test.mid"


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible generation."""
    return random.Random(1234)


@pytest.fixture
def c_major() -> Scale:
    """The C major scale from the supported table."""
    return Scale.parse("C Major")


@pytest.fixture
def four_quarters() -> Melody:
    """C4 D4 E4 F4, all quarter notes."""
    return Melody(
        tuple(MelodicEvent.note(p, "q") for p in ("C4", "D4", "E4", "F4")),
        key="C Major",
    )
