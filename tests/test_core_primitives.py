"""
Tests for core music primitives.

Tests cover:
- PitchClass and Pitch (pitch.py)
- Mode, Scale, supported keys, tones_of (scale.py)
- DurationUnit, TimeSignature, RhythmEvent (rhythm.py)
- MelodicEvent, Melody, UserAnswer (events.py)
"""

from fractions import Fraction

import pytest

from chuk_mcp_dictation.core import (
    SUPPORTED_KEYS,
    DurationUnit,
    MelodicEvent,
    Melody,
    Mode,
    Pitch,
    PitchClass,
    RhythmEvent,
    Scale,
    TimeSignature,
    UserAnswer,
    tones_of,
)
from chuk_mcp_dictation.exceptions import UnknownScaleError


class TestPitchClass:
    """Tests for PitchClass enum."""

    def test_pitch_values(self) -> None:
        """Pitch classes have correct values."""
        assert PitchClass.C == 0
        assert PitchClass.E == 4
        assert PitchClass.A == 9
        assert PitchClass.B == 11

    def test_transpose_wraps(self) -> None:
        """Transposing wraps around the octave."""
        assert PitchClass.B.transpose(1) == PitchClass.C
        assert PitchClass.A.transpose(3) == PitchClass.C
        assert PitchClass.C.transpose(-1) == PitchClass.B

    def test_parse(self) -> None:
        """Parse pitch class from sharp, flat and lower-case names."""
        assert PitchClass.parse("C") == PitchClass.C
        assert PitchClass.parse("C#") == PitchClass.Cs
        assert PitchClass.parse("Bb") == PitchClass.As
        assert PitchClass.parse("f#") == PitchClass.Fs

    def test_parse_invalid(self) -> None:
        """Unknown names raise ValueError."""
        with pytest.raises(ValueError):
            PitchClass.parse("H")

    def test_spell(self) -> None:
        """Spell with sharps or flats."""
        assert PitchClass.As.spell() == "A#"
        assert PitchClass.As.spell(prefer_flats=True) == "Bb"

    def test_letter_and_natural(self) -> None:
        """Letter is the natural name of the sharp spelling."""
        assert PitchClass.Cs.letter == "C"
        assert PitchClass.D.letter == "D"
        assert PitchClass.D.is_natural
        assert not PitchClass.Cs.is_natural


class TestPitch:
    """Tests for Pitch."""

    def test_to_midi(self) -> None:
        """Middle C is MIDI 60."""
        assert Pitch(PitchClass.C, 4).to_midi() == 60
        assert Pitch(PitchClass.A, 4).to_midi() == 69
        assert Pitch(PitchClass.C, 5).to_midi() == 72

    def test_from_midi(self) -> None:
        """MIDI numbers convert back to pitches."""
        assert Pitch.from_midi(60) == Pitch(PitchClass.C, 4)
        assert Pitch.from_midi(61) == Pitch(PitchClass.Cs, 4)

    def test_parse(self) -> None:
        """Parse scientific pitch notation."""
        assert Pitch.parse("C4") == Pitch(PitchClass.C, 4)
        assert Pitch.parse("f#5") == Pitch(PitchClass.Fs, 5)
        assert Pitch.parse("Bb3") == Pitch(PitchClass.As, 3)

    def test_parse_invalid(self) -> None:
        """Malformed pitches raise ValueError."""
        for text in ["C", "4", "X4", "C##4", ""]:
            with pytest.raises(ValueError):
                Pitch.parse(text)

    def test_octave_and_class_both_matter(self) -> None:
        """C4 and C5 are different pitches."""
        assert Pitch.parse("C4") != Pitch.parse("C5")
        assert Pitch.parse("C#4") == Pitch.parse("Db4")

    def test_int_pitch_class_normalised(self) -> None:
        """An int pitch class becomes the enum member."""
        assert Pitch(2, 4).pitch_class is PitchClass.D

    def test_invalid_octave(self) -> None:
        """Octaves outside MIDI range are rejected."""
        with pytest.raises(ValueError):
            Pitch(PitchClass.C, 10)
        for text in ["G#9", "B9"]:
            with pytest.raises(ValueError, match="MIDI range"):
                Pitch.parse(text)
        assert Pitch.parse("G9").to_midi() == 127
        assert Pitch.parse("C-1").to_midi() == 0

    def test_str(self) -> None:
        """String form is scientific notation."""
        assert str(Pitch(PitchClass.Fs, 4)) == "F#4"
        assert Pitch(PitchClass.As, 4).spell(prefer_flats=True) == "Bb4"


class TestScale:
    """Tests for Scale and the supported key table."""

    def test_c_major_tones(self) -> None:
        """C major is the white keys from C."""
        assert tones_of("C Major") == [
            PitchClass.C,
            PitchClass.D,
            PitchClass.E,
            PitchClass.F,
            PitchClass.G,
            PitchClass.A,
            PitchClass.B,
        ]

    def test_a_minor_tones(self) -> None:
        """A natural minor is the white keys from A."""
        assert tones_of("A Minor") == [
            PitchClass.A,
            PitchClass.B,
            PitchClass.C,
            PitchClass.D,
            PitchClass.E,
            PitchClass.F,
            PitchClass.G,
        ]

    def test_all_keys_have_seven_distinct_tones(self) -> None:
        """Every supported key yields 7 distinct pitch classes, root first."""
        for name, scale in SUPPORTED_KEYS.items():
            tones = tones_of(name)
            assert len(tones) == 7
            assert len(set(tones)) == 7
            assert tones[0] == scale.root

    def test_supported_key_names(self) -> None:
        """The table holds the eight keys in menu order."""
        assert list(SUPPORTED_KEYS) == [
            "C Major",
            "G Major",
            "F Major",
            "D Major",
            "Bb Major",
            "A Minor",
            "E Minor",
            "D Minor",
        ]

    def test_flat_root(self) -> None:
        """Bb major resolves its flat root."""
        tones = tones_of("Bb Major")
        assert tones[0] == PitchClass.As
        assert PitchClass.Ds in tones  # Eb

    def test_accidentals(self) -> None:
        """Key signatures are spelled in the key's direction."""
        assert SUPPORTED_KEYS["C Major"].accidentals == []
        assert SUPPORTED_KEYS["G Major"].accidentals == ["F#"]
        assert SUPPORTED_KEYS["D Major"].accidentals == ["F#", "C#"]
        assert SUPPORTED_KEYS["Bb Major"].accidentals == ["Bb", "Eb"]
        assert SUPPORTED_KEYS["D Minor"].accidentals == ["Bb"]

    def test_parse_variants(self) -> None:
        """Key names are case-insensitive and accept underscores."""
        assert Scale.parse("c major") == SUPPORTED_KEYS["C Major"]
        assert Scale.parse("A_minor") == SUPPORTED_KEYS["A Minor"]
        assert Scale.parse("e natural minor") == SUPPORTED_KEYS["E Minor"]

    def test_unknown_key(self) -> None:
        """Keys outside the table raise UnknownScaleError."""
        for name in ["F# Major", "C Dorian", "Major", "", "H Major"]:
            with pytest.raises(UnknownScaleError):
                tones_of(name)

    def test_unknown_scale_object(self) -> None:
        """Scale objects outside the table are rejected too."""
        with pytest.raises(UnknownScaleError):
            tones_of(Scale(PitchClass.Fs, Mode.MAJOR))

    def test_enharmonic_key_name_rejected(self) -> None:
        """Only the table spelling names a key: A# Major is not Bb Major."""
        for name in ["A# Major", "Gb Major", "C# Major"]:
            with pytest.raises(UnknownScaleError):
                Scale.parse(name)
        assert Scale.parse("Bb Major") == SUPPORTED_KEYS["Bb Major"]

    def test_unknown_key_is_value_error(self) -> None:
        """UnknownScaleError is also a ValueError."""
        with pytest.raises(ValueError):
            Scale.parse("B Minor")

    def test_name(self) -> None:
        """Scale names use the key's spelling."""
        assert Scale.parse("bb major").name == "Bb Major"
        assert str(Scale.parse("a minor")) == "A Minor"


class TestDurationUnit:
    """Tests for DurationUnit."""

    def test_beats(self) -> None:
        """Beat values are exact fractions."""
        assert DurationUnit.WHOLE.beats == 4
        assert DurationUnit.HALF.beats == 2
        assert DurationUnit.QUARTER.beats == 1
        assert DurationUnit.EIGHTH.beats == Fraction(1, 2)

    def test_codes(self) -> None:
        """Each unit has a symbolic code."""
        assert [u.code for u in DurationUnit] == ["w", "h", "q", "8"]

    def test_from_code(self) -> None:
        """Look up by code or name."""
        assert DurationUnit.from_code("q") is DurationUnit.QUARTER
        assert DurationUnit.from_code("8") is DurationUnit.EIGHTH
        assert DurationUnit.from_code("half") is DurationUnit.HALF
        with pytest.raises(ValueError):
            DurationUnit.from_code("16")

    def test_fitting(self) -> None:
        """Only units within the remaining budget are offered."""
        assert DurationUnit.fitting(Fraction(8)) == list(DurationUnit)
        assert DurationUnit.fitting(Fraction(3, 2)) == [DurationUnit.QUARTER, DurationUnit.EIGHTH]
        assert DurationUnit.fitting(Fraction(1, 2)) == [DurationUnit.EIGHTH]
        assert DurationUnit.fitting(Fraction(0)) == []

    def test_to_ticks(self) -> None:
        """Convert to MIDI ticks."""
        assert DurationUnit.QUARTER.to_ticks(480) == 480
        assert DurationUnit.EIGHTH.to_ticks(480) == 240
        assert DurationUnit.WHOLE.to_ticks(480) == 1920


class TestTimeSignature:
    """Tests for TimeSignature."""

    def test_common_time(self) -> None:
        """4/4 has four quarter-note beats per bar."""
        ts = TimeSignature.COMMON_TIME
        assert ts.bar_beats == 4
        assert ts.total_beats(2) == 8
        assert str(ts) == "4/4"

    def test_other_signatures(self) -> None:
        """Bar length is counted in quarter-note beats."""
        assert TimeSignature(4) == TimeSignature.COMMON_TIME
        assert str(TimeSignature(3)) == "3/4"
        assert TimeSignature(6, DurationUnit.EIGHTH).bar_beats == 3
        assert str(TimeSignature(6, DurationUnit.EIGHTH)) == "6/8"

    def test_invalid(self) -> None:
        """Invalid signatures raise."""
        with pytest.raises(ValueError):
            TimeSignature(0)


class TestRhythmEvent:
    """Tests for RhythmEvent."""

    def test_rest_flag(self) -> None:
        """Rests and notes keep their duration."""
        assert RhythmEvent(DurationUnit.HALF, True).beats == 2
        assert str(RhythmEvent(DurationUnit.HALF, True)) == "hr"
        assert str(RhythmEvent(DurationUnit.QUARTER)) == "q"

    def test_whole_rest_rejected(self) -> None:
        """A whole-note rest cannot be constructed."""
        with pytest.raises(ValueError):
            RhythmEvent(DurationUnit.WHOLE, True)


class TestMelodicEvents:
    """Tests for MelodicEvent, Melody and UserAnswer."""

    def test_rest_has_no_pitch(self) -> None:
        """is_rest is exactly 'pitch is absent'."""
        rest = MelodicEvent.rest("q")
        note = MelodicEvent.note("C4", "q")
        assert rest.is_rest and rest.pitch is None
        assert not note.is_rest and note.pitch == Pitch(PitchClass.C, 4)

    def test_melody_beats(self, four_quarters: Melody) -> None:
        """Melody sums its durations."""
        assert len(four_quarters) == 4
        assert four_quarters.total_beats == 4
        assert four_quarters.measures == 1
        assert [str(p) for p in four_quarters.pitches] == ["C4", "D4", "E4", "F4"]

    def test_melody_is_immutable(self, four_quarters: Melody) -> None:
        """Melody events are a tuple."""
        assert isinstance(four_quarters.events, tuple)
        with pytest.raises(AttributeError):
            four_quarters.events = ()  # type: ignore[misc]

    def test_melody_from_list(self) -> None:
        """A list of events is frozen into a tuple."""
        melody = Melody([MelodicEvent.rest("h")])  # type: ignore[arg-type]
        assert melody.events == (MelodicEvent.rest("h"),)

    def test_user_answer_edit(self) -> None:
        """Answers grow and shrink at the end."""
        answer = UserAnswer()
        answer.append(MelodicEvent.note("C4", "q"))
        answer.append(MelodicEvent.rest("8"))
        assert len(answer) == 2
        assert answer.total_beats == Fraction(3, 2)

        removed = answer.remove_last()
        assert removed == MelodicEvent.rest("8")
        assert len(answer) == 1

        answer.clear()
        assert answer.remove_last() is None
