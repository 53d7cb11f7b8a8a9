"""
Tests for the rhythm generator.

The generator must fill the beat budget exactly, never emit a whole-note
rest, and fail loudly rather than overshoot.
"""

import random
from fractions import Fraction

import pytest

from chuk_mcp_dictation.core.rhythm import DurationUnit, RhythmEvent
from chuk_mcp_dictation.dictation import ScriptedRandom, generate_rhythm, rhythm_beats
from chuk_mcp_dictation.exceptions import UnreachableBudgetError


class TestBeatBudget:
    """The generated rhythm always sums to measures x beats."""

    def test_two_measures_sum_to_eight(self) -> None:
        """Two 4/4 bars are exactly 8 beats, for many seeds."""
        for seed in range(200):
            rhythm = generate_rhythm(2, 4, random.Random(seed))
            assert rhythm_beats(rhythm) == 8

    @pytest.mark.parametrize("measures,beats", [(1, 4), (3, 4), (4, 3), (1, 1), (8, 4)])
    def test_other_budgets(self, measures: int, beats: int) -> None:
        """Any positive integer budget is filled exactly."""
        for seed in range(25):
            rhythm = generate_rhythm(measures, beats, random.Random(seed))
            assert rhythm_beats(rhythm) == measures * beats

    def test_events_are_fractions(self, rng: random.Random) -> None:
        """Beat values are exact, never floats."""
        rhythm = generate_rhythm(2, 4, rng)
        assert all(isinstance(e.beats, Fraction) for e in rhythm)

    def test_invalid_inputs(self, rng: random.Random) -> None:
        """Non-positive budgets are rejected."""
        with pytest.raises(ValueError):
            generate_rhythm(0, 4, rng)
        with pytest.raises(ValueError):
            generate_rhythm(2, 0, rng)


class TestRests:
    """Rest placement rules."""

    def test_no_whole_rests(self) -> None:
        """No whole-duration event is ever a rest."""
        for seed in range(200):
            for event in generate_rhythm(2, 4, random.Random(seed)):
                if event.duration is DurationUnit.WHOLE:
                    assert not event.is_rest

    def test_whole_note_ignores_rest_draw(self) -> None:
        """A low rest draw on a whole note still yields a sounding note."""
        # Pick WHOLE twice (index 0 of the fitting list), both with rest draws
        rng = ScriptedRandom(choices=[0, 0], floats=[0.01, 0.01])
        rhythm = generate_rhythm(2, 4, rng)
        assert rhythm == [RhythmEvent(DurationUnit.WHOLE), RhythmEvent(DurationUnit.WHOLE)]

    def test_rest_probability_threshold(self) -> None:
        """Draws below the threshold make rests, others notes."""
        # 1 beat: EIGHTH from [QUARTER, EIGHTH], then EIGHTH from [EIGHTH]
        rng = ScriptedRandom(choices=[1, 0], floats=[0.14, 0.15])
        rhythm = generate_rhythm(1, 1, rng)
        assert rhythm == [
            RhythmEvent(DurationUnit.EIGHTH, is_rest=True),
            RhythmEvent(DurationUnit.EIGHTH, is_rest=False),
        ]

    def test_rests_appear_sometimes(self) -> None:
        """Over many rhythms, some rests are generated."""
        events = [e for seed in range(100) for e in generate_rhythm(2, 4, random.Random(seed))]
        assert any(e.is_rest for e in events)
        assert not all(e.is_rest for e in events)

    def test_rest_probability_zero(self, rng: random.Random) -> None:
        """With probability 0 there are no rests."""
        rhythm = generate_rhythm(4, 4, rng, rest_probability=0.0)
        assert not any(e.is_rest for e in rhythm)


class TestDraws:
    """The generator draws only from durations that fit."""

    def test_candidates_shrink_with_budget(self) -> None:
        """Offered candidate counts follow the remaining budget."""
        # 8 beats: WHOLE (4 left), HALF (2 left), QUARTER (1 left), EIGHTH, EIGHTH
        rng = ScriptedRandom(choices=[0, 1, 1, 1, 0], floats=[0.9] * 5)
        rhythm = generate_rhythm(2, 4, rng)
        assert [e.duration for e in rhythm] == [
            DurationUnit.WHOLE,
            DurationUnit.HALF,
            DurationUnit.QUARTER,
            DurationUnit.EIGHTH,
            DurationUnit.EIGHTH,
        ]
        assert rng.choice_calls == [4, 4, 3, 2, 1]

    def test_deterministic_with_seed(self) -> None:
        """Same seed, same rhythm."""
        a = generate_rhythm(2, 4, random.Random(42))
        b = generate_rhythm(2, 4, random.Random(42))
        assert a == b

    def test_unreachable_budget(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """An empty candidate set raises instead of overshooting."""
        monkeypatch.setattr(DurationUnit, "fitting", classmethod(lambda cls, remaining: []))
        with pytest.raises(UnreachableBudgetError) as exc_info:
            generate_rhythm(1, 4, random.Random(0))
        assert exc_info.value.remaining == 4
        assert exc_info.value.consumed == 0
