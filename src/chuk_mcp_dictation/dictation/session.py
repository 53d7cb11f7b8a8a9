"""
Dictation session - one learner working through exercises.

A session owns the current target melody, the answer being entered and
the last verdict. Generating a new exercise replaces the melody and
resets the answer; once an answer is graded correct it is locked until
the next exercise.
"""

from __future__ import annotations

import logging

from chuk_mcp_dictation.constants import DEFAULT_MEASURES, ErrorMessages, Verdict
from chuk_mcp_dictation.core.events import MelodicEvent, Melody, UserAnswer
from chuk_mcp_dictation.core.pitch import Pitch
from chuk_mcp_dictation.core.rhythm import DurationUnit, TimeSignature
from chuk_mcp_dictation.core.scale import Scale
from chuk_mcp_dictation.dictation.melody import new_melody
from chuk_mcp_dictation.dictation.randomness import RandomSource, make_rng
from chuk_mcp_dictation.dictation.validator import AnswerCheck, check_answer
from chuk_mcp_dictation.exceptions import NoExerciseError

logger = logging.getLogger(__name__)


class DictationSession:
    """
    Exercise state for a single learner.

    Args:
        key: Default key for new exercises
        measures: Default exercise length in bars
        rng: Random source; a fresh unseeded one if omitted
    """

    def __init__(
        self,
        key: Scale | str = "C Major",
        measures: int = DEFAULT_MEASURES,
        rng: RandomSource | None = None,
        time_signature: TimeSignature = TimeSignature.COMMON_TIME,
    ):
        self.scale = Scale.parse(key) if isinstance(key, str) else key
        self.measures = measures
        self.time_signature = time_signature
        self.rng = rng if rng is not None else make_rng()

        self.melody: Melody | None = None
        self.answer = UserAnswer()
        self.last_check: AnswerCheck | None = None

    @property
    def verdict(self) -> Verdict | None:
        """Verdict of the last check, None if not checked since the last change."""
        return self.last_check.verdict if self.last_check else None

    @property
    def is_locked(self) -> bool:
        """True once the current answer has been graded correct."""
        return self.verdict == Verdict.CORRECT

    def new_exercise(self, key: Scale | str | None = None, measures: int | None = None) -> Melody:
        """
        Generate a new target melody and reset the answer.

        Args:
            key: Key for this and later exercises (default: current key)
            measures: Length for this and later exercises (default: current)

        Returns:
            The new target melody

        Raises:
            UnknownScaleError: If the key is not supported
        """
        scale = self.scale
        if key is not None:
            scale = Scale.parse(key) if isinstance(key, str) else key
        measures = measures if measures is not None else self.measures

        melody = new_melody(scale, self.rng, measures=measures, time_signature=self.time_signature)

        self.scale = scale
        self.measures = measures
        self.melody = melody
        self.answer.clear()
        self.last_check = None

        logger.info("New exercise in %s: %d events, %d measures", scale.name, len(melody), measures)
        return melody

    def _require_melody(self) -> Melody:
        if self.melody is None:
            raise NoExerciseError(ErrorMessages.NO_EXERCISE)
        return self.melody

    def add_event(self, event: MelodicEvent) -> bool:
        """
        Append an event to the answer.

        Returns:
            False if the answer is locked and nothing was added
        """
        self._require_melody()
        if self.is_locked:
            return False
        self.answer.append(event)
        self.last_check = None
        return True

    def add_note(self, pitch: Pitch | str, duration: DurationUnit | str) -> bool:
        """Append a note to the answer."""
        return self.add_event(MelodicEvent.note(pitch, duration))

    def add_rest(self, duration: DurationUnit | str) -> bool:
        """Append a rest to the answer."""
        return self.add_event(MelodicEvent.rest(duration))

    def remove_last(self) -> bool:
        """
        Undo the last answer event.

        Returns:
            False if the answer is locked or already empty
        """
        self._require_melody()
        if self.is_locked:
            return False
        removed = self.answer.remove_last()
        if removed is None:
            return False
        self.last_check = None
        return True

    def check(self) -> AnswerCheck:
        """
        Grade the current answer against the target.

        Raises:
            NoExerciseError: If no exercise has been generated
        """
        melody = self._require_melody()
        self.last_check = check_answer(melody, self.answer)
        logger.debug("Checked answer: %s", self.last_check.verdict.value)
        return self.last_check
