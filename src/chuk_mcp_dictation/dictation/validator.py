"""
Answer validator - grades a transcription against the target melody.

Comparison is strictly positional: event i of the answer is compared with
event i of the target, with no alignment or edit-distance tolerance.

- Different lengths: incomplete
- Rest vs note at the same position: incorrect
- Two rests: durations must match
- Two notes: durations and pitches (class and octave) must match
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from chuk_mcp_dictation.constants import MismatchReason, Verdict
from chuk_mcp_dictation.core.events import MelodicEvent


@dataclass(frozen=True)
class Mismatch:
    """A single answer position that does not match the target."""

    index: int
    reason: MismatchReason
    expected: MelodicEvent
    actual: MelodicEvent

    def __str__(self) -> str:
        return f"[{self.index}] {self.reason.value}: expected {self.expected}, got {self.actual}"


@dataclass
class AnswerCheck:
    """Result of checking an answer, with per-position detail."""

    verdict: Verdict
    target_length: int
    answer_length: int
    mismatches: list[Mismatch] = field(default_factory=list)

    @property
    def is_correct(self) -> bool:
        """Return True if the answer matches the target exactly."""
        return self.verdict == Verdict.CORRECT

    @property
    def missing(self) -> int:
        """Events the answer still lacks."""
        return max(0, self.target_length - self.answer_length)

    @property
    def extra(self) -> int:
        """Events the answer has beyond the target."""
        return max(0, self.answer_length - self.target_length)

    def __bool__(self) -> bool:
        """Boolean conversion returns is_correct."""
        return self.is_correct

    def __str__(self) -> str:
        if self.verdict == Verdict.INCOMPLETE:
            return (
                f"incomplete: {self.answer_length} of {self.target_length} events"
                f" ({self.missing} missing, {self.extra} extra)"
            )
        if not self.mismatches:
            return "correct"
        return "incorrect:\n" + "\n".join(str(m) for m in self.mismatches)


def _mismatch_reason(expected: MelodicEvent, actual: MelodicEvent) -> MismatchReason | None:
    """Why two events differ, or None if they match."""
    if expected.is_rest != actual.is_rest:
        return MismatchReason.REST_MISMATCH
    if expected.duration != actual.duration:
        return MismatchReason.DURATION_MISMATCH
    if not expected.is_rest and expected.pitch != actual.pitch:
        return MismatchReason.PITCH_MISMATCH
    return None


def check_answer(
    target: Sequence[MelodicEvent],
    answer: Sequence[MelodicEvent],
) -> AnswerCheck:
    """
    Grade an answer and report every mismatching position.

    Never raises: any answer, including an empty one, gets a verdict.

    Args:
        target: The generated melody
        answer: The learner's events

    Returns:
        AnswerCheck with the verdict and mismatch details
    """
    result = AnswerCheck(
        verdict=Verdict.CORRECT,
        target_length=len(target),
        answer_length=len(answer),
    )

    if len(answer) != len(target):
        result.verdict = Verdict.INCOMPLETE
        return result

    for index, (expected, actual) in enumerate(zip(target, answer, strict=True)):
        reason = _mismatch_reason(expected, actual)
        if reason is not None:
            result.mismatches.append(Mismatch(index, reason, expected, actual))

    if result.mismatches:
        result.verdict = Verdict.INCORRECT
    return result


def compare(target: Sequence[MelodicEvent], answer: Sequence[MelodicEvent]) -> Verdict:
    """
    Classify an answer as correct, incorrect or incomplete.

    Args:
        target: The generated melody
        answer: The learner's events

    Returns:
        The Verdict
    """
    return check_answer(target, answer).verdict
