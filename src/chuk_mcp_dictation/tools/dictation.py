"""
Dictation tools - MCP tools for running ear-training exercises.

Tools for choosing a key, generating an exercise, entering an answer
event by event, grading it and exporting the melody for playback.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from chuk_mcp_dictation.compiler.midi import melody_to_midi
from chuk_mcp_dictation.compiler.notation import melody_to_notation, score_sheet
from chuk_mcp_dictation.constants import (
    MAX_MEASURES,
    MAX_TEMPO,
    MIN_TEMPO,
    ErrorMessages,
    SuccessMessages,
)
from chuk_mcp_dictation.core.scale import SUPPORTED_KEYS, Scale
from chuk_mcp_dictation.dictation import DictationSession, SessionManager

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _session_not_found(session: str) -> str:
    return json.dumps(
        {"status": "error", "message": ErrorMessages.SESSION_NOT_FOUND.format(session=session)}
    )


def _answer_state(session: DictationSession) -> dict[str, Any]:
    """Current answer as wire records plus progress counters."""
    target_length = len(session.melody) if session.melody is not None else 0
    return {
        "answer": [
            e.model_dump()
            for e in melody_to_notation(session.answer, session.scale.prefer_flats)
        ],
        "answer_length": len(session.answer),
        "target_length": target_length,
        "answer_beats": float(session.answer.total_beats),
        "locked": session.is_locked,
    }


def register_dictation_tools(
    mcp: ChukMCPServer,
    manager: SessionManager,
    output_dir: Path,
) -> dict[str, Any]:
    """
    Register dictation exercise tools with the MCP server.

    Args:
        mcp: The MCP server instance
        manager: The session manager
        output_dir: Directory for exported MIDI files

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def dictation_list_keys() -> str:
        """
        List the keys available for dictation exercises.

        Returns:
            JSON string with key names, their scale tones and signatures

        Example:
            dictation_list_keys()
        """
        try:
            return json.dumps(
                {
                    "status": "success",
                    "keys": [
                        {
                            "name": name,
                            "tones": [t.spell(scale.prefer_flats) for t in scale.tones],
                            "accidentals": scale.accidentals,
                        }
                        for name, scale in SUPPORTED_KEYS.items()
                    ],
                }
            )
        except Exception as e:
            logger.exception("Failed to list keys")
            return json.dumps({"status": "error", "message": str(e)})

    tools["dictation_list_keys"] = dictation_list_keys

    @mcp.tool  # type: ignore[arg-type]
    async def dictation_new_exercise(
        session: str = "default",
        key: str | None = None,
        measures: int | None = None,
    ) -> str:
        """
        Generate a new melody to transcribe.

        Replaces the session's current exercise and clears its answer.
        The melody itself is not revealed; export it as MIDI to listen.

        Args:
            session: Session id (created on first use)
            key: Key name (e.g., 'C Major', 'A Minor'); default keeps the current key
            measures: Number of 4/4 bars (1-8); default keeps the current length

        Returns:
            JSON string with exercise summary

        Example:
            dictation_new_exercise(session="alice", key="G Major", measures=2)
        """
        try:
            if measures is not None and not 1 <= measures <= MAX_MEASURES:
                return json.dumps(
                    {
                        "status": "error",
                        "message": ErrorMessages.INVALID_MEASURES.format(measures=measures),
                    }
                )

            # A bad key must not create a session or use up a seed
            scale = Scale.parse(key) if key is not None else None

            sess = await manager.get_or_create(session)
            melody = sess.new_exercise(key=scale, measures=measures)

            return json.dumps(
                {
                    "status": "success",
                    "message": SuccessMessages.EXERCISE_CREATED.format(
                        measures=sess.measures, key=sess.scale.name
                    ),
                    "exercise": {
                        "session": session,
                        "key": sess.scale.name,
                        "time_signature": str(melody.time_signature),
                        "measures": sess.measures,
                        "total_beats": float(melody.total_beats),
                        "events": len(melody),
                    },
                }
            )
        except Exception as e:
            logger.exception("Failed to create exercise")
            return json.dumps({"status": "error", "message": str(e)})

    tools["dictation_new_exercise"] = dictation_new_exercise

    @mcp.tool  # type: ignore[arg-type]
    async def dictation_get_exercise(session: str = "default", reveal: bool = False) -> str:
        """
        Get the state of the current exercise.

        Returns the answer entered so far as a score sheet. The target
        melody is only included when reveal is true.

        Args:
            session: Session id
            reveal: Include the target melody

        Returns:
            JSON string with exercise state

        Example:
            dictation_get_exercise(session="alice", reveal=True)
        """
        try:
            sess = await manager.get(session)
            if sess is None:
                return _session_not_found(session)
            if sess.melody is None:
                return json.dumps({"status": "error", "message": ErrorMessages.NO_EXERCISE})

            flats = sess.scale.prefer_flats
            result: dict[str, Any] = {
                "status": "success",
                "key": sess.scale.name,
                "score": score_sheet(
                    sess.answer, sess.melody.time_signature, sess.scale.name, flats
                ).model_dump(by_alias=True),
                "verdict": sess.verdict.value if sess.verdict else None,
                **_answer_state(sess),
            }
            if reveal:
                result["target"] = score_sheet(sess.melody, prefer_flats=flats).model_dump(
                    by_alias=True
                )
            return json.dumps(result)
        except Exception as e:
            logger.exception("Failed to get exercise")
            return json.dumps({"status": "error", "message": str(e)})

    tools["dictation_get_exercise"] = dictation_get_exercise

    @mcp.tool  # type: ignore[arg-type]
    async def dictation_add_note(pitch: str, duration: str, session: str = "default") -> str:
        """
        Append a note to the answer.

        Args:
            pitch: Scientific pitch (e.g., 'C4', 'F#4', 'Bb4')
            duration: Duration code: 'w', 'h', 'q' or '8'
            session: Session id

        Returns:
            JSON string with the updated answer

        Example:
            dictation_add_note(pitch="E4", duration="q", session="alice")
        """
        try:
            sess = await manager.get(session)
            if sess is None:
                return _session_not_found(session)

            added = sess.add_note(pitch, duration)
            if not added:
                return json.dumps({"status": "error", "message": ErrorMessages.ANSWER_LOCKED})

            return json.dumps({"status": "success", **_answer_state(sess)})
        except Exception as e:
            logger.exception("Failed to add note")
            return json.dumps({"status": "error", "message": str(e)})

    tools["dictation_add_note"] = dictation_add_note

    @mcp.tool  # type: ignore[arg-type]
    async def dictation_add_rest(duration: str, session: str = "default") -> str:
        """
        Append a rest to the answer.

        Args:
            duration: Duration code: 'w', 'h', 'q' or '8'
            session: Session id

        Returns:
            JSON string with the updated answer

        Example:
            dictation_add_rest(duration="8", session="alice")
        """
        try:
            sess = await manager.get(session)
            if sess is None:
                return _session_not_found(session)

            if not sess.add_rest(duration):
                return json.dumps({"status": "error", "message": ErrorMessages.ANSWER_LOCKED})

            return json.dumps({"status": "success", **_answer_state(sess)})
        except Exception as e:
            logger.exception("Failed to add rest")
            return json.dumps({"status": "error", "message": str(e)})

    tools["dictation_add_rest"] = dictation_add_rest

    @mcp.tool  # type: ignore[arg-type]
    async def dictation_remove_last_note(session: str = "default") -> str:
        """
        Remove the last note or rest from the answer.

        Args:
            session: Session id

        Returns:
            JSON string with the updated answer

        Example:
            dictation_remove_last_note(session="alice")
        """
        try:
            sess = await manager.get(session)
            if sess is None:
                return _session_not_found(session)

            if sess.is_locked:
                return json.dumps({"status": "error", "message": ErrorMessages.ANSWER_LOCKED})

            removed = sess.remove_last()
            return json.dumps({"status": "success", "removed": removed, **_answer_state(sess)})
        except Exception as e:
            logger.exception("Failed to remove note")
            return json.dumps({"status": "error", "message": str(e)})

    tools["dictation_remove_last_note"] = dictation_remove_last_note

    @mcp.tool  # type: ignore[arg-type]
    async def dictation_check_answer(session: str = "default") -> str:
        """
        Grade the answer against the target melody.

        The verdict is 'correct', 'incorrect' (same length, some position
        differs) or 'incomplete' (different number of events). A correct
        answer is locked until the next exercise.

        Args:
            session: Session id

        Returns:
            JSON string with verdict and mismatching positions

        Example:
            dictation_check_answer(session="alice")
        """
        try:
            sess = await manager.get(session)
            if sess is None:
                return _session_not_found(session)

            check = sess.check()
            return json.dumps(
                {
                    "status": "success",
                    "verdict": check.verdict.value,
                    "target_length": check.target_length,
                    "answer_length": check.answer_length,
                    "missing": check.missing,
                    "extra": check.extra,
                    "mismatches": [
                        {"index": m.index, "reason": m.reason.value} for m in check.mismatches
                    ],
                }
            )
        except Exception as e:
            logger.exception("Failed to check answer")
            return json.dumps({"status": "error", "message": str(e)})

    tools["dictation_check_answer"] = dictation_check_answer

    @mcp.tool  # type: ignore[arg-type]
    async def dictation_export_midi(
        session: str = "default",
        output_name: str | None = None,
        tempo: int | None = None,
        answer: bool = False,
    ) -> str:
        """
        Export the target melody (or the answer) as a MIDI file for playback.

        Args:
            session: Session id
            output_name: Optional output filename (without .mid extension)
            tempo: Tempo in BPM (40-240); defaults to the configured tempo
            answer: Export the learner's answer instead of the target

        Returns:
            JSON string with the file path

        Example:
            dictation_export_midi(session="alice", tempo=80)
        """
        try:
            sess = await manager.get(session)
            if sess is None:
                return _session_not_found(session)
            if sess.melody is None:
                return json.dumps({"status": "error", "message": ErrorMessages.NO_EXERCISE})

            tempo = tempo or manager.settings.tempo
            if not MIN_TEMPO <= tempo <= MAX_TEMPO:
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.INVALID_TEMPO.format(tempo=tempo)}
                )

            events = list(sess.answer) if answer else list(sess.melody)
            midi = melody_to_midi(events, tempo_bpm=tempo)

            suffix = "-answer" if answer else ""
            output_path = output_dir / f"{output_name or session + suffix}.mid"
            output_dir.mkdir(parents=True, exist_ok=True)
            midi.save(str(output_path))

            return json.dumps(
                {
                    "status": "success",
                    "path": str(output_path),
                    "tempo": tempo,
                    "message": SuccessMessages.MIDI_EXPORTED.format(
                        session=session, path=output_path
                    ),
                }
            )
        except Exception as e:
            logger.exception("Failed to export MIDI")
            return json.dumps({"status": "error", "message": str(e)})

    tools["dictation_export_midi"] = dictation_export_midi

    return tools
