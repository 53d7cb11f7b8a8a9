"""
Session Manager - handles dictation session lifecycle.

Sessions live in memory only; melodies are never persisted between runs.
Methods are async so the MCP tools can await them uniformly.
"""

from __future__ import annotations

import itertools

from chuk_mcp_dictation.config import DictationSettings
from chuk_mcp_dictation.dictation.randomness import make_rng
from chuk_mcp_dictation.dictation.session import DictationSession


class SessionMetadata:
    """Lightweight metadata for listing sessions."""

    def __init__(
        self,
        session_id: str,
        key: str,
        measures: int,
        has_exercise: bool,
        answer_length: int,
        verdict: str | None,
    ):
        self.session_id = session_id
        self.key = key
        self.measures = measures
        self.has_exercise = has_exercise
        self.answer_length = answer_length
        self.verdict = verdict

    def __repr__(self) -> str:
        return f"SessionMetadata({self.session_id!r}, {self.key}, {self.measures} bars)"


class SessionManager:
    """
    Manages dictation sessions by id.

    When settings carry a seed, each session gets its own source seeded
    from it (seed, seed + 1, ...), so a run is reproducible.
    """

    def __init__(self, settings: DictationSettings | None = None):
        """
        Initialize the manager.

        Args:
            settings: Defaults for new sessions
        """
        self.settings = settings or DictationSettings()
        self._sessions: dict[str, DictationSession] = {}
        self._seeds = itertools.count(self.settings.seed) if self.settings.seed is not None else None

    async def create(
        self,
        session_id: str,
        key: str | None = None,
        measures: int | None = None,
    ) -> DictationSession:
        """
        Create (or replace) a session.

        Args:
            session_id: Session identifier
            key: Default key (falls back to settings)
            measures: Default length (falls back to settings)

        Returns:
            The new session

        Raises:
            UnknownScaleError: If the key is not supported
        """
        seed = next(self._seeds) if self._seeds is not None else None
        session = DictationSession(
            key=key or self.settings.default_key,
            measures=measures or self.settings.measures,
            rng=make_rng(seed),
        )
        self._sessions[session_id] = session
        return session

    async def get(self, session_id: str) -> DictationSession | None:
        """Get a session by id, or None if it does not exist."""
        return self._sessions.get(session_id)

    async def get_or_create(self, session_id: str) -> DictationSession:
        """Get a session, creating it with default settings if needed."""
        session = await self.get(session_id)
        if session is None:
            session = await self.create(session_id)
        return session

    async def delete(self, session_id: str) -> bool:
        """
        Drop a session.

        Returns:
            True if the session existed
        """
        return self._sessions.pop(session_id, None) is not None

    async def list_sessions(self) -> list[SessionMetadata]:
        """List all sessions in creation order."""
        return [
            SessionMetadata(
                session_id=session_id,
                key=session.scale.name,
                measures=session.measures,
                has_exercise=session.melody is not None,
                answer_length=len(session.answer),
                verdict=session.verdict.value if session.verdict else None,
            )
            for session_id, session in self._sessions.items()
        ]
