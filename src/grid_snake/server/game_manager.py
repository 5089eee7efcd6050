"""In-memory session registry and lifecycle management."""

from __future__ import annotations

import asyncio
import logging

from grid_snake.config import GameConfig
from grid_snake.engine import GameEngine
from grid_snake.server.models import SessionSummary
from grid_snake.session import GameSession

logger = logging.getLogger(__name__)

_MAX_SESSIONS = 100


class GameManager:
    """Central registry owning every live :class:`GameSession`."""

    def __init__(
        self,
        base_config: GameConfig | None = None,
        max_sessions: int = _MAX_SESSIONS,
    ) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1.")
        self.base_config = base_config if base_config is not None else GameConfig()
        self._sessions: dict[str, GameSession] = {}
        self._max_sessions = max_sessions

    def create_session(
        self,
        tick_period_ms: int | None = None,
        seed: int | None = None,
    ) -> GameSession:
        """Create a new not-started session and return it."""
        if len(self._sessions) >= self._max_sessions:
            raise ValueError("Session limit reached. Try again later.")

        overrides = self.base_config.to_dict()
        if tick_period_ms is not None:
            overrides["tick_period_ms"] = tick_period_ms
        if seed is not None:
            overrides["seed"] = seed
        config = GameConfig.from_dict(overrides)

        session = GameSession(GameEngine(config))
        self._sessions[session.session_id] = session
        logger.info(
            "Session %s created (tick=%dms).",
            session.session_id, config.tick_period_ms,
        )
        return session

    def get_session(self, session_id: str) -> GameSession | None:
        return self._sessions.get(session_id)

    def require_session(self, session_id: str) -> GameSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        return session

    def list_sessions(self) -> list[SessionSummary]:
        return [summarize(s) for s in self._sessions.values()]

    async def close_session(self, session_id: str) -> None:
        """Stop and forget a session."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        await session.close()
        logger.info("Session %s closed.", session_id)

    async def cleanup(self) -> None:
        """Cancel all running tick loops."""
        sessions = list(self._sessions.values())
        self._sessions.clear()
        if sessions:
            await asyncio.gather(
                *(s.close() for s in sessions), return_exceptions=True,
            )
        logger.info("GameManager cleanup complete.")


def summarize(session: GameSession) -> SessionSummary:
    return SessionSummary(
        session_id=session.session_id,
        phase=session.state.phase,
        score=session.state.score,
        tick_period_ms=session.engine.config.tick_period_ms,
    )
