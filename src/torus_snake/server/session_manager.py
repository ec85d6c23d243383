"""In-memory session registry and state fan-out to stream subscribers."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from torus_snake.config import GameSettings
from torus_snake.engine import GameEngine
from torus_snake.scheduler import AsyncioScheduler
from torus_snake.server.models import SessionSummary
from torus_snake.snake import Position
from torus_snake.status import GameStatus

logger = logging.getLogger(__name__)

_MAX_FINISHED_SESSIONS = 100


@dataclass
class ManagedSession:
    """A game engine plus the stream queues listening to it."""

    session_id: str
    engine: GameEngine | None = None
    subscribers: list[asyncio.Queue[str]] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    finished_at: float | None = None

    def subscribe(self) -> asyncio.Queue[str]:
        # Only the newest state matters; a slow client skips frames.
        queue: asyncio.Queue[str] = asyncio.Queue(maxsize=1)
        self.subscribers.append(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue[str]) -> None:
        if queue in self.subscribers:
            self.subscribers.remove(queue)

    def state_payload(self) -> str:
        assert self.engine is not None  # noqa: S101
        return json.dumps(self.engine.get_state(), separators=(",", ":"))

    def publish(self) -> None:
        """Queue the current state for every subscriber."""
        # The engine renders once while it is still being constructed.
        if self.engine is None or not self.subscribers:
            return
        payload = self.state_payload()
        for queue in list(self.subscribers):
            if queue.full():
                queue.get_nowait()
            queue.put_nowait(payload)

    def on_render(self, body: list[Position], food: Position | None) -> None:
        self.publish()

    def on_status_change(self, status: GameStatus) -> None:
        if status == GameStatus.FINISHED:
            self.finished_at = time.monotonic()
        elif status == GameStatus.STOPPED:
            self.finished_at = None
        self.publish()

    def summary(self) -> SessionSummary:
        assert self.engine is not None  # noqa: S101
        engine = self.engine
        return SessionSummary(
            session_id=self.session_id,
            status=engine.status,
            length=len(engine.session.snake),
            tick=engine.session.tick,
            won=engine.is_won,
            rows_count=engine.settings.rows_count,
            cols_count=engine.settings.cols_count,
            speed=engine.settings.speed,
        )


class SessionManager:
    """Central registry managing all game sessions."""

    def __init__(
        self,
        max_finished_sessions: int = _MAX_FINISHED_SESSIONS,
        default_settings: GameSettings | None = None,
    ) -> None:
        if max_finished_sessions < 0:
            raise ValueError("max_finished_sessions must be >= 0.")
        # Fields a create request leaves out are taken from here.
        self.default_settings = (default_settings or GameSettings()).require_valid()
        self._sessions: dict[str, ManagedSession] = {}
        self._max_finished_sessions = max_finished_sessions

    def create_session(
        self, settings: GameSettings, seed: int | None = None,
    ) -> ManagedSession:
        """Validate *settings* and register a new stopped session.

        Raises :class:`~torus_snake.config.InvalidSettingsError` without
        registering anything when the settings are invalid.
        """
        settings.require_valid()
        self._prune_finished_sessions()

        session_id = uuid.uuid4().hex[:12]
        managed = ManagedSession(session_id=session_id)
        managed.engine = GameEngine(
            settings,
            scheduler=AsyncioScheduler(),
            renderer=managed.on_render,
            on_status_change=managed.on_status_change,
            seed=seed,
        )
        self._sessions[session_id] = managed
        logger.info("Session %s created.", session_id)
        return managed

    def get_session(self, session_id: str) -> ManagedSession | None:
        return self._sessions.get(session_id)

    def require_session(self, session_id: str) -> ManagedSession:
        managed = self._sessions.get(session_id)
        if managed is None:
            raise KeyError(f"Session {session_id} not found.")
        return managed

    def list_sessions(self) -> list[SessionSummary]:
        return [s.summary() for s in self._sessions.values()]

    def delete_session(self, session_id: str) -> None:
        managed = self.require_session(session_id)
        assert managed.engine is not None  # noqa: S101
        managed.engine.scheduler.cancel()
        del self._sessions[session_id]
        logger.info("Session %s deleted.", session_id)

    def _prune_finished_sessions(self) -> None:
        """Bound retained finished sessions to avoid unbounded registry growth."""
        finished = [
            s for s in self._sessions.values() if s.finished_at is not None
        ]
        overflow = len(finished) - self._max_finished_sessions
        if overflow <= 0:
            return
        finished.sort(key=lambda s: s.finished_at)
        for stale in finished[:overflow]:
            self._sessions.pop(stale.session_id, None)
        logger.info(
            "Pruned %d finished sessions (retaining up to %d).",
            overflow,
            self._max_finished_sessions,
        )

    async def cleanup(self) -> None:
        """Cancel every running tick loop."""
        for managed in self._sessions.values():
            if managed.engine is not None:
                managed.engine.scheduler.cancel()
        # Let cancelled tasks unwind before the loop goes away.
        await asyncio.sleep(0)
        logger.info("SessionManager cleanup complete.")
