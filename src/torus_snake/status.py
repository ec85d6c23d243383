"""Game lifecycle states and their allowed transitions."""

from __future__ import annotations

import enum
import logging

logger = logging.getLogger(__name__)


class GameStatus(str, enum.Enum):
    """Lifecycle states for a game session."""

    STOPPED = "stopped"
    PLAYING = "playing"
    FINISHED = "finished"


class InvalidTransitionError(ValueError):
    """Raised when a lifecycle change is not allowed from the current state."""


# FINISHED has no outgoing edges; only a session reset leaves it.
_TRANSITIONS: dict[GameStatus, frozenset[GameStatus]] = {
    GameStatus.STOPPED: frozenset({GameStatus.PLAYING}),
    GameStatus.PLAYING: frozenset({GameStatus.STOPPED, GameStatus.FINISHED}),
    GameStatus.FINISHED: frozenset(),
}


class StatusMachine:
    """Tracks the status of one session, starting in ``STOPPED``."""

    def __init__(self) -> None:
        self._status = GameStatus.STOPPED

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def is_playing(self) -> bool:
        return self._status == GameStatus.PLAYING

    @property
    def is_finished(self) -> bool:
        return self._status == GameStatus.FINISHED

    def can_transition(self, target: GameStatus) -> bool:
        return target in _TRANSITIONS[self._status]

    def transition(self, target: GameStatus) -> None:
        """Move to *target* or raise :class:`InvalidTransitionError`."""
        if not self.can_transition(target):
            raise InvalidTransitionError(
                f"Cannot go from '{self._status.value}' to '{target.value}'."
            )
        logger.debug("Status %s -> %s.", self._status.value, target.value)
        self._status = target

    def play(self) -> None:
        self.transition(GameStatus.PLAYING)

    def stop(self) -> None:
        self.transition(GameStatus.STOPPED)

    def finish(self) -> None:
        self.transition(GameStatus.FINISHED)
