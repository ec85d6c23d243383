"""Pydantic models for API request/response schemas."""

from __future__ import annotations

import dataclasses

from pydantic import BaseModel, Field

from torus_snake.config import GameSettings
from torus_snake.status import GameStatus


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions.

    Ranges are checked by :meth:`GameSettings.validate` so that every
    violation is reported at once.
    """

    rows_count: int | None = None
    cols_count: int | None = None
    speed: int | None = None
    win_food_count: int | None = None
    seed: int | None = None

    def to_settings(self, defaults: GameSettings) -> GameSettings:
        """Overlay the fields given in the request onto *defaults*."""
        overrides = self.model_dump(exclude={"seed"}, exclude_none=True)
        return dataclasses.replace(defaults, **overrides)


class DirectionRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/direction."""

    direction: str = Field(min_length=1, max_length=16)


class DirectionResponse(BaseModel):
    """Whether a direction change was buffered for the next tick."""

    direction: str
    accepted: bool


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    status: GameStatus
    length: int
    tick: int
    won: bool
    rows_count: int
    cols_count: int
    speed: int
