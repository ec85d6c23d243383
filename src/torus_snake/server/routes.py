"""REST API route handlers for session lifecycle management."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from torus_snake.config import InvalidSettingsError
from torus_snake.server.controls import parse_direction
from torus_snake.server.models import (
    CreateSessionRequest,
    DirectionRequest,
    DirectionResponse,
    SessionSummary,
)
from torus_snake.server.session_manager import ManagedSession, SessionManager
from torus_snake.status import InvalidTransitionError

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _get_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


def _get_session(request: Request, session_id: str) -> ManagedSession:
    try:
        return _get_manager(request).require_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Session not found.") from exc


@router.post("", status_code=201)
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> SessionSummary:
    """Create a new stopped session."""
    manager = _get_manager(request)
    try:
        managed = manager.create_session(
            body.to_settings(manager.default_settings), seed=body.seed,
        )
    except InvalidSettingsError as exc:
        raise HTTPException(status_code=422, detail=exc.errors) from exc
    return managed.summary()


@router.get("")
async def list_sessions(request: Request) -> list[SessionSummary]:
    """List all known sessions."""
    return _get_manager(request).list_sessions()


@router.get("/{session_id}")
async def get_session(session_id: str, request: Request) -> dict:
    """Get the full session state."""
    managed = _get_session(request, session_id)
    return {"session_id": session_id, "state": managed.engine.get_state()}


@router.delete("/{session_id}", status_code=204)
async def delete_session(session_id: str, request: Request) -> None:
    """Stop and forget a session."""
    _get_session(request, session_id)
    _get_manager(request).delete_session(session_id)


@router.post("/{session_id}/play")
async def play(session_id: str, request: Request) -> dict:
    """Start or resume ticking."""
    managed = _get_session(request, session_id)
    try:
        managed.engine.play()
    except InvalidTransitionError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return managed.engine.get_state()


@router.post("/{session_id}/stop")
async def stop(session_id: str, request: Request) -> dict:
    """Pause a playing session."""
    managed = _get_session(request, session_id)
    try:
        managed.engine.stop()
    except InvalidTransitionError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return managed.engine.get_state()


@router.post("/{session_id}/reset")
async def reset(session_id: str, request: Request) -> dict:
    """Replace the session's game with a fresh, stopped one."""
    managed = _get_session(request, session_id)
    managed.engine.reset()
    return managed.engine.get_state()


@router.post("/{session_id}/direction")
async def set_direction(
    session_id: str, body: DirectionRequest, request: Request,
) -> DirectionResponse:
    """Buffer a direction change for the next tick."""
    managed = _get_session(request, session_id)
    direction = parse_direction(body.direction)
    if direction is None:
        raise HTTPException(
            status_code=422, detail=f"Unknown direction '{body.direction}'.",
        )
    accepted = managed.engine.request_direction(direction)
    return DirectionResponse(direction=direction.label, accepted=accepted)
