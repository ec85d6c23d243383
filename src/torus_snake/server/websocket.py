"""WebSocket handler streaming session state and accepting input."""

from __future__ import annotations

import asyncio
import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from torus_snake.server.controls import direction_from_message
from torus_snake.server.session_manager import SessionManager

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


async def _pump(websocket: WebSocket, queue: asyncio.Queue[str]) -> None:
    """Forward queued state payloads to the client until cancelled."""
    while True:
        payload = await queue.get()
        try:
            await websocket.send_text(payload)
        except Exception:
            logger.warning("Failed sending state; stopping stream.")
            return


@ws_router.websocket("/sessions/{session_id}/stream")
async def stream(websocket: WebSocket, session_id: str) -> None:
    """Send state after every render; accept direction or key messages."""
    managed = _get_manager(websocket).get_session(session_id)
    if managed is None or managed.engine is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    queue = managed.subscribe()
    logger.info("Client connected to session %s.", session_id)

    # Initial snapshot so the client can draw before the first tick.
    await websocket.send_text(managed.state_payload())
    sender = asyncio.create_task(_pump(websocket, queue))

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue

            direction = direction_from_message(msg)
            if direction is None or managed.engine is None:
                continue
            managed.engine.request_direction(direction)
    except WebSocketDisconnect:
        logger.info("Client disconnected from session %s.", session_id)
    finally:
        sender.cancel()
        managed.unsubscribe(queue)
