"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from torus_snake.config import GameSettings
from torus_snake.server.routes import router
from torus_snake.server.session_manager import SessionManager
from torus_snake.server.websocket import ws_router

logger = logging.getLogger(__name__)


def create_app(
    settings_path: str | Path | None = None,
    max_finished_sessions: int = 100,
) -> FastAPI:
    """Build and return the FastAPI application.

    *settings_path* names a JSON settings file whose values become the
    defaults for new sessions. It is loaded and validated here, so a bad
    file fails at startup with :class:`~torus_snake.config.InvalidSettingsError`
    rather than on the first request.
    """
    if settings_path is None:
        defaults = GameSettings()
    else:
        defaults = GameSettings.load(settings_path).require_valid()
        logger.info("Session defaults loaded from %s.", settings_path)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.session_manager = SessionManager(
            max_finished_sessions=max_finished_sessions,
            default_settings=defaults,
        )
        yield
        await app.state.session_manager.cleanup()

    app = FastAPI(
        title="Torus Snake API", version="0.1.0", lifespan=lifespan,
    )
    app.include_router(router)
    app.include_router(ws_router)
    return app
