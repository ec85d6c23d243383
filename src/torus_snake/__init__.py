"""Torus Snake — tick-driven snake engine on a wrap-around grid."""

from torus_snake.config import GameSettings, InvalidSettingsError, ValidationResult
from torus_snake.engine import GameEngine, Session
from torus_snake.food import Food
from torus_snake.grid import CellType, Grid, wrap_step
from torus_snake.scheduler import AsyncioScheduler, ManualScheduler, Scheduler
from torus_snake.snake import Direction, Position, Snake
from torus_snake.status import GameStatus, InvalidTransitionError, StatusMachine

__all__ = [
    "AsyncioScheduler",
    "CellType",
    "Direction",
    "Food",
    "GameEngine",
    "GameSettings",
    "GameStatus",
    "Grid",
    "InvalidSettingsError",
    "InvalidTransitionError",
    "ManualScheduler",
    "Position",
    "Scheduler",
    "Session",
    "Snake",
    "StatusMachine",
    "ValidationResult",
    "wrap_step",
]
