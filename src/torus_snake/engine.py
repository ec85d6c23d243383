"""Tick-driven game engine composing grid, snake, food, and status logic."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

import numpy as np

from torus_snake.config import GameSettings
from torus_snake.food import Food, random_free_coordinates
from torus_snake.grid import Grid
from torus_snake.scheduler import ManualScheduler, Scheduler
from torus_snake.snake import Direction, Position, Snake
from torus_snake.status import GameStatus, StatusMachine

logger = logging.getLogger(__name__)

Renderer = Callable[[list[Position], Position | None], None]
StatusListener = Callable[[GameStatus], None]


@dataclass
class Session:
    """All mutable state of one game, from reset to finish."""

    snake: Snake
    food: Food
    status: StatusMachine = field(default_factory=StatusMachine)
    won: bool = False
    tick: int = 0
    food_eaten: int = 0


class GameEngine:
    """Single-snake engine on a toroidal grid.

    The engine owns the current :class:`Session` and is its only mutator.
    A :class:`~torus_snake.scheduler.Scheduler` calls :meth:`tick` every
    ``settings.tick_interval`` seconds while playing; the default
    :class:`~torus_snake.scheduler.ManualScheduler` leaves ticking to the
    caller.

    Raises :class:`~torus_snake.config.InvalidSettingsError` listing every
    violation when *settings* are out of range.
    """

    def __init__(
        self,
        settings: GameSettings | None = None,
        scheduler: Scheduler | None = None,
        renderer: Renderer | None = None,
        on_status_change: StatusListener | None = None,
        seed: int | None = None,
        initial_length: int = 1,
    ) -> None:
        self.settings = (settings or GameSettings()).require_valid()
        if not 1 <= initial_length <= self.settings.cols_count:
            raise ValueError(
                "initial_length must be between 1 and the number of columns."
            )
        self.grid = Grid(self.settings.rows_count, self.settings.cols_count)
        self.scheduler = scheduler if scheduler is not None else ManualScheduler()
        self.rng = np.random.default_rng(seed)
        self.initial_length = initial_length
        self._renderer = renderer
        self._on_status_change = on_status_change
        self._session: Session | None = None
        self.reset()

    @property
    def session(self) -> Session:
        assert self._session is not None  # noqa: S101
        return self._session

    @property
    def status(self) -> GameStatus:
        return self.session.status.status

    @property
    def is_won(self) -> bool:
        return self.session.won

    # --- lifecycle ---

    def reset(self) -> None:
        """Discard the current session and start a fresh, stopped one."""
        # Cancel first so a pending tick cannot reach the new session.
        self.scheduler.cancel()
        snake = Snake.spawn(
            self.grid.center,
            Direction.RIGHT,
            self.initial_length,
            self.settings.rows_count,
            self.settings.cols_count,
        )
        self._session = Session(snake=snake, food=Food())
        self._session.food.set_coordinates(self.get_random_free_coordinates())
        logger.info(
            "New session on %dx%d grid (speed=%d, win_food_count=%d).",
            self.settings.cols_count,
            self.settings.rows_count,
            self.settings.speed,
            self.settings.win_food_count,
        )
        self._notify_status()
        self._render()

    def play(self) -> None:
        """Start ticking. Only allowed from ``STOPPED``."""
        status = self.session.status
        status.play()
        try:
            self.scheduler.start(self.settings.tick_interval, self._scheduled_tick)
        except Exception:
            status.stop()
            raise
        logger.info("Session playing (tick every %.3fs).", self.settings.tick_interval)
        self._notify_status()

    def stop(self) -> None:
        """Pause ticking, keeping the snake and food in place."""
        self.session.status.stop()
        self.scheduler.cancel()
        logger.info("Session stopped at tick %d.", self.session.tick)
        self._notify_status()

    def finish(self, won: bool = False) -> None:
        """End the session; only :meth:`reset` starts playing again."""
        session = self.session
        session.status.finish()
        session.won = won
        self.scheduler.cancel()
        logger.info(
            "Session %s at tick %d with length %d.",
            "won" if won else "lost",
            session.tick,
            len(session.snake),
        )
        self._notify_status()

    # --- input ---

    def can_set_direction(self, direction: Direction) -> bool:
        """A change is legal unless it reverses the last applied step."""
        return direction != self.session.snake.last_step_direction.opposite

    def request_direction(self, direction: Direction) -> bool:
        """Buffer *direction* for the next tick unless it is a reversal."""
        if not self.can_set_direction(direction):
            logger.debug("Rejected reversal to %s.", direction.label)
            return False
        self.session.snake.set_direction(direction)
        return True

    def get_random_free_coordinates(self) -> Position | None:
        """Pick a random cell the snake does not occupy."""
        return random_free_coordinates(
            self.session.snake,
            self.settings.rows_count,
            self.settings.cols_count,
            self.rng,
        )

    # --- simulation ---

    def tick(self) -> dict:
        """Advance the game by one step.

        Returns the full game state as a serializable dict. Does nothing
        unless the session is playing.
        """
        session = self.session
        if not session.status.is_playing:
            return self.get_state()

        rows, cols = self.settings.rows_count, self.settings.cols_count
        snake, food = session.snake, session.food
        next_head = snake.next_head_point(rows, cols)

        if snake.is_on_point(next_head):
            self.finish(won=False)
            return self.get_state()

        ate = food.is_on_point(next_head)
        if ate:
            snake.grow_up()
        snake.make_step(rows, cols)
        session.tick += 1

        if ate:
            session.food_eaten += 1
            # Placed after the step so the new head is excluded too.
            food.set_coordinates(self.get_random_free_coordinates())
            if len(snake) > self.settings.win_food_count:
                self.finish(won=True)

        self._render()
        return self.get_state()

    def _scheduled_tick(self) -> None:
        """Tick from the scheduler, pausing the session if the tick fails.

        The error still propagates so the scheduler can log it; the session
        is left ``STOPPED`` and can be resumed with :meth:`play`.
        """
        try:
            self.tick()
        except Exception:
            if self.session.status.is_playing:
                logger.warning("Tick failed at tick %d; stopping.", self.session.tick)
                self.stop()
            raise

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        session = self.session
        return {
            "tick": session.tick,
            "status": session.status.status.value,
            "won": session.won,
            "length": len(session.snake),
            "food_eaten": session.food_eaten,
            "snake": session.snake.to_dict(),
            "food": session.food.to_dict(),
            "settings": self.settings.to_dict(),
            "board": self.grid.render(
                session.snake.body, session.food.get_coordinates(),
            ).tolist(),
        }

    def _render(self) -> None:
        if self._renderer is not None:
            session = self.session
            self._renderer(list(session.snake.body), session.food.get_coordinates())

    def _notify_status(self) -> None:
        if self._on_status_change is not None:
            self._on_status_change(self.status)
