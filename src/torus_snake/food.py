"""Food placement logic."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from torus_snake.snake import Position

if TYPE_CHECKING:
    from torus_snake.snake import Snake

logger = logging.getLogger(__name__)


class Food:
    """The single food item on the board, unplaced until first positioned."""

    def __init__(self, coordinates: Position | None = None) -> None:
        self._coordinates = coordinates

    def set_coordinates(self, point: Position | None) -> None:
        self._coordinates = None if point is None else Position(*point)

    def get_coordinates(self) -> Position | None:
        return self._coordinates

    @property
    def placed(self) -> bool:
        return self._coordinates is not None

    def is_on_point(self, point: Position) -> bool:
        """Check whether the food sits on *point*. Always False when unplaced."""
        return self._coordinates is not None and self._coordinates == point

    def to_dict(self) -> dict:
        """Serialize food state to a dictionary."""
        coords = self._coordinates
        return {"position": None if coords is None else list(coords)}


def random_free_coordinates(
    snake: Snake,
    rows_count: int,
    cols_count: int,
    rng: np.random.Generator,
) -> Position | None:
    """Sample a uniformly random cell not occupied by *snake*.

    Uses rejection sampling. Returns ``None`` when the snake covers every
    cell of the grid.
    """
    if len(set(snake.body)) >= rows_count * cols_count:
        logger.warning("No free cells available for food placement.")
        return None

    while True:
        candidate = Position(
            int(rng.integers(cols_count)), int(rng.integers(rows_count)),
        )
        if not snake.is_on_point(candidate):
            return candidate
