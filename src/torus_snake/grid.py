"""Toroidal grid topology and board snapshots."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from torus_snake.snake import Direction, Position


class CellType(enum.IntEnum):
    """Integer codes stored in a rendered board."""

    EMPTY = 0
    SNAKE_BODY = 1
    SNAKE_HEAD = 2
    FOOD = 3


def wrap_step(
    position: Position,
    direction: Direction,
    rows_count: int,
    cols_count: int,
) -> Position:
    """Return the cell one step from *position*, wrapping at the edges.

    Total for every in-bounds input: the result always satisfies
    ``0 <= x < cols_count`` and ``0 <= y < rows_count``.
    """
    from torus_snake.snake import Position

    dx, dy = direction.value
    return Position(
        (position.x + dx) % cols_count,
        (position.y + dy) % rows_count,
    )


class Grid:
    """Bounds of a toroidal playing field.

    Coordinates are ``(x, y)`` with ``x`` the column and ``y`` the row, so a
    rendered board is indexed ``board[y, x]``.
    """

    def __init__(self, rows_count: int, cols_count: int) -> None:
        if rows_count < 1 or cols_count < 1:
            raise ValueError("Grid dimensions must be positive.")
        self.rows_count = rows_count
        self.cols_count = cols_count

    @property
    def cell_count(self) -> int:
        return self.rows_count * self.cols_count

    @property
    def center(self) -> Position:
        from torus_snake.snake import Position

        return Position(self.cols_count // 2, self.rows_count // 2)

    def in_bounds(self, position: Position) -> bool:
        """Check whether a coordinate lies within the grid."""
        return 0 <= position.x < self.cols_count and 0 <= position.y < self.rows_count

    def step(self, position: Position, direction: Direction) -> Position:
        """Wrap-step *position* within this grid's bounds."""
        return wrap_step(position, direction, self.rows_count, self.cols_count)

    def render(
        self,
        body: Iterable[Position],
        food: Position | None,
    ) -> np.ndarray:
        """Paint a snake body and food item onto a fresh board array."""
        board = np.full(
            (self.rows_count, self.cols_count), CellType.EMPTY, dtype=np.int8,
        )
        if food is not None:
            board[food.y, food.x] = CellType.FOOD
        segments = list(body)
        for seg in segments[1:]:
            board[seg.y, seg.x] = CellType.SNAKE_BODY
        if segments:
            head = segments[0]
            board[head.y, head.x] = CellType.SNAKE_HEAD
        return board

    def to_dict(self) -> dict:
        """Serialize the grid bounds to a dictionary."""
        return {"rows_count": self.rows_count, "cols_count": self.cols_count}
