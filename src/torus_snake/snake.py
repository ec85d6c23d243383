"""Snake representation and movement logic."""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Iterable
from typing import NamedTuple

from torus_snake.grid import wrap_step


class Position(NamedTuple):
    """A grid cell; ``x`` is the column and ``y`` the row."""

    x: int
    y: int


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    @property
    def label(self) -> str:
        return self.name.lower()


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class Snake:
    """A snake represented as an ordered deque of body segments.

    The head is ``body[0]``; the tail is ``body[-1]``. ``direction`` is the
    direction the next step will take, ``last_step_direction`` the one the
    previous step actually took.
    """

    def __init__(
        self,
        body: Iterable[Position],
        direction: Direction = Direction.RIGHT,
    ) -> None:
        self.body: deque[Position] = deque(Position(*seg) for seg in body)
        if not self.body:
            raise ValueError("Snake body must have at least one segment.")
        self.direction = direction
        self.last_step_direction = direction

    @classmethod
    def spawn(
        cls,
        head: Position,
        direction: Direction = Direction.RIGHT,
        length: int = 1,
        rows_count: int | None = None,
        cols_count: int | None = None,
    ) -> Snake:
        """Build a straight snake whose body trails behind *head*.

        When grid bounds are given the trailing segments wrap at the edges.
        """
        if length < 1:
            raise ValueError("Snake length must be at least 1.")
        body = [Position(*head)]
        behind = direction.opposite
        for _ in range(length - 1):
            last = body[-1]
            if rows_count is not None and cols_count is not None:
                body.append(wrap_step(last, behind, rows_count, cols_count))
            else:
                dx, dy = behind.value
                body.append(Position(last.x + dx, last.y + dy))
        return cls(body, direction)

    def __len__(self) -> int:
        return len(self.body)

    @property
    def head(self) -> Position:
        """Return the head coordinate."""
        return self.body[0]

    @property
    def tail(self) -> Position:
        return self.body[-1]

    def set_direction(self, direction: Direction) -> None:
        """Overwrite the intended direction; applied on the next step."""
        self.direction = direction

    def next_head_point(self, rows_count: int, cols_count: int) -> Position:
        """Compute the next head position without moving."""
        return wrap_step(self.head, self.direction, rows_count, cols_count)

    def make_step(self, rows_count: int, cols_count: int) -> Position:
        """Move one cell forward, keeping the length unchanged.

        Returns the vacated tail cell.
        """
        self.body.appendleft(self.next_head_point(rows_count, cols_count))
        self.last_step_direction = self.direction
        return self.body.pop()

    def grow_up(self) -> None:
        """Duplicate the tail so the next step lengthens the snake by one."""
        self.body.append(self.tail)

    def is_on_point(self, point: Position) -> bool:
        """Check whether any segment occupies *point*."""
        return point in self.body

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "body": [list(seg) for seg in self.body],
            "direction": self.direction.label,
            "last_step_direction": self.last_step_direction.label,
            "length": len(self.body),
        }
