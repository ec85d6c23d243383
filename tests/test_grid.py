"""Tests for the grid topology module."""

import numpy as np
import pytest

from torus_snake.grid import CellType, Grid, wrap_step
from torus_snake.snake import Direction, Position


class TestWrapStep:
    def test_interior_step(self):
        assert wrap_step(Position(5, 5), Direction.UP, 10, 10) == (5, 4)
        assert wrap_step(Position(5, 5), Direction.DOWN, 10, 10) == (5, 6)
        assert wrap_step(Position(5, 5), Direction.LEFT, 10, 10) == (4, 5)
        assert wrap_step(Position(5, 5), Direction.RIGHT, 10, 10) == (6, 5)

    def test_wraps_at_top_and_left(self):
        assert wrap_step(Position(0, 0), Direction.UP, 10, 12) == (0, 9)
        assert wrap_step(Position(0, 0), Direction.LEFT, 10, 12) == (11, 0)

    def test_wraps_at_bottom_and_right(self):
        assert wrap_step(Position(11, 9), Direction.DOWN, 10, 12) == (11, 0)
        assert wrap_step(Position(11, 9), Direction.RIGHT, 10, 12) == (0, 9)

    def test_result_always_in_bounds(self):
        grid = Grid(rows_count=10, cols_count=12)
        for x in range(12):
            for y in range(10):
                for direction in Direction:
                    nxt = wrap_step(Position(x, y), direction, 10, 12)
                    assert grid.in_bounds(nxt)


class TestGrid:
    def test_dimensions(self):
        grid = Grid(rows_count=10, cols_count=12)
        assert grid.cell_count == 120
        assert grid.to_dict() == {"rows_count": 10, "cols_count": 12}

    def test_center(self):
        assert Grid(rows_count=10, cols_count=12).center == (6, 5)

    def test_invalid_dimensions(self):
        with pytest.raises(ValueError, match="positive"):
            Grid(rows_count=0, cols_count=5)

    def test_in_bounds(self):
        grid = Grid(rows_count=5, cols_count=5)
        assert grid.in_bounds(Position(0, 0))
        assert grid.in_bounds(Position(4, 4))
        assert not grid.in_bounds(Position(-1, 0))
        assert not grid.in_bounds(Position(0, 5))

    def test_step_uses_grid_bounds(self):
        grid = Grid(rows_count=10, cols_count=15)
        assert grid.step(Position(14, 3), Direction.RIGHT) == (0, 3)


class TestGridRender:
    def test_empty_board(self):
        board = Grid(rows_count=10, cols_count=12).render([], None)
        assert board.shape == (10, 12)
        assert np.all(board == CellType.EMPTY)

    def test_paints_head_body_and_food(self):
        grid = Grid(rows_count=10, cols_count=10)
        body = [Position(3, 2), Position(2, 2), Position(1, 2)]
        board = grid.render(body, Position(7, 8))
        assert board[2, 3] == CellType.SNAKE_HEAD
        assert board[2, 2] == CellType.SNAKE_BODY
        assert board[2, 1] == CellType.SNAKE_BODY
        assert board[8, 7] == CellType.FOOD
        assert np.count_nonzero(board) == 4
