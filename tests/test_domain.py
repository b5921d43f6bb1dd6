"""
Tests for the domain entities: Board, Snake and GameState.
"""

import os
from collections import deque

import pytest

from termsnake.domain import Board, Snake, GameState, TerminalTooSmallError


class TestBoard:
    """Tests for board geometry."""

    def test_is_in_bounds_excludes_border(self):
        board = Board(rows=10, columns=20)

        assert board.is_in_bounds(2, 2) is True
        assert board.is_in_bounds(9, 19) is True
        assert board.is_in_bounds(1, 5) is False
        assert board.is_in_bounds(10, 5) is False
        assert board.is_in_bounds(5, 1) is False
        assert board.is_in_bounds(5, 20) is False

    def test_clamp_pulls_coordinates_inside(self):
        board = Board(rows=10, columns=20)

        assert board.clamp(0, 0) == (2, 2)
        assert board.clamp(1, 1) == (2, 2)
        assert board.clamp(10, 20) == (9, 19)
        assert board.clamp(50, -3) == (9, 2)
        assert board.clamp(5, 7) == (5, 7)

    def test_from_terminal_size(self):
        board = Board.from_terminal_size(os.terminal_size((80, 24)))
        assert board.rows == 24
        assert board.columns == 80

    def test_validate_accepts_minimum_size(self):
        Board(rows=4, columns=8).validate()

    @pytest.mark.parametrize("rows,columns", [(3, 80), (24, 7)])
    def test_validate_rejects_small_terminal(self, rows, columns):
        with pytest.raises(TerminalTooSmallError):
            Board(rows=rows, columns=columns).validate()

    def test_too_small_error_is_value_error(self):
        assert issubclass(TerminalTooSmallError, ValueError)


class TestSnake:
    """Tests for the Snake class."""

    def test_snake_initialization(self):
        positions = [(2, 6), (2, 4), (2, 2)]
        snake = Snake(positions)
        assert list(snake.positions) == positions
        assert isinstance(snake.positions, deque)
        assert snake.alive is True
        assert snake.death_reason is None

    def test_head_and_tail(self):
        snake = Snake([(2, 6), (2, 4), (2, 2)])
        assert snake.head == (2, 6)
        assert snake.tail == (2, 2)
        assert len(snake) == 3

    def test_advance_returns_vacated_tail(self):
        snake = Snake([(2, 6), (2, 4), (2, 2)])
        vacated = snake.advance((2, 8))
        assert vacated == (2, 2)
        assert list(snake.positions) == [(2, 8), (2, 6), (2, 4)]

    def test_grow_duplicates_tail(self):
        snake = Snake([(2, 6), (2, 4), (2, 2)])
        snake.grow()
        assert list(snake.positions) == [(2, 6), (2, 4), (2, 2), (2, 2)]

    def test_occupies(self):
        snake = Snake([(2, 6), (2, 4)])
        assert snake.occupies((2, 4)) is True
        assert snake.occupies((3, 4)) is False

    def test_die_records_reason(self):
        snake = Snake([(2, 6)])
        snake.die("wall")
        assert snake.alive is False
        assert snake.death_reason == "wall"


class TestGameState:
    """Tests for the GameState snapshot."""

    def make_state(self, **kwargs):
        values = dict(
            tick=3,
            snake_positions=[(2, 6), (2, 4), (2, 2)],
            direction=(0, 2),
            food=(4, 4),
            score=0,
            rows=6,
            columns=10,
        )
        values.update(kwargs)
        return GameState(**values)

    def test_print_board_layout(self):
        board = self.make_state().print_board()
        assert board.split("\n") == [
            "##########",
            "#*.*.@...#",
            "#........#",
            "#..$.....#",
            "#........#",
            "##########",
        ]

    def test_print_board_hides_dead_snake(self):
        board = self.make_state(alive=False).print_board()
        assert "@" not in board
        assert "*" not in board
        assert "$" in board

    def test_print_board_without_food(self):
        board = self.make_state(food=None).print_board()
        assert "$" not in board

    def test_repr(self):
        repr_str = repr(self.make_state())
        assert "tick=3" in repr_str
        assert "food=(4, 4)" in repr_str
