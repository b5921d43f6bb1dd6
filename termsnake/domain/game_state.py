"""
GameState entity - a snapshot of the game at a point in time.
"""

from typing import List, Tuple, Optional


class GameState:
    """
    A snapshot of the game at a specific point in time.

    Attributes:
        tick: number of simulation steps taken so far
        snake_positions: list of (row, column), head first
        direction: current (row delta, column delta)
        food: (row, column) of the food, or None before it is placed
        score: body length minus the initial length
        rows, columns: terminal dimensions, border included
        alive: whether the snake is still alive
        death_reason: 'wall', 'self' or None
    """

    def __init__(
        self,
        tick: int,
        snake_positions: List[Tuple[int, int]],
        direction: Tuple[int, int],
        food: Optional[Tuple[int, int]],
        score: int,
        rows: int,
        columns: int,
        alive: bool = True,
        death_reason: Optional[str] = None
    ):
        self.tick = tick
        self.snake_positions = snake_positions
        self.direction = direction
        self.food = food
        self.score = score
        self.rows = rows
        self.columns = columns
        self.alive = alive
        self.death_reason = death_reason

    def print_board(self) -> str:
        """
        Returns a plain-text representation of the board with:
        # = border
        . = empty cell
        $ = food
        * = snake body
        @ = snake head
        Row 1 is the top line, matching terminal addressing.
        """
        board = [['.' for _ in range(self.columns)] for _ in range(self.rows)]

        # Border
        for c in range(self.columns):
            board[0][c] = '#'
            board[self.rows - 1][c] = '#'
        for r in range(self.rows):
            board[r][0] = '#'
            board[r][self.columns - 1] = '#'

        if self.food is not None:
            fr, fc = self.food
            board[fr - 1][fc - 1] = '$'

        if self.alive:
            # Draw tail to head so the head wins on overlap
            for pos_idx in range(len(self.snake_positions) - 1, -1, -1):
                r, c = self.snake_positions[pos_idx]
                if 1 <= r <= self.rows and 1 <= c <= self.columns:
                    board[r - 1][c - 1] = '@' if pos_idx == 0 else '*'

        return "\n".join("".join(line) for line in board)

    def __repr__(self):
        return (
            f"<GameState tick={self.tick}, food={self.food}, "
            f"length={len(self.snake_positions)}, score={self.score}>"
        )
