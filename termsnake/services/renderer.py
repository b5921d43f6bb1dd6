"""
Incremental renderer: the border is drawn once, then only changed cells.
"""

from typing import Iterable, Tuple

from termsnake.config import GameConfig
from termsnake.domain.board import Board
from termsnake.services.terminal import Terminal, cursor_to, move_cursor


class Renderer:
    """
    Draws game cells on the terminal.

    Every cell write is clamped into the board interior, so a request for a
    border or off-screen coordinate lands on the nearest playable cell
    instead of failing.
    """

    def __init__(self, terminal: Terminal, board: Board, config: GameConfig):
        self.terminal = terminal
        self.board = board
        self.config = config

    def draw_board(self) -> None:
        """Clear the screen and draw the box border."""
        box = self.config.box
        rows, columns = self.board.rows, self.board.columns

        self.terminal.clear_screen()

        # Top edge
        self.terminal.write(
            cursor_to(1, 1)
            + box["top_left"]
            + box["horizontal"] * (columns - 2)
            + box["top_right"]
        )

        # Right edge; the cursor sits on the last column after each glyph
        right = [cursor_to(2, columns)]
        for _ in range(rows - 2):
            right.append(box["vertical"] + move_cursor(0, 1))
        self.terminal.write("".join(right))

        # Bottom edge
        self.terminal.write(
            cursor_to(rows, 1)
            + box["bottom_left"]
            + box["horizontal"] * (columns - 2)
            + box["bottom_right"]
        )

        # Left edge
        left = [cursor_to(2, 1)]
        for _ in range(rows - 2):
            left.append(box["vertical"] + move_cursor(-1, 1))
        self.terminal.write("".join(left))

    def fill_point(self, row: int, column: int, char: str = None) -> bool:
        if char is None:
            char = self.config.snake_char
        r, c = self.board.clamp(row, column)
        return self.terminal.write(cursor_to(r, c) + char)

    def fill_points(self, points: Iterable[Tuple[int, int]], char: str = None) -> bool:
        if char is None:
            char = self.config.snake_char
        data = []
        for row, column in points:
            r, c = self.board.clamp(row, column)
            data.append(cursor_to(r, c) + char)
        return self.terminal.write("".join(data))

    def clear_points(self, points: Iterable[Tuple[int, int]]) -> bool:
        return self.fill_points(points, self.config.blank_char)

    def draw_food(self, cell: Tuple[int, int]) -> bool:
        return self.fill_point(cell[0], cell[1], self.config.food_char)
