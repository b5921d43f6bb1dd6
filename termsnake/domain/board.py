"""
Board geometry derived from the terminal size.
"""

from typing import Tuple

from .constants import MIN_ROWS, MIN_COLUMNS


class TerminalTooSmallError(ValueError):
    """Raised when the terminal cannot hold the initial snake and a food cell."""


class Board:
    """
    The playable region of the terminal.

    Row 1, row ``rows``, column 1 and column ``columns`` hold the border.
    Everything strictly inside is playable.

    Attributes:
        rows: terminal height in cells
        columns: terminal width in cells
    """

    __slots__ = ("_rows", "_columns")

    def __init__(self, rows: int, columns: int):
        self._rows = rows
        self._columns = columns

    @classmethod
    def from_terminal_size(cls, size) -> "Board":
        """Build a board from an ``os.terminal_size`` (columns, lines)."""
        return cls(rows=size.lines, columns=size.columns)

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    def validate(self) -> None:
        if self._rows < MIN_ROWS or self._columns < MIN_COLUMNS:
            raise TerminalTooSmallError(
                f"Terminal too small: {self._columns}x{self._rows}, "
                f"need at least {MIN_COLUMNS}x{MIN_ROWS}"
            )

    def is_in_bounds(self, row: int, column: int) -> bool:
        """True iff (row, column) lies strictly inside the border."""
        return 1 < row < self._rows and 1 < column < self._columns

    def clamp(self, row: int, column: int) -> Tuple[int, int]:
        """Pull a coordinate into the interior so it never lands on the border."""
        r = row if row > 1 else 2
        r = r if r < self._rows else self._rows - 1
        c = column if column > 1 else 2
        c = c if c < self._columns else self._columns - 1
        return r, c

    def __repr__(self):
        return f"<Board rows={self._rows}, columns={self._columns}>"
