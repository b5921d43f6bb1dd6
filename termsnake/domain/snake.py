"""
Snake entity for the game engine.
"""

from collections import deque
from typing import List, Tuple, Optional

Cell = Tuple[int, int]


class Snake:
    """
    Represents the snake on the board.

    Attributes:
        positions: deque of (row, column) from head at index 0 to tail at the end
        alive: whether the snake is still alive
        death_reason: 'wall' or 'self' once the snake has collided
    """

    def __init__(self, positions: List[Cell]):
        self.positions = deque(positions)
        self.alive = True
        self.death_reason: Optional[str] = None

    @property
    def head(self) -> Cell:
        """Return the head position (first element)."""
        return self.positions[0]

    @property
    def tail(self) -> Cell:
        """Return the tail position (last element)."""
        return self.positions[-1]

    def __len__(self) -> int:
        return len(self.positions)

    def occupies(self, cell: Cell) -> bool:
        return cell in self.positions

    def advance(self, new_head: Cell) -> Cell:
        """Move one step forward and return the vacated tail cell."""
        self.positions.appendleft(new_head)
        return self.positions.pop()

    def grow(self) -> None:
        # The duplicated tail stays put for one extra tick.
        self.positions.append(self.positions[-1])

    def die(self, reason: str) -> None:
        self.alive = False
        self.death_reason = reason

    def __repr__(self):
        return f"<Snake length={len(self.positions)}, head={self.head}, alive={self.alive}>"
