"""
Shared fixtures: a Terminal writing into a pipe so tests can read back the
exact bytes the game produced.
"""

import os
import random
import sys

import pytest

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from termsnake.config import GameConfig  # noqa: E402
from termsnake.domain.board import Board  # noqa: E402
from termsnake.main import SnakeGame  # noqa: E402
from termsnake.services.renderer import Renderer  # noqa: E402
from termsnake.services.terminal import Terminal  # noqa: E402

BOARD_ROWS = 20
BOARD_COLUMNS = 40


class CapturedTerminal:
    """A Terminal on the write end of a pipe; output() reads what was sent."""

    def __init__(self, columns: int, rows: int, loop=None, high_water_mark=16 * 1024):
        self.read_fd, self.write_fd = os.pipe()
        os.set_blocking(self.read_fd, False)
        os.set_blocking(self.write_fd, False)
        self.terminal = Terminal(
            self.write_fd,
            loop=loop,
            high_water_mark=high_water_mark,
            size=os.terminal_size((columns, rows)),
        )

    def output(self) -> str:
        chunks = []
        while True:
            try:
                chunk = os.read(self.read_fd, 65536)
            except BlockingIOError:
                break
            if not chunk:
                break
            chunks.append(chunk)
        return b"".join(chunks).decode("utf-8")

    def close(self):
        os.close(self.read_fd)
        os.close(self.write_fd)


@pytest.fixture
def captured():
    cap = CapturedTerminal(columns=BOARD_COLUMNS, rows=BOARD_ROWS)
    yield cap
    cap.close()


@pytest.fixture
def board():
    return Board(rows=BOARD_ROWS, columns=BOARD_COLUMNS)


@pytest.fixture
def renderer(captured, board):
    return Renderer(captured.terminal, board, GameConfig())


@pytest.fixture
def game(renderer, board):
    return SnakeGame(board, renderer, GameConfig(), rng=random.Random(1234))
