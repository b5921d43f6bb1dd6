"""
Domain entities for the termsnake game engine.

This module contains the core game entities that are independent of
terminal concerns (escape sequences, raw mode, event loop, etc.).
"""

from .constants import UP, DOWN, LEFT, RIGHT, STILL, VALID_MOVES, KEY_DIRECTIONS
from .board import Board, TerminalTooSmallError
from .snake import Snake
from .game_state import GameState

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'STILL', 'VALID_MOVES', 'KEY_DIRECTIONS',
    'Board', 'TerminalTooSmallError',
    'Snake',
    'GameState',
]
