"""
Terminal-facing services: output stream, renderer, keyboard and ticker.
"""

from .terminal import Terminal
from .renderer import Renderer
from .keyboard import Key, KeyboardReader, RawMode, parse_keys
from .ticker import Ticker

__all__ = [
    'Terminal',
    'Renderer',
    'Key',
    'KeyboardReader',
    'RawMode',
    'parse_keys',
    'Ticker',
]
