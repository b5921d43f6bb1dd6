"""
Terminal output stream.

Produces the cursor-addressing escape sequences the game draws with and
buffers writes on a non-blocking file descriptor. When the unsent buffer
reaches the high-water mark, ``write()`` returns False and the registered
drain callbacks fire once the buffer has been fully flushed, so the caller
can hold off until the terminal catches up.
"""

import logging
import os
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

CSI = "\x1b["
CLEAR_SCREEN = CSI + "2J"
SHOW_CURSOR = CSI + "?25h"
HIDE_CURSOR = CSI + "?25l"

DEFAULT_HIGH_WATER_MARK = 16 * 1024


def cursor_to(row: int = 1, column: int = 1) -> str:
    """Absolute cursor position for one-based (row, column)."""
    return f"{CSI}{row};{column}H"


def move_cursor(dx: int, dy: int) -> str:
    """Relative cursor move: columns first, then rows."""
    data = ""
    if dx < 0:
        data += f"{CSI}{-dx}D"
    elif dx > 0:
        data += f"{CSI}{dx}C"
    if dy < 0:
        data += f"{CSI}{-dy}A"
    elif dy > 0:
        data += f"{CSI}{dy}B"
    return data


class Terminal:
    """
    Buffered writer for the terminal attached to ``fd``.

    Attributes:
        fd: output file descriptor
        rows, columns: terminal size, read once at construction
    """

    def __init__(
        self,
        fd: int,
        loop=None,
        high_water_mark: int = DEFAULT_HIGH_WATER_MARK,
        size: Optional[os.terminal_size] = None
    ):
        self.fd = fd
        self._loop = loop
        self._high_water_mark = high_water_mark
        self._buffer = bytearray()
        self._needs_drain = False
        self._writer_registered = False
        self._drain_callbacks: List[Callable[[], None]] = []
        self._was_blocking: Optional[bool] = None

        if size is None:
            size = os.get_terminal_size(fd)
        self._size = size

    @property
    def rows(self) -> int:
        return self._size.lines

    @property
    def columns(self) -> int:
        return self._size.columns

    @property
    def size(self) -> os.terminal_size:
        return self._size

    @property
    def buffered(self) -> int:
        """Number of bytes accepted but not yet handed to the terminal."""
        return len(self._buffer)

    @property
    def backpressured(self) -> bool:
        return self._needs_drain

    def on_drain(self, callback: Callable[[], None]) -> None:
        self._drain_callbacks.append(callback)

    def start(self) -> None:
        """Switch the descriptor to non-blocking mode."""
        self._was_blocking = os.get_blocking(self.fd)
        os.set_blocking(self.fd, False)

    def write(self, data: str) -> bool:
        """
        Queue ``data`` and try to flush it.

        Returns False when the caller should wait for a drain callback
        before writing more.
        """
        self._buffer += data.encode("utf-8")
        self._flush()
        if len(self._buffer) >= self._high_water_mark:
            if not self._needs_drain:
                logger.debug("Output backpressure: %d bytes buffered", len(self._buffer))
            self._needs_drain = True
            return False
        return True

    def cursor_to(self, row: int = 1, column: int = 1) -> bool:
        return self.write(cursor_to(row, column))

    def move_cursor(self, dx: int, dy: int) -> bool:
        return self.write(move_cursor(dx, dy))

    def clear_screen(self) -> bool:
        return self.write(CLEAR_SCREEN)

    def show_cursor(self) -> bool:
        return self.write(SHOW_CURSOR)

    def hide_cursor(self) -> bool:
        return self.write(HIDE_CURSOR)

    def _flush(self) -> None:
        while self._buffer:
            try:
                written = os.write(self.fd, self._buffer)
            except BlockingIOError:
                break
            del self._buffer[:written]

        if self._buffer and not self._writer_registered and self._loop is not None:
            self._loop.add_writer(self.fd, self._on_writable)
            self._writer_registered = True

    def _on_writable(self) -> None:
        self._flush()
        if self._buffer:
            return

        self._loop.remove_writer(self.fd)
        self._writer_registered = False
        if self._needs_drain:
            self._needs_drain = False
            for callback in list(self._drain_callbacks):
                callback()

    def close(self) -> None:
        """Flush everything with blocking writes and restore the descriptor mode."""
        if self._writer_registered:
            self._loop.remove_writer(self.fd)
            self._writer_registered = False

        if self._buffer:
            os.set_blocking(self.fd, True)
            while self._buffer:
                written = os.write(self.fd, self._buffer)
                del self._buffer[:written]
        self._needs_drain = False

        if self._was_blocking is not None:
            os.set_blocking(self.fd, self._was_blocking)
            self._was_blocking = None
