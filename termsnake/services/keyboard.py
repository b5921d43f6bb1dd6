"""
Keyboard input: raw byte decoding, event-loop reader and raw terminal mode.
"""

import codecs
import logging
import os
import termios
import tty
from typing import Callable, List, NamedTuple, Tuple

logger = logging.getLogger(__name__)

ESC = "\x1b"

# CSI and SS3 final bytes for the arrow keys
ARROW_KEYS = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}

SPECIAL_KEYS = {
    "\r": "return",
    "\n": "enter",
    "\t": "tab",
    "\x7f": "backspace",
    "\x08": "backspace",
    " ": "space",
}

READ_CHUNK = 1024


class Key(NamedTuple):
    name: str
    ctrl: bool
    sequence: str


def _parse_escape(data: str, i: int):
    """Decode an escape sequence starting at ``data[i] == ESC``."""
    if i + 1 >= len(data):
        return Key("escape", False, ESC), i + 1

    introducer = data[i + 1]
    if introducer == "O" and i + 2 < len(data):
        final = data[i + 2]
        sequence = data[i:i + 3]
        return Key(ARROW_KEYS.get(final, "undefined"), False, sequence), i + 3

    if introducer == "[":
        j = i + 2
        # Parameter and intermediate bytes, then one final byte
        while j < len(data) and not ("\x40" <= data[j] <= "\x7e"):
            j += 1
        if j >= len(data):
            return Key("undefined", False, data[i:]), len(data)
        sequence = data[i:j + 1]
        return Key(ARROW_KEYS.get(data[j], "undefined"), False, sequence), j + 1

    return Key("escape", False, ESC), i + 1


def split_incomplete(data: str) -> Tuple[str, str]:
    """
    Separate a trailing escape sequence that has not fully arrived yet.

    Returns (complete, rest); ``rest`` is fed back in front of the next read.
    """
    i = data.rfind(ESC)
    if i == -1:
        return data, ""
    tail = data[i:]
    if tail in (ESC, ESC + "O"):
        return data[:i], tail
    if tail.startswith(ESC + "[") and not any("\x40" <= ch <= "\x7e" for ch in tail[2:]):
        return data[:i], tail
    return data, ""


def parse_keys(data: str) -> List[Key]:
    """
    Split a chunk of raw terminal input into key events.

    Arrow keys arrive as ``ESC [ A`` (or ``ESC O A`` in application mode),
    control combinations as bytes 0x01..0x1a, everything else as the
    character itself.
    """
    keys: List[Key] = []
    i = 0
    while i < len(data):
        ch = data[i]
        if ch == ESC:
            key, i = _parse_escape(data, i)
            keys.append(key)
            continue

        if ch in SPECIAL_KEYS:
            keys.append(Key(SPECIAL_KEYS[ch], False, ch))
        elif "\x01" <= ch <= "\x1a":
            keys.append(Key(chr(ord(ch) + ord("a") - 1), True, ch))
        else:
            keys.append(Key(ch.lower(), False, ch))
        i += 1
    return keys


class KeyboardReader:
    """
    Feeds key events from ``fd`` to ``handler`` through the event loop.

    End of input is reported to ``on_eof``, since no further keys can arrive.
    """

    def __init__(
        self,
        fd: int,
        loop,
        handler: Callable[[Key], None],
        on_eof: Callable[[], None]
    ):
        self.fd = fd
        self._loop = loop
        self._handler = handler
        self._on_eof = on_eof
        self._attached = False
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._pending = ""

    def attach(self) -> None:
        self._loop.add_reader(self.fd, self._on_readable)
        self._attached = True

    def detach(self) -> None:
        if self._attached:
            self._loop.remove_reader(self.fd)
            self._attached = False

    def _on_readable(self) -> None:
        try:
            chunk = os.read(self.fd, READ_CHUNK)
        except BlockingIOError:
            return

        if not chunk:
            logger.info("Keyboard input closed")
            self.detach()
            self._on_eof()
            return

        # Escape sequences and UTF-8 characters may straddle two reads
        text = self._pending + self._decoder.decode(chunk)
        text, self._pending = split_incomplete(text)
        for key in parse_keys(text):
            logger.debug("Key %r (ctrl=%s)", key.name, key.ctrl)
            self._handler(key)


class RawMode:
    """Context manager putting the terminal on ``fd`` into raw mode."""

    def __init__(self, fd: int):
        self.fd = fd
        self._saved = None

    def __enter__(self):
        self._saved = termios.tcgetattr(self.fd)
        tty.setraw(self.fd)
        return self

    def __exit__(self, exc_type, exc, tb):
        if self._saved is not None:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self._saved)
            self._saved = None
