"""
Fixed-interval scheduler on top of the asyncio event loop.
"""

import logging
from typing import Callable

logger = logging.getLogger(__name__)


class Ticker:
    """
    Calls ``callback`` every ``interval`` seconds until stopped.

    The next call is scheduled before the callback runs, so a slow callback
    does not stretch the interval. Calls never overlap: the loop runs one
    callback at a time.
    """

    def __init__(self, loop, interval: float, callback: Callable[[], None]):
        self._loop = loop
        self.interval = interval
        self._callback = callback
        self._handle = None
        self._next_at = None

    @property
    def running(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        if self._handle is not None:
            return
        self._next_at = self._loop.time() + self.interval
        self._handle = self._loop.call_at(self._next_at, self._fire)

    def stop(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def restart(self) -> None:
        """Tear down the schedule and start a fresh one with the same interval."""
        self.stop()
        self.start()
        logger.debug("Ticker restarted (interval=%.3fs)", self.interval)

    def _fire(self) -> None:
        # Drift-free: the next deadline is based on the previous one,
        # but never earlier than now.
        self._next_at = max(self._next_at + self.interval, self._loop.time())
        self._handle = self._loop.call_at(self._next_at, self._fire)
        self._callback()
