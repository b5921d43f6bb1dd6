"""
Tests for the fixed-interval Ticker.
"""

import asyncio
from unittest.mock import Mock

from termsnake.services.ticker import Ticker


def make_loop(now=100.0):
    loop = Mock()
    loop.time.return_value = now
    return loop


class TestTickerScheduling:
    """Ticker behaviour against a mocked loop."""

    def test_start_schedules_first_fire(self):
        loop = make_loop()
        ticker = Ticker(loop, 0.15, Mock())

        ticker.start()

        loop.call_at.assert_called_once_with(100.0 + 0.15, ticker._fire)
        assert ticker.running is True

    def test_start_twice_schedules_once(self):
        loop = make_loop()
        ticker = Ticker(loop, 0.15, Mock())
        ticker.start()
        ticker.start()
        assert loop.call_at.call_count == 1

    def test_stop_cancels_pending_fire(self):
        loop = make_loop()
        ticker = Ticker(loop, 0.15, Mock())
        ticker.start()
        handle = loop.call_at.return_value

        ticker.stop()

        handle.cancel.assert_called_once()
        assert ticker.running is False

    def test_restart_replaces_schedule(self):
        loop = make_loop()
        ticker = Ticker(loop, 0.15, Mock())
        ticker.start()
        first_handle = loop.call_at.return_value

        loop.time.return_value = 200.0
        ticker.restart()

        first_handle.cancel.assert_called_once()
        loop.call_at.assert_called_with(200.0 + 0.15, ticker._fire)
        assert ticker.running is True

    def test_fire_schedules_next_then_calls_back(self):
        loop = make_loop()
        callback = Mock()
        ticker = Ticker(loop, 0.15, callback)
        ticker.start()

        loop.time.return_value = 100.15
        ticker._fire()

        callback.assert_called_once()
        assert loop.call_at.call_args[0][0] == 100.0 + 0.15 + 0.15

    def test_callback_can_stop_ticker(self):
        loop = make_loop()
        ticker = Ticker(loop, 0.15, lambda: ticker.stop())
        ticker.start()

        ticker._fire()

        assert ticker.running is False


class TestTickerOnRealLoop:
    """Ticker driving a real asyncio loop."""

    def test_fires_repeatedly_until_stopped(self):
        loop = asyncio.new_event_loop()
        calls = []

        def callback():
            calls.append(loop.time())
            if len(calls) == 3:
                ticker.stop()
                loop.stop()

        ticker = Ticker(loop, 0.01, callback)
        try:
            ticker.start()
            loop.call_later(5, loop.stop)
            loop.run_forever()
        finally:
            loop.close()

        assert len(calls) == 3
        assert calls[0] <= calls[1] <= calls[2]
