import threading

import pytest

from realtime.ticker import ManualTicker, ThreadTicker


def test_manual_ticker_fires_once_per_whole_interval():
    calls = []
    ticker = ManualTicker()
    ticker.start(lambda: calls.append(1), 2.0)

    assert ticker.advance(1.5) == 0
    assert ticker.advance(0.5) == 1
    assert ticker.advance(4.9) == 2
    assert ticker.fired == 3

    ticker.stop()
    assert ticker.advance(10) == 0
    assert not ticker.fire()
    assert len(calls) == 3


def test_manual_ticker_stopped_from_inside_the_callback():
    ticker = ManualTicker()
    ticker.start(ticker.stop, 1.0)
    assert ticker.advance(5.0) == 1


def test_tickers_reject_non_positive_intervals():
    with pytest.raises(ValueError):
        ManualTicker().start(lambda: None, 0)
    with pytest.raises(ValueError):
        ThreadTicker().start(lambda: None, -1)


def test_thread_ticker_runs_until_stopped():
    fired = threading.Event()
    ticker = ThreadTicker(name="test-ticker")

    ticker.start(fired.set, 0.01)
    assert ticker.is_running
    assert fired.wait(timeout=2.0)

    ticker.stop()
    assert not ticker.is_running


def test_thread_ticker_survives_a_failing_callback():
    calls = []
    second = threading.Event()

    def flaky():
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("first tick fails")
        second.set()

    ticker = ThreadTicker()
    ticker.start(flaky, 0.01)
    try:
        assert second.wait(timeout=2.0)
    finally:
        ticker.stop()
