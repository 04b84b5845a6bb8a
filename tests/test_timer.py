import time

import pytest

from gauge.worker import Stopwatch, SystemTicker


def test_stopwatch_measures_ticker_time(ticker):
    stopwatch = Stopwatch(ticker)

    stopwatch.start()
    ticker.advance(750)
    assert stopwatch.elapsed_nanos() == 750
    ticker.advance(250)
    stopwatch.stop()
    ticker.advance(10000)

    assert stopwatch.elapsed_nanos() == 1000
    assert stopwatch.reset().elapsed_nanos() == 0


def test_stopwatch_accumulates_until_reset(ticker):
    stopwatch = Stopwatch(ticker)

    for _ in range(2):
        stopwatch.start()
        ticker.advance(100)
        stopwatch.stop()

    assert stopwatch.elapsed_nanos() == 200


def test_stopwatch_rejects_double_start_and_stop(ticker):
    stopwatch = Stopwatch(ticker)

    with pytest.raises(RuntimeError):
        stopwatch.stop()
    stopwatch.start()
    with pytest.raises(RuntimeError):
        stopwatch.start()


def test_system_ticker_is_monotonic():
    ticker = SystemTicker()

    first = ticker.read()
    time.sleep(0.001)
    second = ticker.read()

    assert second > first
