"""
Monotonic clocks used to time benchmark invocations.
"""

import time
from typing import Optional, Protocol


class Ticker(Protocol):
    """A monotonic clock reading nanoseconds."""

    def read(self) -> int:
        ...


class SystemTicker:
    """Ticker backed by time.perf_counter_ns."""

    def read(self) -> int:
        return time.perf_counter_ns()


class Stopwatch:
    """
    Measures elapsed nanoseconds on a ticker.

    Example:
        stopwatch = Stopwatch(SystemTicker())
        stopwatch.start()
        work()
        nanos = stopwatch.stop().elapsed_nanos()
        stopwatch.reset()
    """

    def __init__(self, ticker: Optional[Ticker] = None):
        self.ticker = ticker or SystemTicker()
        self._running = False
        self._elapsed = 0
        self._start_tick = 0

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> "Stopwatch":
        if self._running:
            raise RuntimeError("Stopwatch is already running")
        self._running = True
        self._start_tick = self.ticker.read()
        return self

    def stop(self) -> "Stopwatch":
        tick = self.ticker.read()
        if not self._running:
            raise RuntimeError("Stopwatch is already stopped")
        self._running = False
        self._elapsed += tick - self._start_tick
        return self

    def reset(self) -> "Stopwatch":
        self._elapsed = 0
        self._running = False
        return self

    def elapsed_nanos(self) -> int:
        if self._running:
            return self.ticker.read() - self._start_tick + self._elapsed
        return self._elapsed
