"""
Workers for micro and pico benchmarks: benchmarks whose single repetition is
too short to time on its own, so repetitions are batched into one timed call.
"""

import math
import logging
import random as _random
from abc import abstractmethod
from typing import Mapping, Optional, List

from ..benchmark.descriptor import BenchmarkDescriptor
from ..errors import InvalidBenchmarkError
from ..model import Measurement, Value
from .base import Worker
from .options import WorkerOptions
from .timer import Ticker, SystemTicker
from .util import force_gc, format_nanos

logger = logging.getLogger(__name__)

INITIAL_REPS = 100

# Largest reps count accepted by a benchmark method with a plain int parameter.
NARROW_REPS_MAX = 2**31 - 1

# Largest reps count handed to any benchmark method.
WIDE_REPS_MAX = 2**63 - 1


def calculate_target_reps(reps: int, nanos: int, target_nanos: int, gaussian: float) -> int:
    """
    Returns a random number of reps based on a normal distribution around the
    estimated number of reps for the timing interval. The distribution used
    has a standard deviation of one fifth of the estimated number of reps.

    Args:
        reps: Repetitions executed so far
        nanos: Nanoseconds those repetitions took
        target_nanos: Desired duration of the next batch
        gaussian: Sample from a standard normal distribution

    Returns:
        Number of reps to run next, between 1 and WIDE_REPS_MAX
    """
    if nanos <= 0:
        # Nothing measurable yet, so the estimate is unbounded.
        return WIDE_REPS_MAX
    target_reps = (reps / nanos) * target_nanos
    # Round half up, independent of float-to-even rounding.
    estimate = gaussian * (target_reps / 5) + target_reps + 0.5
    if math.isnan(estimate) or estimate >= WIDE_REPS_MAX:
        return WIDE_REPS_MAX
    if estimate < 1:
        return 1
    return math.floor(estimate)


class RuntimeWorker(Worker):
    """
    Base worker for micro and pico benchmarks.

    Calibration keeps running totals of every repetition executed and the time
    it took, so each batch size is estimated from the whole history. Batch sizes
    are randomized around the estimate to avoid aliasing with periodic noise.
    """

    def __init__(
        self,
        descriptor: BenchmarkDescriptor,
        ticker: Optional[Ticker] = None,
        options: Optional[Mapping[str, str]] = None,
        random: Optional[_random.Random] = None,
    ):
        super().__init__(descriptor)
        self.ticker = ticker or SystemTicker()
        self.options = WorkerOptions.from_map(options)
        self.random = random or _random.Random()
        self.total_reps = 0
        self.total_nanos = 0
        self.next_reps = 0

    def bootstrap(self) -> None:
        self.total_reps = INITIAL_REPS
        self.total_nanos = self.invoke_time_method(INITIAL_REPS)
        logger.debug(
            f"{self.descriptor.name} bootstrap: {INITIAL_REPS} reps in {self.total_nanos}ns"
        )

    def pre_measure(self, in_warmup: bool) -> None:
        self.next_reps = calculate_target_reps(
            self.total_reps,
            self.total_nanos,
            self.options.timing_interval_nanos,
            self.random.gauss(0.0, 1.0),
        )
        if self.options.gc_before_each and not in_warmup:
            force_gc()

    def measure(self) -> List[Measurement]:
        nanos = self.invoke_time_method(self.next_reps)
        measurement = Measurement(
            description="runtime",
            value=Value.create(nanos, "ns"),
            weight=self.next_reps,
        )

        self.total_reps += self.next_reps
        self.total_nanos += nanos
        return [measurement]

    @abstractmethod
    def invoke_time_method(self, reps: int) -> int:
        """
        Call the benchmark method once with reps.

        Returns:
            Elapsed nanoseconds
        """
        pass

    def _timed_call(self, reps: int) -> int:
        before = self.ticker.read()
        self.benchmark_method(reps)
        return self.ticker.read() - before


class MicroWorker(RuntimeWorker):
    """Worker for micro benchmarks, whose reps parameter is a bounded int."""

    name = "micro"

    def invoke_time_method(self, reps: int) -> int:
        if reps > NARROW_REPS_MAX:
            raise InvalidBenchmarkError(
                "%s.%s takes an int for reps, but requires a greater number to fill the given "
                "timing interval (%s). If this is expected (the benchmarked code is very fast), "
                "use a LongReps parameter. Otherwise, check your benchmark for errors.",
                self.descriptor.class_name,
                self.descriptor.method_name,
                format_nanos(self.options.timing_interval_nanos),
            )
        return self._timed_call(reps)


class PicoWorker(RuntimeWorker):
    """Worker for pico benchmarks, whose reps parameter is unbounded (LongReps)."""

    name = "pico"

    def invoke_time_method(self, reps: int) -> int:
        return self._timed_call(reps)
