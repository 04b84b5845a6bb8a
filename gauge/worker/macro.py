"""
Worker for macro benchmarks, i.e. benchmarks whose runtime is measured in
milliseconds, not nanoseconds.
"""

import logging
from typing import Mapping, Optional, List

from ..benchmark.descriptor import BenchmarkDescriptor
from ..model import Measurement, Value
from .base import Worker
from .options import WorkerOptions
from .timer import Ticker, Stopwatch
from .util import force_gc

logger = logging.getLogger(__name__)


class MacrobenchmarkWorker(Worker):
    """
    Times a single call of the benchmark method per measurement.

    Before-rep and after-rep hooks run around every measurement, outside the
    timed region.
    """

    name = "macro"

    def __init__(
        self,
        descriptor: BenchmarkDescriptor,
        ticker: Optional[Ticker] = None,
        options: Optional[Mapping[str, str]] = None,
    ):
        super().__init__(descriptor)
        self.stopwatch = Stopwatch(ticker)
        self.options = WorkerOptions.from_map(options)

    def pre_measure(self, in_warmup: bool) -> None:
        for hook in self.descriptor.before_rep:
            hook()
        if self.options.gc_before_each and not in_warmup:
            force_gc()

    def measure(self) -> List[Measurement]:
        self.stopwatch.start()
        self.benchmark_method()
        nanos = self.stopwatch.stop().elapsed_nanos()
        self.stopwatch.reset()
        return [
            Measurement(
                description="runtime",
                value=Value.create(nanos, "ns"),
                weight=1,
            )
        ]

    def post_measure(self) -> None:
        for hook in self.descriptor.after_rep:
            hook()
