"""
Base worker interface.
All benchmark execution strategies implement this lifecycle.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from ..benchmark.descriptor import BenchmarkDescriptor
from ..model import Measurement


class Worker(ABC):
    """
    A Worker collects measurements for one benchmark during one trial.

    The orchestrator drives every worker through the same lifecycle:

        worker.set_up_benchmark()
        worker.bootstrap()
        for each warmup or measurement cycle:
            worker.pre_measure(in_warmup)
            measurements = worker.measure()
            worker.post_measure()
        worker.tear_down_benchmark()

    Exceptions raised by hooks or by the benchmark propagate to the caller
    unchanged. A worker instance is used by a single thread for a single trial.
    """

    # Registry name
    name: str = "base"

    def __init__(self, descriptor: BenchmarkDescriptor):
        self.descriptor = descriptor
        self.benchmark = descriptor.instance
        self.benchmark_method = descriptor.method

    def set_up_benchmark(self) -> None:
        """Run before-experiment hooks in declared order."""
        for hook in self.descriptor.before_experiment:
            hook()

    def bootstrap(self) -> None:
        """Called once before all measurements but after benchmark setup."""
        pass

    def pre_measure(self, in_warmup: bool) -> None:
        """
        Called immediately before measure().

        Args:
            in_warmup: Whether this cycle is warmup. Implementations may skip
                costly preparation such as forcing GC to make warmup faster.
        """
        pass

    @abstractmethod
    def measure(self) -> Sequence[Measurement]:
        """
        Run the timed work for one cycle.

        Returns:
            Non-empty sequence of measurements
        """
        pass

    def post_measure(self) -> None:
        """Called immediately after measure()."""
        pass

    def tear_down_benchmark(self) -> None:
        """Run after-experiment hooks in declared order."""
        for hook in self.descriptor.after_experiment:
            hook()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(benchmark={self.descriptor.name})>"
