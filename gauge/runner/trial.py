"""
Trial runner for driving workers through their lifecycle.
"""

import logging
import random as _random
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional

from ..benchmark.descriptor import BenchmarkDescriptor
from ..config import Config
from ..errors import ConfigurationError, GaugeError
from ..model import Measurement, Run, Trial
from ..worker import Worker, get_worker, worker_name_for
from ..worker.timer import Ticker

logger = logging.getLogger(__name__)


class TrialRunner:
    """
    Runs one trial of one benchmark.

    Features:
        - Worker selection from the benchmark method signature
        - Warmup cycles whose measurements are discarded
        - Progress and measurement callbacks

    Example:
        runner = TrialRunner(descriptor, measurements=20)
        trial = runner.run()
    """

    def __init__(
        self,
        descriptor: BenchmarkDescriptor,
        worker_name: Optional[str] = None,
        options: Optional[Mapping[str, str]] = None,
        warmup_measurements: Optional[int] = None,
        measurements: Optional[int] = None,
        ticker: Optional[Ticker] = None,
        random: Optional[_random.Random] = None,
    ):
        """
        Initialize trial runner.

        Args:
            descriptor: Benchmark to run
            worker_name: Worker to use (default: chosen from the method signature)
            options: Worker option mapping (default: Config.get_worker_options())
            warmup_measurements: Warmup cycles before measurements are kept
            measurements: Measurement cycles to keep
            ticker: Clock handed to the worker
            random: Random source handed to runtime workers
        """
        self.descriptor = descriptor
        self.worker_name = worker_name or worker_name_for(descriptor)
        self.options: Dict[str, str] = dict(
            Config.get_worker_options() if options is None else options
        )
        self.warmup_measurements = (
            Config.WARMUP_MEASUREMENTS if warmup_measurements is None else warmup_measurements
        )
        self.measurements = Config.MEASUREMENTS if measurements is None else measurements
        self.ticker = ticker
        self.random = random

        if self.warmup_measurements < 0:
            raise ConfigurationError(
                f"warmup_measurements must be >= 0, got {self.warmup_measurements}"
            )
        if self.measurements < 1:
            raise ConfigurationError(f"measurements must be >= 1, got {self.measurements}")

        # Callbacks
        self._on_progress: Optional[Callable[[int, int], None]] = None
        self._on_measurement: Optional[Callable[[Measurement], None]] = None

    def on_progress(self, callback: Callable[[int, int], None]) -> "TrialRunner":
        """
        Set progress callback.

        Args:
            callback: Function(completed, total) called after each cycle
        """
        self._on_progress = callback
        return self

    def on_measurement(self, callback: Callable[[Measurement], None]) -> "TrialRunner":
        """
        Set measurement callback.

        Args:
            callback: Function(measurement) called for each kept measurement
        """
        self._on_measurement = callback
        return self

    def create_worker(self) -> Worker:
        return get_worker(
            self.worker_name,
            self.descriptor,
            ticker=self.ticker,
            options=self.options,
            random=self.random,
        )

    def run(self, run_id: Optional[str] = None) -> Trial:
        """
        Run the trial.

        Exceptions from hooks, the benchmark or the worker propagate; the
        after-experiment hooks still run once. If those hooks fail as well,
        that failure is logged and the original exception is raised.

        Args:
            run_id: Id of the run this trial belongs to

        Returns:
            Trial with the kept measurements
        """
        trial = Trial(
            benchmark=self.descriptor.name,
            worker=self.worker_name,
            run_id=run_id,
            options=dict(self.options),
            started_at=datetime.now(),
        )
        worker = self.create_worker()
        kept: List[Measurement] = []
        total = self.warmup_measurements + self.measurements

        logger.info(
            f"Starting trial {trial.id}: {trial.benchmark} with {self.worker_name} worker "
            f"({self.warmup_measurements} warmup, {self.measurements} measurements)"
        )

        worker.set_up_benchmark()
        try:
            worker.bootstrap()

            for cycle in range(total):
                in_warmup = cycle < self.warmup_measurements
                measurements = self._cycle(worker, in_warmup)
                if not in_warmup:
                    kept.extend(measurements)
                    if self._on_measurement:
                        for measurement in measurements:
                            self._on_measurement(measurement)

                if self._on_progress:
                    self._on_progress(cycle + 1, total)
        except BaseException:
            # The trial's own failure wins over a failing teardown.
            try:
                worker.tear_down_benchmark()
            except Exception:
                logger.exception(f"Teardown of {trial.benchmark} failed after an earlier error")
            raise
        worker.tear_down_benchmark()

        trial.measurements = tuple(kept)
        trial.finished_at = datetime.now()
        logger.info(f"Trial {trial.id} complete: {len(kept)} measurements in {trial.duration:.2f}s")
        return trial

    def _cycle(self, worker: Worker, in_warmup: bool) -> List[Measurement]:
        worker.pre_measure(in_warmup)
        measurements = list(worker.measure())
        worker.post_measure()
        if not measurements:
            raise GaugeError(f"{worker!r} produced no measurements")
        return measurements


class MultiTrialRunner:
    """
    Run several trials of several benchmarks and hand each trial to result processors.

    Example:
        runner = MultiTrialRunner(trials=3)
        runner.add_benchmark(lambda: BenchmarkDescriptor.create(SortBenchmark, "time_sort"))
        runner.add_processor(Reporter())
        trials = runner.run()
    """

    def __init__(
        self,
        trials: Optional[int] = None,
        run: Optional[Run] = None,
        **runner_kwargs: Any,
    ):
        """
        Initialize multi-trial runner.

        Args:
            trials: Trials per benchmark (default: Config.TRIALS)
            run: Run the trials belong to
            **runner_kwargs: Passed to every TrialRunner
        """
        self.trials = Config.TRIALS if trials is None else trials
        if self.trials < 1:
            raise ConfigurationError(f"trials must be >= 1, got {self.trials}")
        self.run_info = run or Run()
        self.runner_kwargs = runner_kwargs
        self.benchmarks: List[Callable[[], BenchmarkDescriptor]] = []
        self.processors: List[Any] = []
        self.results: List[Trial] = []
        self._on_progress: Optional[Callable[[int, int], None]] = None

    def add_benchmark(self, factory: Callable[[], BenchmarkDescriptor]) -> "MultiTrialRunner":
        """
        Add a benchmark to run.

        Args:
            factory: Called once per trial to build a fresh descriptor
        """
        self.benchmarks.append(factory)
        return self

    def add_processor(self, processor: Any) -> "MultiTrialRunner":
        """Add a result processor with process_trial(trial) and close()."""
        self.processors.append(processor)
        return self

    def on_progress(self, callback: Callable[[int, int], None]) -> "MultiTrialRunner":
        """
        Set progress callback.

        Args:
            callback: Function(completed, total) called after each trial
        """
        self._on_progress = callback
        return self

    @property
    def total_trials(self) -> int:
        return len(self.benchmarks) * self.trials

    def run(self) -> List[Trial]:
        """Run all trials. Processors are closed even if a trial fails."""
        logger.info(
            f"Run {self.run_info.id}: {len(self.benchmarks)} benchmarks x {self.trials} trials"
        )
        try:
            for factory in self.benchmarks:
                for number in range(1, self.trials + 1):
                    descriptor = factory()
                    logger.info(f"Trial {number}/{self.trials} of {descriptor.name}")
                    trial = TrialRunner(descriptor, **self.runner_kwargs).run(run_id=self.run_info.id)
                    self.results.append(trial)
                    for processor in self.processors:
                        processor.process_trial(trial)
                    if self._on_progress:
                        self._on_progress(len(self.results), self.total_trials)
        finally:
            for processor in self.processors:
                processor.close()
        return self.results
