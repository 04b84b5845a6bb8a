import pytest

from gauge.benchmark import BenchmarkDescriptor, after_experiment, before_experiment
from gauge.model import Measurement, Value
from gauge.worker import Worker, get_worker, list_workers, worker_for
from gauge.worker import MacrobenchmarkWorker, MicroWorker, PicoWorker
from gauge.benchmark import LongReps


class ExperimentBenchmark:

    def __init__(self):
        self.events = []

    @before_experiment
    def create_fixture(self):
        self.events.append("create_fixture")

    @before_experiment
    def load_fixture(self):
        self.events.append("load_fixture")

    @after_experiment
    def drop_fixture(self):
        self.events.append("drop_fixture")

    def time_query(self):
        self.events.append("query")

    def time_batch(self, reps: int):
        pass

    def time_tight(self, reps: LongReps):
        pass


class RecordingWorker(Worker):
    name = "recording"

    def measure(self):
        return [Measurement("runtime", Value.create(1, "ns"))]


def test_worker_requires_measure():
    descriptor = BenchmarkDescriptor.create(ExperimentBenchmark, "time_query")

    class Incomplete(Worker):
        pass

    with pytest.raises(TypeError):
        Incomplete(descriptor)


def test_default_phases_are_no_ops():
    descriptor = BenchmarkDescriptor.create(ExperimentBenchmark, "time_query")
    worker = RecordingWorker(descriptor)

    worker.bootstrap()
    worker.pre_measure(True)
    worker.post_measure()

    assert descriptor.instance.events == []


def test_experiment_hooks_run_in_declared_order():
    descriptor = BenchmarkDescriptor.create(ExperimentBenchmark, "time_query")
    worker = RecordingWorker(descriptor)

    worker.set_up_benchmark()
    worker.tear_down_benchmark()

    assert descriptor.instance.events == ["create_fixture", "load_fixture", "drop_fixture"]


def test_experiment_hook_failure_propagates():
    class Failing:
        @before_experiment
        def set_up(self):
            raise IOError("fixture missing")

        def time_it(self):
            pass

    worker = RecordingWorker(BenchmarkDescriptor.create(Failing, "time_it"))

    with pytest.raises(IOError, match="fixture missing"):
        worker.set_up_benchmark()


def test_worker_keeps_benchmark_and_method():
    descriptor = BenchmarkDescriptor.create(ExperimentBenchmark, "time_query")
    worker = RecordingWorker(descriptor)

    assert worker.benchmark is descriptor.instance
    assert worker.benchmark_method == descriptor.method


def test_worker_for_matches_method_signature():
    assert isinstance(worker_for(BenchmarkDescriptor.create(ExperimentBenchmark, "time_query")), MacrobenchmarkWorker)
    assert isinstance(worker_for(BenchmarkDescriptor.create(ExperimentBenchmark, "time_batch")), MicroWorker)
    assert isinstance(worker_for(BenchmarkDescriptor.create(ExperimentBenchmark, "time_tight")), PicoWorker)


def test_get_worker_by_name():
    descriptor = BenchmarkDescriptor.create(ExperimentBenchmark, "time_batch")

    assert isinstance(get_worker("PICO", descriptor), PicoWorker)
    assert list_workers() == ["micro", "pico", "macro"]

    with pytest.raises(ValueError, match="Unknown worker"):
        get_worker("nano", descriptor)
