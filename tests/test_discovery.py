import pytest

from gauge.benchmark import RepsKind, discover, find_benchmark_methods, load_benchmark_class
from gauge.errors import InvalidBenchmarkError

from sample_benchmarks import QuickBenchmark


def test_load_benchmark_class():
    assert load_benchmark_class("sample_benchmarks:QuickBenchmark") is QuickBenchmark


@pytest.mark.parametrize("target", ["sample_benchmarks", "sample_benchmarks:", ":QuickBenchmark"])
def test_load_rejects_malformed_name(target):
    with pytest.raises(InvalidBenchmarkError, match="Expected the form"):
        load_benchmark_class(target)


def test_load_reports_missing_module_and_class():
    with pytest.raises(InvalidBenchmarkError, match="Could not import"):
        load_benchmark_class("no_such_module_here:Thing")
    with pytest.raises(InvalidBenchmarkError, match="no class named Missing"):
        load_benchmark_class("sample_benchmarks:Missing")


def test_find_benchmark_methods():
    assert find_benchmark_methods(QuickBenchmark) == ["time_sort", "time_sum", "time_sum_long"]


def test_discover_builds_one_descriptor_per_method():
    descriptors = discover("sample_benchmarks:QuickBenchmark")

    kinds = {d.method_name: d.reps_kind for d in descriptors}
    assert kinds == {
        "time_sort": RepsKind.NONE,
        "time_sum": RepsKind.NARROW,
        "time_sum_long": RepsKind.WIDE,
    }
    assert len({id(d.instance) for d in descriptors}) == 3


def test_discover_selected_methods():
    descriptors = discover("sample_benchmarks:QuickBenchmark", ["time_sum"])

    assert [d.method_name for d in descriptors] == ["time_sum"]


def test_discover_rejects_unknown_methods():
    with pytest.raises(InvalidBenchmarkError, match="time_nope"):
        discover("sample_benchmarks:QuickBenchmark", ["time_nope"])


def test_discover_requires_benchmark_methods():
    with pytest.raises(InvalidBenchmarkError, match="declares no benchmark methods"):
        discover("sample_benchmarks:EmptyBenchmark")
