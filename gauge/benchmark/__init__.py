"""
Benchmark description and discovery package.
"""

from .descriptor import (
    BenchmarkDescriptor,
    HookRole,
    LongReps,
    RepsKind,
    after_experiment,
    after_rep,
    before_experiment,
    before_rep,
)
from .discovery import discover, find_benchmark_methods, load_benchmark_class

__all__ = [
    "BenchmarkDescriptor",
    "HookRole",
    "LongReps",
    "RepsKind",
    "after_experiment",
    "after_rep",
    "before_experiment",
    "before_rep",
    "discover",
    "find_benchmark_methods",
    "load_benchmark_class",
]
