"""
Benchmark workers package.
Each worker implements the Worker lifecycle for one kind of benchmark.
"""

import random as _random
from typing import Dict, Mapping, Optional, Type

from ..benchmark.descriptor import BenchmarkDescriptor, RepsKind
from .base import Worker
from .macro import MacrobenchmarkWorker
from .options import WorkerOptions
from .runtime import INITIAL_REPS, MicroWorker, PicoWorker, RuntimeWorker, calculate_target_reps
from .timer import SystemTicker, Stopwatch, Ticker

# Registry of available workers
WORKERS: Dict[str, Type[Worker]] = {
    "micro": MicroWorker,
    "pico": PicoWorker,
    "macro": MacrobenchmarkWorker,
}

WORKER_FOR_REPS_KIND = {
    RepsKind.NARROW: "micro",
    RepsKind.WIDE: "pico",
    RepsKind.NONE: "macro",
}


def get_worker(
    name: str,
    descriptor: BenchmarkDescriptor,
    ticker: Optional[Ticker] = None,
    options: Optional[Mapping[str, str]] = None,
    random: Optional[_random.Random] = None,
) -> Worker:
    """
    Get a worker instance by name.

    Args:
        name: Worker name (e.g., 'micro', 'macro')
        descriptor: Benchmark to run
        ticker: Clock used for timing (default: SystemTicker)
        options: Worker option mapping
        random: Random source for batch sizes (runtime workers only)

    Returns:
        Worker instance

    Raises:
        ValueError: If worker is not found
    """
    worker_class = WORKERS.get(name.lower())
    if not worker_class:
        available = ", ".join(WORKERS.keys())
        raise ValueError(f"Unknown worker: {name}. Available: {available}")

    if issubclass(worker_class, RuntimeWorker):
        return worker_class(descriptor, ticker=ticker, options=options, random=random)
    return worker_class(descriptor, ticker=ticker, options=options)


def worker_name_for(descriptor: BenchmarkDescriptor) -> str:
    """Registry name of the worker matching a benchmark's reps parameter."""
    return WORKER_FOR_REPS_KIND[descriptor.reps_kind]


def worker_for(
    descriptor: BenchmarkDescriptor,
    ticker: Optional[Ticker] = None,
    options: Optional[Mapping[str, str]] = None,
    random: Optional[_random.Random] = None,
) -> Worker:
    """Create the worker matching a benchmark's method signature."""
    return get_worker(worker_name_for(descriptor), descriptor, ticker, options, random)


def list_workers() -> list:
    """List all available worker names."""
    return list(WORKERS.keys())


__all__ = [
    "Worker",
    "RuntimeWorker",
    "MicroWorker",
    "PicoWorker",
    "MacrobenchmarkWorker",
    "WorkerOptions",
    "Ticker",
    "SystemTicker",
    "Stopwatch",
    "INITIAL_REPS",
    "calculate_target_reps",
    "get_worker",
    "worker_for",
    "worker_name_for",
    "list_workers",
    "WORKERS",
]
