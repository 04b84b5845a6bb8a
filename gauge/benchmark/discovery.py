"""
Benchmark class loading and method discovery.
"""

import importlib
import logging
from typing import List, Optional

from ..errors import InvalidBenchmarkError
from .descriptor import BenchmarkDescriptor

logger = logging.getLogger(__name__)

BENCHMARK_METHOD_PREFIX = "time"


def load_benchmark_class(target: str) -> type:
    """
    Import a benchmark class from a "package.module:ClassName" string.

    Raises:
        InvalidBenchmarkError: If the target is malformed or cannot be resolved
    """
    module_name, sep, class_name = target.partition(":")
    if not sep or not module_name or not class_name:
        raise InvalidBenchmarkError(
            "Invalid benchmark '%s'. Expected the form 'package.module:ClassName'", target,
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise InvalidBenchmarkError("Could not import module %s: %s", module_name, e) from e

    benchmark_class = getattr(module, class_name, None)
    if not isinstance(benchmark_class, type):
        raise InvalidBenchmarkError("%s has no class named %s", module_name, class_name)

    logger.debug(f"Loaded benchmark class {benchmark_class.__qualname__} from {module_name}")
    return benchmark_class


def find_benchmark_methods(benchmark_class: type) -> List[str]:
    """List benchmark method names (public methods starting with 'time'), sorted by name."""
    names = []
    for name in dir(benchmark_class):
        if name.startswith(BENCHMARK_METHOD_PREFIX) and callable(getattr(benchmark_class, name)):
            names.append(name)
    return sorted(names)


def discover(target: str, methods: Optional[List[str]] = None) -> List[BenchmarkDescriptor]:
    """
    Build descriptors for the benchmark methods of a class.

    Each descriptor gets its own instance of the benchmark class.

    Args:
        target: "package.module:ClassName"
        methods: Restrict to these method names (default: all benchmark methods)

    Returns:
        List of BenchmarkDescriptor
    """
    benchmark_class = load_benchmark_class(target)
    available = find_benchmark_methods(benchmark_class)

    if methods:
        unknown = [m for m in methods if m not in available]
        if unknown:
            raise InvalidBenchmarkError(
                "Unknown benchmark methods for %s: %s. Available: %s",
                benchmark_class.__name__, ", ".join(unknown), ", ".join(available) or "none",
            )
        selected = list(methods)
    else:
        selected = available

    if not selected:
        raise InvalidBenchmarkError(
            "%s declares no benchmark methods (methods starting with '%s')",
            benchmark_class.__name__, BENCHMARK_METHOD_PREFIX,
        )

    return [BenchmarkDescriptor.create(benchmark_class, name) for name in selected]
