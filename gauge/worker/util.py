"""
Helpers shared by worker implementations.
"""

import gc
import logging

logger = logging.getLogger(__name__)

_UNITS = (
    (24 * 60 * 60 * 10**9, "d"),
    (60 * 60 * 10**9, "h"),
    (60 * 10**9, "min"),
    (10**9, "s"),
    (10**6, "ms"),
    (10**3, "μs"),
)


def force_gc() -> None:
    """
    Ask the runtime to reclaim memory before a timed measurement.

    This is a hint: collections may still happen inside timed regions, which
    the randomized batch sizes average out.
    """
    collected = gc.collect()
    logger.debug(f"Forced garbage collection, {collected} objects collected")


def format_nanos(nanos: int) -> str:
    """
    Format a duration in the largest unit that keeps it whole-ish.

    Example:
        format_nanos(5000) -> "5μs"
        format_nanos(1500000) -> "1.5ms"
    """
    for size, unit in _UNITS:
        if nanos >= size:
            return f"{nanos / size:g}{unit}"
    return f"{nanos}ns"
