"""
Worker options parsed from the string mapping handed to each worker.
"""

from dataclasses import dataclass
from typing import Mapping, Optional

from ..errors import ConfigurationError

DEFAULT_TIMING_INTERVAL_NANOS = 5000
DEFAULT_GC_BEFORE_EACH = True

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off"}


def parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid value for {name}: '{raw}' (expected true or false)")


@dataclass(frozen=True)
class WorkerOptions:
    """
    Options shared by all workers.

    Attributes:
        timing_interval_nanos: Target duration of a single timed batch
        gc_before_each: Force garbage collection before each measurement
    """
    timing_interval_nanos: int = DEFAULT_TIMING_INTERVAL_NANOS
    gc_before_each: bool = DEFAULT_GC_BEFORE_EACH

    @classmethod
    def from_map(cls, option_map: Optional[Mapping[str, str]] = None) -> "WorkerOptions":
        """
        Parse options from a name -> string mapping.

        Missing keys fall back to defaults; other keys are ignored.

        Raises:
            ConfigurationError: If a value cannot be parsed
        """
        option_map = option_map or {}

        timing_interval_nanos = DEFAULT_TIMING_INTERVAL_NANOS
        raw = option_map.get("timingIntervalNanos")
        if raw is not None and str(raw).strip():
            try:
                timing_interval_nanos = int(str(raw).strip())
            except ValueError:
                raise ConfigurationError(
                    f"Invalid value for timingIntervalNanos: '{raw}' (expected an integer)"
                ) from None
            if timing_interval_nanos <= 0:
                raise ConfigurationError(
                    f"timingIntervalNanos must be positive, got {timing_interval_nanos}"
                )

        gc_before_each = DEFAULT_GC_BEFORE_EACH
        raw = option_map.get("gcBeforeEach")
        if raw is not None and str(raw).strip():
            gc_before_each = parse_bool("gcBeforeEach", str(raw))

        return cls(timing_interval_nanos=timing_interval_nanos, gc_before_each=gc_before_each)
