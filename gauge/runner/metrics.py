"""
Summary of the measurements collected during one trial.
"""

import statistics
from dataclasses import dataclass
from typing import Dict, Any, Iterable


@dataclass
class TrialSummary:
    """
    Time per repetition over one trial's measurements.

    All times are in nanoseconds per repetition.
    """
    count: int = 0
    total_reps: float = 0.0
    weighted_mean: float = 0.0
    min: float = 0.0
    median: float = 0.0
    max: float = 0.0
    unit: str = "ns"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "count": self.count,
            "total_reps": self.total_reps,
            "weighted_mean": self.weighted_mean,
            "min": self.min,
            "median": self.median,
            "max": self.max,
            "unit": self.unit,
        }


def summarize(measurements: Iterable) -> TrialSummary:
    """
    Summarize measurements as time per repetition.

    Each measurement contributes value / weight; the weighted mean divides the
    total time by the total number of repetitions.
    """
    measurements = list(measurements)
    if not measurements:
        return TrialSummary()

    per_rep = sorted(m.value.magnitude / m.weight for m in measurements)
    total_value = sum(m.value.magnitude for m in measurements)
    total_reps = sum(m.weight for m in measurements)

    return TrialSummary(
        count=len(measurements),
        total_reps=total_reps,
        weighted_mean=total_value / total_reps,
        min=per_rep[0],
        median=statistics.median(per_rep),
        max=per_rep[-1],
        unit=f"{measurements[0].value.unit}/op",
    )
