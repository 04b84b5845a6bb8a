"""
Data types produced by benchmark workers and consumed by result processors.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Any, Tuple, Optional


@dataclass(frozen=True)
class Value:
    """A magnitude with its unit, e.g. 1532.0 ns."""
    magnitude: float
    unit: str

    @classmethod
    def create(cls, magnitude: float, unit: str) -> "Value":
        return cls(float(magnitude), unit)

    def to_dict(self) -> Dict[str, Any]:
        return {"magnitude": self.magnitude, "unit": self.unit}


@dataclass(frozen=True)
class Measurement:
    """
    A single measurement taken by a worker.

    Attributes:
        description: What was measured (e.g. "runtime")
        value: Observed value for the whole batch
        weight: Number of repetitions the value covers
    """
    description: str
    value: Value
    weight: float = 1.0

    def __post_init__(self):
        if self.weight < 1:
            raise ValueError(f"Measurement weight must be >= 1, got {self.weight}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "description": self.description,
            "value": self.value.to_dict(),
            "weight": self.weight,
        }


@dataclass
class Run:
    """A group of trials started by one invocation of the harness."""
    label: str = ""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    started_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "started_at": self.started_at.isoformat(),
        }


@dataclass
class Trial:
    """Measurements collected by one worker for one benchmark."""
    benchmark: str
    worker: str
    run_id: Optional[str] = None
    options: Dict[str, str] = field(default_factory=dict)
    measurements: Tuple[Measurement, ...] = ()
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None

    @property
    def duration(self) -> float:
        """Wall-clock duration of the trial in seconds."""
        if self.started_at and self.finished_at:
            return (self.finished_at - self.started_at).total_seconds()
        return 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "run_id": self.run_id,
            "benchmark": self.benchmark,
            "worker": self.worker,
            "options": dict(self.options),
            "measurements": [m.to_dict() for m in self.measurements],
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
        }
