"""
Trial execution package.
"""

from .trial import TrialRunner, MultiTrialRunner
from .metrics import TrialSummary, summarize

__all__ = [
    "TrialRunner",
    "MultiTrialRunner",
    "TrialSummary",
    "summarize",
]
