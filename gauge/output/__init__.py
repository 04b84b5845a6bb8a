"""
Result processors: reports and uploads.
"""

from .reporter import Reporter
from .uploader import ResultsUploader

__all__ = [
    "Reporter",
    "ResultsUploader",
]
