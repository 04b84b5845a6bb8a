"""
Exceptions raised by the benchmark harness.
"""


class GaugeError(Exception):
    """Base exception for harness errors."""
    pass


class ConfigurationError(GaugeError):
    """Raised when an option or setting has an invalid value."""
    pass


class InvalidBenchmarkError(GaugeError):
    """Raised when a benchmark cannot be run as written."""

    def __init__(self, message: str, *args):
        if args:
            message = message % args
        super().__init__(message)
