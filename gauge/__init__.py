"""
Gauge - micro and macro benchmark execution harness.
"""

__version__ = "1.0.0"
