"""Running log: race-performance prediction and training-log analysis."""

__version__ = "0.1.0"
