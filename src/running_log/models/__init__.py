"""Record models."""

from .records import PerformanceRecord, RaceResult, TrainingRun

__all__ = [
    "PerformanceRecord",
    "RaceResult",
    "TrainingRun",
]
