"""Race-performance prediction formulas."""

from .vdot import (
    INTERVAL_DISTANCES_M,
    RIEGEL_EXPONENT,
    ZONE_DEFINITIONS,
    IntervalSplit,
    PaceZone,
    RaceDistance,
    RacePrediction,
    RacePredictionReport,
    calculate_race_predictions,
    calculate_riegel,
    calculate_vdot,
    derive_pace_zones,
    predict_from_score,
    predict_time_from_vdot,
)

__all__ = [
    "INTERVAL_DISTANCES_M",
    "RIEGEL_EXPONENT",
    "ZONE_DEFINITIONS",
    "IntervalSplit",
    "PaceZone",
    "RaceDistance",
    "RacePrediction",
    "RacePredictionReport",
    "calculate_race_predictions",
    "calculate_riegel",
    "calculate_vdot",
    "derive_pace_zones",
    "predict_from_score",
    "predict_time_from_vdot",
]
