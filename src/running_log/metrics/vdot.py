"""
VDOT Race Predictor (Daniels' Running Formula)

Implements Jack Daniels' VDOT score plus the simplified velocity models
used to turn a score back into race times and training paces, alongside
Riegel's power-law extrapolation.

Key concepts:
- VDOT: A "pseudo-VO2max" value derived from one race performance
- Each VDOT value corresponds to a predicted time at any other distance
- Riegel's formula extrapolates a single result without any fitness score;
  the two predictors disagree on purpose and both are reported
- Training paces for: Easy, Marathon, Threshold, Interval, Repetition

All functions are pure formulas. They do not validate their inputs:
callers filter out records with non-positive distance or time.

References:
- Jack Daniels' Running Formula (3rd edition)
- Riegel, P.S. (1981). Athletic records and human endurance.
"""

import math
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Tuple

from ..exceptions import ValidationError
from ..utils.formatting import format_pace, format_split, format_time

logger = logging.getLogger(__name__)


RIEGEL_EXPONENT = 1.06

# Split distances (meters) shown for the faster zones
INTERVAL_DISTANCES_M: Tuple[int, ...] = (1200, 800, 600, 400, 300, 200)


class RaceDistance(Enum):
    """Standard prediction targets with values in kilometers."""
    TEN_K = 10.0
    HALF_MARATHON = 21.1
    MARATHON = 42.2

    @property
    def display_name(self) -> str:
        """Get human-readable name."""
        names = {
            RaceDistance.TEN_K: "10K",
            RaceDistance.HALF_MARATHON: "Half Marathon",
            RaceDistance.MARATHON: "Marathon",
        }
        return names.get(self, f"{self.value:g}K")


def distance_label(distance_km: float) -> str:
    """Display name for a target distance, standard or custom."""
    try:
        return RaceDistance(distance_km).display_name
    except ValueError:
        return f"{distance_km:g}K"


def calculate_vdot(distance_km: float, time_seconds: float) -> float:
    """
    Calculate VDOT using Daniels' formula.

    The formula accounts for:
    1. Oxygen cost of running at a given velocity
    2. Percentage of VO2max that can be sustained for the race duration

    The result is neither clamped nor rounded.

    Args:
        distance_km: Race distance in kilometers (must be positive)
        time_seconds: Race finishing time in seconds (must be positive)

    Returns:
        VDOT value (typically ~30 for beginners to ~85 for elites)

    Example:
        >>> round(calculate_vdot(5, 1200), 2)  # 5K in 20:00
        49.81
    """
    velocity_m_per_min = (distance_km * 1000 / time_seconds) * 60
    time_min = time_seconds / 60

    # Oxygen cost (ml O2/kg/min) of running at this velocity
    oxygen_cost = (
        -4.60 +
        0.182258 * velocity_m_per_min +
        0.000104 * velocity_m_per_min ** 2
    )

    # Fraction of VO2max sustainable for this duration
    pct_max = (
        0.8 +
        0.1894393 * math.exp(-0.012778 * time_min) +
        0.2989558 * math.exp(-0.1932605 * time_min)
    )

    return oxygen_cost / pct_max


def predict_time_from_vdot(vdot: float, distance_km: float) -> float:
    """
    Predict a finishing time from VDOT with a piecewise velocity model.

    The velocity curve is chosen by distance: up to 5 km, up to 15 km,
    and beyond. Boundary values belong to the lower bracket.

    Args:
        vdot: Fitness score
        distance_km: Target distance in kilometers

    Returns:
        Predicted time in seconds
    """
    if distance_km <= 5:
        velocity = 29.54 + 5.000663 * vdot - 0.007546 * vdot ** 2
    elif distance_km <= 15:
        velocity = 27.61 + 4.734 * vdot - 0.00665 * vdot ** 2
    else:
        velocity = 26.01 + 4.527 * vdot - 0.00591 * vdot ** 2

    return distance_km * 1000 / velocity * 60


def calculate_riegel(
    distance_km: float,
    time_seconds: float,
    target_distance_km: float,
) -> float:
    """
    Predict race time using Riegel's formula: T2 = T1 * (D2/D1)^1.06

    Args:
        distance_km: Distance of the known performance
        time_seconds: Time of the known performance in seconds
        target_distance_km: Distance to predict

    Returns:
        Predicted time in seconds
    """
    return time_seconds * (target_distance_km / distance_km) ** RIEGEL_EXPONENT


@dataclass(frozen=True)
class IntervalSplit:
    """Target time for one rep distance at a zone's pace."""
    distance_m: int
    time_sec: float

    @property
    def time_formatted(self) -> str:
        return format_split(self.time_sec)

    def to_dict(self) -> dict:
        return {
            "distance_m": self.distance_m,
            "time_sec": round(self.time_sec, 1),
            "time_formatted": self.time_formatted,
        }


@dataclass(frozen=True)
class PaceZone:
    """
    A training pace zone derived from VDOT.

    Attributes:
        name: Zone name (e.g., "Easy", "Threshold")
        multiplier: Fraction of the score used for this zone's velocity
        description: Training purpose and feel
        pace_sec_per_km: Target pace
        intervals: Rep splits, empty for the continuous zones
    """
    name: str
    multiplier: float
    description: str
    pace_sec_per_km: float
    intervals: Tuple[IntervalSplit, ...] = ()

    @property
    def has_intervals(self) -> bool:
        return bool(self.intervals)

    @property
    def pace_formatted(self) -> str:
        """Format pace as M:SS/km."""
        return f"{format_pace(self.pace_sec_per_km)}/km"

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "name": self.name,
            "multiplier": self.multiplier,
            "description": self.description,
            "pace_sec_per_km": round(self.pace_sec_per_km, 1),
            "pace_formatted": self.pace_formatted,
            "intervals": [split.to_dict() for split in self.intervals],
        }


# (name, multiplier, shows interval splits, description)
ZONE_DEFINITIONS: Tuple[Tuple[str, float, bool, str], ...] = (
    ("Easy", 0.70, False, "Conversational pace"),
    ("Marathon", 0.84, False, "Race pace"),
    ("Threshold", 0.88, True, "Comfortably hard"),
    ("Interval", 0.98, True, "5K pace"),
    ("Repetition", 1.0, True, "Fast bursts"),
)


def derive_pace_zones(vdot: float) -> List[PaceZone]:
    """
    Calculate the five training pace zones for a VDOT score.

    Zone velocity is ``29.54 + 5.000663 * vdot * multiplier`` (m/min).
    Threshold, Interval and Repetition also get split times for the
    standard rep distances. Non-positive scores are not special-cased.

    Args:
        vdot: VDOT value

    Returns:
        Zones in fixed order: Easy, Marathon, Threshold, Interval, Repetition
    """
    zones = []
    for name, multiplier, show_intervals, description in ZONE_DEFINITIONS:
        velocity = 29.54 + 5.000663 * vdot * multiplier
        pace_sec_per_km = 1000 / velocity * 60

        intervals: Tuple[IntervalSplit, ...] = ()
        if show_intervals:
            intervals = tuple(
                IntervalSplit(distance_m=dist, time_sec=pace_sec_per_km * (dist / 1000))
                for dist in INTERVAL_DISTANCES_M
            )

        zones.append(PaceZone(
            name=name,
            multiplier=multiplier,
            description=description,
            pace_sec_per_km=pace_sec_per_km,
            intervals=intervals,
        ))

    return zones


@dataclass(frozen=True)
class RacePrediction:
    """Predicted finishing time for one target distance."""
    distance_km: float
    time_sec: float

    @property
    def label(self) -> str:
        return distance_label(self.distance_km)

    @property
    def time_formatted(self) -> str:
        return format_time(self.time_sec)

    @property
    def pace_sec_per_km(self) -> float:
        return self.time_sec / self.distance_km

    def to_dict(self) -> dict:
        return {
            "distance": self.label,
            "distance_km": self.distance_km,
            "time_sec": int(round(self.time_sec)),
            "time_formatted": self.time_formatted,
            "pace_sec_per_km": round(self.pace_sec_per_km, 1),
            "pace_formatted": f"{format_pace(self.pace_sec_per_km)}/km",
        }


def _is_positive(value) -> bool:
    return value is not None and math.isfinite(value) and value > 0


def _target_values(targets: Iterable[float | RaceDistance]) -> List[float]:
    return [t.value if isinstance(t, RaceDistance) else float(t) for t in targets]


def predict_from_score(
    vdot: float,
    targets: Iterable[float | RaceDistance] = RaceDistance,
) -> List[RacePrediction]:
    """VDOT predictions for each target distance, in target order."""
    return [
        RacePrediction(distance_km=d, time_sec=predict_time_from_vdot(vdot, d))
        for d in _target_values(targets)
    ]


@dataclass
class RacePredictionReport:
    """
    Complete calculator result for one observed performance.

    This is the main result type returned by calculate_race_predictions().
    """
    distance_km: float
    time_seconds: int
    vdot: float
    riegel_predictions: List[RacePrediction]
    vdot_predictions: List[RacePrediction]
    pace_zones: List[PaceZone] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "distance_km": self.distance_km,
            "time_seconds": self.time_seconds,
            "time_formatted": format_time(self.time_seconds),
            "vdot": round(self.vdot, 1),
            "riegel_predictions": [p.to_dict() for p in self.riegel_predictions],
            "vdot_predictions": [p.to_dict() for p in self.vdot_predictions],
            "pace_zones": [zone.to_dict() for zone in self.pace_zones],
        }


def calculate_race_predictions(
    distance_km: float,
    time_seconds: int,
    targets: Iterable[float | RaceDistance] = RaceDistance,
) -> RacePredictionReport:
    """
    Run the race calculator for a single performance.

    This is the main entry point for calculator input: it checks the
    model's preconditions, then reports VDOT, Riegel and VDOT predictions
    for each target, and the pace-zone table.

    Args:
        distance_km: Distance run in kilometers
        time_seconds: Time taken in seconds
        targets: Distances to predict (defaults to 10K, half, marathon)

    Returns:
        RacePredictionReport

    Raises:
        ValidationError: If distance, time or any target is not a positive
            finite number
    """
    if not _is_positive(distance_km):
        raise ValidationError("Please enter a valid distance", field="distance_km")
    if not _is_positive(time_seconds):
        raise ValidationError("Please enter a valid time", field="time_seconds")

    target_values = _target_values(targets)
    invalid = [t for t in target_values if not _is_positive(t)]
    if invalid:
        raise ValidationError(
            "Prediction distances must be positive",
            field="targets_km",
            details={"invalid": [str(t) for t in invalid]},
        )
    vdot = calculate_vdot(distance_km, time_seconds)
    logger.debug(f"VDOT {vdot:.2f} from {distance_km} km in {time_seconds}s")

    riegel = [
        RacePrediction(distance_km=d, time_sec=calculate_riegel(distance_km, time_seconds, d))
        for d in target_values
    ]

    return RacePredictionReport(
        distance_km=distance_km,
        time_seconds=time_seconds,
        vdot=vdot,
        riegel_predictions=riegel,
        vdot_predictions=predict_from_score(vdot, target_values),
        pace_zones=derive_pace_zones(vdot),
    )
