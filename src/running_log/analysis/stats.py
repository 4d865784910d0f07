"""
Dashboard Statistics

Aggregates over the training-run collection: headline numbers, weekly
volume buckets, the best effort by VDOT and the recent pace series.

The collection is expected in the store's native order (most recent
first). Averages over no usable data are None rather than 0, so callers
can tell "no runs" from "zero".
"""

import logging
import math
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..metrics.vdot import RaceDistance, RacePrediction, calculate_vdot, predict_from_score
from ..models.records import PerformanceRecord

logger = logging.getLogger(__name__)


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _mean(values: Sequence[float]) -> Optional[float]:
    if not values:
        return None
    return sum(values) / len(values)


@dataclass
class BestEffort:
    """The run with the highest VDOT and its position in the collection."""

    index: int
    vdot: float
    record: PerformanceRecord

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "index": self.index,
            "vdot": round(self.vdot, 1),
            "date": self.record.date.isoformat(),
            "distance_km": self.record.distance_km,
            "time_seconds": self.record.time_seconds,
        }


@dataclass
class DashboardStats:
    """Headline numbers for the dashboard."""

    total_runs: int
    weekly_volume_km: float
    average_pace_sec_per_km: Optional[float]
    average_heart_rate: Optional[int]
    best_effort: Optional[BestEffort]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "total_runs": self.total_runs,
            "weekly_volume_km": round(self.weekly_volume_km, 2),
            "average_pace_sec_per_km": (
                round(self.average_pace_sec_per_km, 1)
                if self.average_pace_sec_per_km is not None else None
            ),
            "average_heart_rate": self.average_heart_rate,
            "best_effort": self.best_effort.to_dict() if self.best_effort else None,
        }


@dataclass
class WeeklyVolume:
    """Distance total for one Sunday-started week."""

    week_start: date
    distance_km: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "week_start": self.week_start.isoformat(),
            "distance_km": round(self.distance_km, 2),
        }


@dataclass
class WeeklyVolumeSummary:
    """The most recent week buckets plus their mean as a reference line."""

    weeks: List[WeeklyVolume] = field(default_factory=list)
    average_km: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "weeks": [w.to_dict() for w in self.weeks],
            "average_km": round(self.average_km, 2),
        }


@dataclass
class PaceSeries:
    """Per-run pace (min/km) in chronological order with its mean."""

    dates: List[date] = field(default_factory=list)
    paces_min_per_km: List[float] = field(default_factory=list)
    average_min_per_km: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dates": [d.isoformat() for d in self.dates],
            "paces_min_per_km": [round(p, 3) for p in self.paces_min_per_km],
            "average_min_per_km": (
                round(self.average_min_per_km, 3)
                if self.average_min_per_km is not None else None
            ),
        }


@dataclass
class BestEffortPredictions:
    """Best effort and the race times its VDOT predicts."""

    best_effort: BestEffort
    predictions: List[RacePrediction]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "best_effort": self.best_effort.to_dict(),
            "predictions": [p.to_dict() for p in self.predictions],
        }


def find_best_effort(runs: Sequence[PerformanceRecord]) -> Optional[BestEffort]:
    """
    Find the run with the highest VDOT.

    Runs without positive distance and time are skipped. The comparison is
    strict, so on a tie the first run encountered wins; a score must also
    beat zero to count.
    """
    best: Optional[BestEffort] = None
    best_vdot = 0.0

    for index, run in enumerate(runs):
        if not run.is_usable:
            logger.debug(f"Skipping run {index} with non-positive distance or time")
            continue
        vdot = calculate_vdot(run.distance_km, run.time_seconds)
        if vdot > best_vdot:
            best_vdot = vdot
            best = BestEffort(index=index, vdot=vdot, record=run)

    return best


def calculate_dashboard_stats(
    runs: Sequence[PerformanceRecord],
    now: date | datetime,
) -> DashboardStats:
    """
    Calculate the dashboard's headline numbers.

    Args:
        runs: Training-run collection snapshot
        now: Reference day for the 7-day volume window

    Returns:
        DashboardStats
    """
    week_ago = _as_date(now) - timedelta(days=7)
    weekly_volume = sum(run.distance_km for run in runs if run.date >= week_ago)

    paces = [run.pace_seconds_per_km for run in runs if run.distance_km > 0]
    heart_rates = [run.heart_rate_bpm for run in runs if run.heart_rate_bpm]

    if len(paces) < len(runs):
        logger.warning(f"{len(runs) - len(paces)} run(s) without positive distance left out of average pace")

    average_hr = _mean(heart_rates)

    return DashboardStats(
        total_runs=len(runs),
        weekly_volume_km=weekly_volume,
        average_pace_sec_per_km=_mean(paces),
        average_heart_rate=_round_half_up(average_hr) if average_hr is not None else None,
        best_effort=find_best_effort(runs),
    )


def week_start(day: date) -> date:
    """The Sunday on or before the given day."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def weekly_aggregation(
    runs: Iterable[PerformanceRecord],
    weeks: int = 8,
) -> WeeklyVolumeSummary:
    """
    Sum distance per Sunday-started week and keep the most recent weeks.

    Args:
        runs: Training runs, any order
        weeks: Number of most recent week buckets to keep

    Returns:
        WeeklyVolumeSummary with buckets in ascending week order
    """
    totals: Dict[date, float] = defaultdict(float)
    for run in runs:
        totals[week_start(run.date)] += run.distance_km

    keys = sorted(totals)
    kept = keys[-weeks:] if weeks > 0 else []
    buckets = [WeeklyVolume(week_start=key, distance_km=totals[key]) for key in kept]

    average = _mean([b.distance_km for b in buckets])
    return WeeklyVolumeSummary(weeks=buckets, average_km=average if average is not None else 0.0)


def recent_runs(runs: Sequence[PerformanceRecord], n: int = 5) -> List[PerformanceRecord]:
    """First n runs in the collection's native (newest-first) order."""
    return list(runs[:n])


def recent_pace_series(runs: Sequence[PerformanceRecord], n: int = 10) -> PaceSeries:
    """
    Pace of the n most recent runs, oldest first.

    Runs without positive distance have no pace and are left out.
    """
    chronological = [run for run in reversed(runs[:n]) if run.distance_km > 0]
    paces = [run.time_seconds / run.distance_km / 60 for run in chronological]

    return PaceSeries(
        dates=[run.date for run in chronological],
        paces_min_per_km=paces,
        average_min_per_km=_mean(paces),
    )


def best_effort_predictions(
    runs: Sequence[PerformanceRecord],
    targets: Iterable[float | RaceDistance] = RaceDistance,
) -> Optional[BestEffortPredictions]:
    """Race predictions from the best VDOT in the collection, if any."""
    best = find_best_effort(runs)
    if best is None:
        return None
    return BestEffortPredictions(
        best_effort=best,
        predictions=predict_from_score(best.vdot, targets),
    )
