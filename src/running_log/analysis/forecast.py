"""
Trend Forecasting

Projects future race results two ways:
- linear_forecast: least-squares line over an ordered series, extended
  by a number of periods
- vdot_weighted_forecast: averages the VDOT of the most recent efforts
  and predicts a finishing time from that score

race_trend builds the per-distance chart series (finish time, pace and
heart rate) with their forecasts, and analyze_race_distance ties the
distance filter and both forecasters together for one nominal distance.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from ..metrics.vdot import calculate_vdot, predict_time_from_vdot
from ..models.records import PerformanceRecord
from .filters import IndexedRecord, filter_by_distance, races_for_display

logger = logging.getLogger(__name__)


def linear_forecast(series: Sequence[float], periods: int = 1) -> List[float]:
    """
    Extend an ordered series along its least-squares line.

    The x values are the positions 0..n-1; the returned values sit at
    positions n..n-1+periods.

    Args:
        series: Ordered values (oldest first)
        periods: Number of future points to project

    Returns:
        Projected values, or an empty list for fewer than two points

    Example:
        >>> linear_forecast([1, 2, 3])
        [4.0]
    """
    n = len(series)
    if n < 2:
        return []

    sum_x = sum(range(n))
    sum_y = sum(series)
    sum_xy = sum(i * y for i, y in enumerate(series))
    sum_x2 = sum(i * i for i in range(n))

    slope = (n * sum_xy - sum_x * sum_y) / (n * sum_x2 - sum_x ** 2)
    intercept = (sum_y - slope * sum_x) / n

    return [slope * (n - 1 + i) + intercept for i in range(1, periods + 1)]


def vdot_weighted_forecast(
    records: Sequence[PerformanceRecord],
    target_distance_km: float,
    window: int = 3,
) -> Optional[float]:
    """
    Predict a time at the target distance from recent VDOT scores.

    Takes the ``window`` most recent records (newest first; records on the
    same day keep their collection order), averages the VDOT of those with
    positive distance and time, and converts the mean back to a time.

    Args:
        records: Performances to draw from, any order
        target_distance_km: Distance to predict
        window: Number of most recent records considered

    Returns:
        Predicted time in seconds, or None when no record yields a score
    """
    recent = sorted(records, key=lambda r: r.date, reverse=True)[:window]

    scores = []
    for record in recent:
        if not record.is_usable:
            logger.debug(f"Skipping {record.date} record with non-positive distance or time")
            continue
        scores.append(calculate_vdot(record.distance_km, record.time_seconds))

    if not scores:
        return None

    average = sum(scores) / len(scores)
    return predict_time_from_vdot(average, target_distance_km)


@dataclass
class RaceTrend:
    """Chart series for one distance with their linear forecasts."""

    dates: List[date] = field(default_factory=list)
    finish_times_min: List[float] = field(default_factory=list)
    finish_time_forecast: List[float] = field(default_factory=list)
    paces_min_per_km: List[float] = field(default_factory=list)
    pace_forecast: List[float] = field(default_factory=list)
    heart_rate_dates: List[date] = field(default_factory=list)
    heart_rates: List[int] = field(default_factory=list)
    heart_rate_forecast: List[float] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "dates": [d.isoformat() for d in self.dates],
            "finish_times_min": [round(t, 2) for t in self.finish_times_min],
            "finish_time_forecast": [round(t, 2) for t in self.finish_time_forecast],
            "paces_min_per_km": [round(p, 3) for p in self.paces_min_per_km],
            "pace_forecast": [round(p, 3) for p in self.pace_forecast],
            "heart_rate_dates": [d.isoformat() for d in self.heart_rate_dates],
            "heart_rates": self.heart_rates,
            "heart_rate_forecast": [round(h, 1) for h in self.heart_rate_forecast],
        }


def race_trend(races: Sequence[PerformanceRecord], periods: int = 1) -> RaceTrend:
    """
    Build the finish-time, pace and heart-rate series for a race list.

    Args:
        races: Races already filtered to one distance, oldest first
        periods: Forecast horizon for each series

    Returns:
        RaceTrend; series with fewer than two points get no forecast
    """
    usable = [race for race in races if race.is_usable]
    if len(usable) < len(races):
        logger.debug(f"Left {len(races) - len(usable)} unusable race(s) out of the trend")

    finish_times = [race.time_seconds / 60 for race in usable]
    paces = [race.time_seconds / race.distance_km / 60 for race in usable]
    with_hr = [race for race in usable if race.heart_rate_bpm]
    heart_rates = [race.heart_rate_bpm for race in with_hr]

    return RaceTrend(
        dates=[race.date for race in usable],
        finish_times_min=finish_times,
        finish_time_forecast=linear_forecast(finish_times, periods),
        paces_min_per_km=paces,
        pace_forecast=linear_forecast(paces, periods),
        heart_rate_dates=[race.date for race in with_hr],
        heart_rates=heart_rates,
        heart_rate_forecast=linear_forecast(heart_rates, periods),
    )


@dataclass
class RaceDistanceAnalysis:
    """
    Everything the race view shows for one nominal distance.

    Attributes:
        target_distance_km: Nominal distance analyzed
        races: Matching races, newest first, with collection positions
        trend: Chart series and linear forecasts
        vdot_forecast_sec: VDOT-based predicted time, if any race qualifies
    """

    target_distance_km: float
    races: List[IndexedRecord]
    trend: RaceTrend
    vdot_forecast_sec: Optional[float] = None

    @property
    def has_races(self) -> bool:
        return bool(self.races)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API responses."""
        return {
            "target_distance_km": self.target_distance_km,
            "races": [item.to_dict() for item in self.races],
            "trend": self.trend.to_dict(),
            "vdot_forecast_sec": (
                round(self.vdot_forecast_sec, 1)
                if self.vdot_forecast_sec is not None else None
            ),
        }


def analyze_race_distance(
    races: Sequence[PerformanceRecord],
    target_distance_km: float,
    periods: int = 1,
    window: int = 3,
) -> RaceDistanceAnalysis:
    """Filter races to a nominal distance and forecast the next result."""
    selected = filter_by_distance(races, target_distance_km)
    logger.info(f"{len(selected)} race(s) within band of {target_distance_km:g} km")

    return RaceDistanceAnalysis(
        target_distance_km=target_distance_km,
        races=races_for_display(races, target_distance_km),
        trend=race_trend(selected, periods),
        vdot_forecast_sec=vdot_weighted_forecast(selected, target_distance_km, window),
    )
