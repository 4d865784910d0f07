"""Trend forecasting, dashboard statistics and record selection."""

from .filters import (
    DISTANCE_TOLERANCES_KM,
    HistorySort,
    IndexedRecord,
    filter_by_distance,
    filter_by_distance_indexed,
    races_for_display,
    search_history,
    sort_history,
    tolerance_for,
)
from .forecast import (
    RaceDistanceAnalysis,
    RaceTrend,
    analyze_race_distance,
    linear_forecast,
    race_trend,
    vdot_weighted_forecast,
)
from .stats import (
    BestEffort,
    BestEffortPredictions,
    DashboardStats,
    PaceSeries,
    WeeklyVolume,
    WeeklyVolumeSummary,
    best_effort_predictions,
    calculate_dashboard_stats,
    find_best_effort,
    recent_pace_series,
    recent_runs,
    week_start,
    weekly_aggregation,
)

__all__ = [
    "DISTANCE_TOLERANCES_KM",
    "HistorySort",
    "IndexedRecord",
    "filter_by_distance",
    "filter_by_distance_indexed",
    "races_for_display",
    "search_history",
    "sort_history",
    "tolerance_for",
    "RaceDistanceAnalysis",
    "RaceTrend",
    "analyze_race_distance",
    "linear_forecast",
    "race_trend",
    "vdot_weighted_forecast",
    "BestEffort",
    "BestEffortPredictions",
    "DashboardStats",
    "PaceSeries",
    "WeeklyVolume",
    "WeeklyVolumeSummary",
    "best_effort_predictions",
    "calculate_dashboard_stats",
    "find_best_effort",
    "recent_pace_series",
    "recent_runs",
    "week_start",
    "weekly_aggregation",
]
