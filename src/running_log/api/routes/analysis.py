"""Dashboard statistics and race filtering API routes."""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from ...config import get_settings
from ...models.records import RaceResult, TrainingRun
from ...analysis.forecast import analyze_race_distance
from ...analysis.stats import (
    best_effort_predictions,
    calculate_dashboard_stats,
    recent_pace_series,
    weekly_aggregation,
)

router = APIRouter()


class DashboardRequest(BaseModel):
    """Training-run snapshot, most recent first."""
    runs: List[TrainingRun]
    now: Optional[date] = Field(None, description="Reference day (defaults to today)")


class RaceFilterRequest(BaseModel):
    """Race snapshot and the nominal distance to select."""
    races: List[RaceResult]
    target_distance_km: float = Field(..., gt=0)


@router.post("/stats/dashboard")
def dashboard(request: DashboardRequest):
    """Headline stats, weekly volume, recent pace and best-effort predictions."""
    settings = get_settings()
    runs = request.runs

    predictions = best_effort_predictions(runs, settings.prediction_distances_km)
    return {
        "stats": calculate_dashboard_stats(runs, request.now or date.today()).to_dict(),
        "weekly": weekly_aggregation(runs, settings.weekly_chart_weeks).to_dict(),
        "pace": recent_pace_series(runs, settings.pace_series_runs).to_dict(),
        "predictions": predictions.to_dict() if predictions else None,
    }


@router.post("/races/filter")
def filter_races(request: RaceFilterRequest):
    """Races near a distance (newest first, with positions), trend and forecast."""
    settings = get_settings()
    analysis = analyze_race_distance(
        request.races,
        request.target_distance_km,
        periods=settings.forecast_periods,
        window=settings.forecast_window,
    )
    return analysis.to_dict()
