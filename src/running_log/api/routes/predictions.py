"""
Race Prediction API Routes

Race calculator, pace zones and the two forecasters. Every endpoint works
only on its request; nothing is stored.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Query
from pydantic import BaseModel, ConfigDict, Field, PositiveFloat

from ...config import get_settings
from ...metrics.vdot import calculate_race_predictions, derive_pace_zones
from ...models.records import PerformanceRecord
from ...analysis.forecast import linear_forecast, vdot_weighted_forecast

logger = logging.getLogger(__name__)
router = APIRouter()


# =============================================================================
# Request Models
# =============================================================================

class PredictionRequest(BaseModel):
    """One observed performance for the race calculator."""
    model_config = ConfigDict(allow_inf_nan=False)

    distance_km: float = Field(..., description="Distance run in km", examples=[5.0])
    time_seconds: int = Field(..., description="Time taken in seconds", examples=[1200])
    targets_km: Optional[List[PositiveFloat]] = Field(
        None,
        description="Distances to predict (defaults to the configured targets)",
    )


class LinearForecastRequest(BaseModel):
    """An ordered series to extend."""
    series: List[float] = Field(..., description="Values, oldest first")
    periods: int = Field(1, ge=1, le=52, description="Points to project")


class VdotForecastRequest(BaseModel):
    """Recent performances to forecast from."""
    records: List[PerformanceRecord]
    target_distance_km: float = Field(..., gt=0)
    window: Optional[int] = Field(None, ge=1, description="Most recent records to average")


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/predictions")
def predict(request: PredictionRequest):
    """
    Run the race calculator.

    Returns VDOT, Riegel and VDOT-model predictions for each target
    distance, and the five training pace zones.
    """
    targets = request.targets_km or get_settings().prediction_distances_km
    report = calculate_race_predictions(request.distance_km, request.time_seconds, targets)
    return report.to_dict()


@router.get("/pace-zones")
def pace_zones(vdot: float = Query(..., gt=0, description="VDOT score")):
    """Training pace zones for a VDOT score."""
    return {
        "vdot": vdot,
        "zones": [zone.to_dict() for zone in derive_pace_zones(vdot)],
    }


@router.post("/forecast/linear")
def forecast_linear(request: LinearForecastRequest):
    """Least-squares projection of a series; empty for fewer than two points."""
    return {"forecast": linear_forecast(request.series, request.periods)}


@router.post("/forecast/vdot")
def forecast_vdot(request: VdotForecastRequest):
    """Predicted time from the mean VDOT of the most recent records."""
    window = request.window or get_settings().forecast_window
    seconds = vdot_weighted_forecast(request.records, request.target_distance_km, window)
    logger.debug(f"VDOT forecast for {request.target_distance_km:g} km: {seconds}")
    return {
        "target_distance_km": request.target_distance_km,
        "time_seconds": seconds,
    }
