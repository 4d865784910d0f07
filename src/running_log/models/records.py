"""
Performance records: training runs and race results.

Records arrive as snapshots of the external store's two collections. The
store's JSON keys (``distance``, ``time``, ``hr``, ``raceName``...) are
accepted as aliases, so a record can be built either from a store payload
or from Python field names.
"""

import datetime as dt
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import RecordValidationError
from ..utils.formatting import time_from_parts


class PerformanceRecord(BaseModel):
    """One logged effort. Shared shape of training runs and races."""

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
    )

    date: dt.date = Field(..., description="Calendar date of the effort")
    distance_km: float = Field(..., alias="distance", description="Distance in kilometers")
    time_seconds: int = Field(..., alias="time", description="Total elapsed seconds")
    heart_rate_bpm: Optional[int] = Field(None, alias="hr", description="Average heart rate")
    cadence_spm: Optional[int] = Field(None, alias="cadence", description="Average cadence")
    notes: Optional[str] = Field(None, description="Free text")

    @property
    def is_usable(self) -> bool:
        """Whether the performance model can score this record."""
        return self.distance_km > 0 and self.time_seconds > 0

    @property
    def pace_seconds_per_km(self) -> Optional[float]:
        """Average pace in sec/km, None when distance is not positive."""
        if self.distance_km <= 0:
            return None
        return self.time_seconds / self.distance_km

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]):
        """Parse one record from a store snapshot. Only types are checked."""
        return cls.model_validate(payload)

    def to_payload(self) -> Dict[str, Any]:
        """Serialize back to the store's JSON shape."""
        return self.model_dump(by_alias=True, mode="json")


class TrainingRun(PerformanceRecord):
    """A logged training run."""

    elevation_m: Optional[int] = Field(None, alias="elevation", description="Elevation gain in meters")

    @classmethod
    def from_submission(
        cls,
        *,
        date: Optional[dt.date | str],
        distance_km: Optional[float],
        hours: int = 0,
        minutes: int = 0,
        seconds: int = 0,
        heart_rate_bpm: Optional[int] = None,
        cadence_spm: Optional[int] = None,
        elevation_m: Optional[int] = None,
        notes: str = "",
    ) -> "TrainingRun":
        """
        Build a run from form inputs, enforcing the store's creation rules.

        Empty optional numbers (None or 0) are stored as absent.

        Raises:
            RecordValidationError: If date or distance is missing, distance is
                not positive, or the composed time is not positive
        """
        time_seconds = _check_submission(date, distance_km, hours, minutes, seconds)
        try:
            return cls(
                date=date,
                distance_km=distance_km,
                time_seconds=time_seconds,
                heart_rate_bpm=heart_rate_bpm or None,
                cadence_spm=cadence_spm or None,
                elevation_m=elevation_m or None,
                notes=notes,
            )
        except PydanticValidationError as e:
            raise _submission_error(e) from e


class RaceResult(PerformanceRecord):
    """A race result. The pace is stored redundantly for display."""

    race_name: str = Field(..., alias="raceName", description="Name of the race")
    race_type: Optional[str] = Field(None, alias="raceType", description="Category tag")
    pace_sec_per_km: Optional[float] = Field(None, alias="pace", description="time / distance")

    @model_validator(mode="before")
    @classmethod
    def _derive_pace(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        if data.get("pace") is not None or data.get("pace_sec_per_km") is not None:
            return data

        distance = data.get("distance", data.get("distance_km"))
        seconds = data.get("time", data.get("time_seconds"))
        try:
            distance = float(distance)
            seconds = float(seconds)
        except (TypeError, ValueError):
            return data
        if distance <= 0:
            return data
        return {**data, "pace": seconds / distance}

    @classmethod
    def from_submission(
        cls,
        *,
        race_name: Optional[str],
        date: Optional[dt.date | str],
        distance_km: Optional[float],
        hours: int = 0,
        minutes: int = 0,
        seconds: int = 0,
        heart_rate_bpm: Optional[int] = None,
        race_type: Optional[str] = None,
        notes: str = "",
    ) -> "RaceResult":
        """
        Build a race from form inputs, enforcing the store's creation rules.

        Raises:
            RecordValidationError: If the race name is blank, date or distance
                is missing, distance is not positive, or the composed time is
                not positive
        """
        if not race_name or not race_name.strip():
            raise RecordValidationError(
                "Please fill in race name, date, and distance",
                field="race_name",
            )
        time_seconds = _check_submission(date, distance_km, hours, minutes, seconds)
        try:
            return cls(
                race_name=race_name.strip(),
                race_type=race_type,
                date=date,
                distance_km=distance_km,
                time_seconds=time_seconds,
                heart_rate_bpm=heart_rate_bpm or None,
                notes=notes,
            )
        except PydanticValidationError as e:
            raise _submission_error(e) from e


def _check_submission(
    date: Optional[dt.date | str],
    distance_km: Optional[float],
    hours: int,
    minutes: int,
    seconds: int,
) -> int:
    if not date:
        raise RecordValidationError("Please fill in date and distance", field="date")
    if not distance_km or distance_km <= 0:
        raise RecordValidationError(
            "Please fill in date and distance",
            field="distance_km",
            details={"distance_km": distance_km},
        )

    time_seconds = time_from_parts(hours, minutes, seconds)
    if time_seconds <= 0:
        raise RecordValidationError(
            "Please enter a valid time",
            field="time_seconds",
            details={"time_seconds": time_seconds},
        )
    return time_seconds


def _submission_error(exc: PydanticValidationError) -> RecordValidationError:
    errors = [
        {"field": ".".join(str(x) for x in error["loc"]), "message": error["msg"]}
        for error in exc.errors()
    ]
    return RecordValidationError("Invalid record submission", details={"errors": errors})
