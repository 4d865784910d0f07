"""
Record Selection

Tolerance-banded race selection by nominal distance, and the search/sort
used by the training history list. Every selection keeps each record's
position in the collection it came from, since the store addresses
updates and deletes by that position.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Sequence

from ..models.records import PerformanceRecord


# Nominal distance (km) -> accepted deviation (km)
DISTANCE_TOLERANCES_KM: Dict[float, float] = {
    5: 0.5,
    10: 1.0,
    21.1: 1.0,
    42.195: 1.0,
}
DEFAULT_TOLERANCE_KM = 1.0


@dataclass(frozen=True)
class IndexedRecord:
    """A record paired with its position in the source collection."""

    index: int
    record: PerformanceRecord

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"index": self.index, **self.record.to_payload()}


class HistorySort(str, Enum):
    """Orderings offered by the history list."""
    DATE_DESC = "date-desc"
    DATE_ASC = "date-asc"
    DISTANCE_DESC = "distance-desc"
    DISTANCE_ASC = "distance-asc"
    PACE_ASC = "pace-asc"
    PACE_DESC = "pace-desc"


def tolerance_for(target_distance_km: float) -> float:
    """Accepted deviation for a nominal distance."""
    return DISTANCE_TOLERANCES_KM.get(target_distance_km, DEFAULT_TOLERANCE_KM)


def _in_band(record: PerformanceRecord, target_distance_km: float, tolerance: float) -> bool:
    return abs(record.distance_km - target_distance_km) <= tolerance


def filter_by_distance(
    records: Sequence[PerformanceRecord],
    target_distance_km: float,
) -> List[PerformanceRecord]:
    """
    Select records within the tolerance band of a nominal distance.

    Args:
        records: Collection snapshot, any order
        target_distance_km: Nominal distance (5, 10, 21.1, 42.195 or custom)

    Returns:
        Matching records, oldest first (ties keep collection order)
    """
    return [item.record for item in filter_by_distance_indexed(records, target_distance_km)]


def filter_by_distance_indexed(
    records: Sequence[PerformanceRecord],
    target_distance_km: float,
) -> List[IndexedRecord]:
    """Same selection as filter_by_distance, keeping collection positions."""
    tolerance = tolerance_for(target_distance_km)
    selected = [
        IndexedRecord(index=i, record=record)
        for i, record in enumerate(records)
        if _in_band(record, target_distance_km, tolerance)
    ]
    selected.sort(key=lambda item: item.record.date)
    return selected


def races_for_display(
    records: Sequence[PerformanceRecord],
    target_distance_km: float,
) -> List[IndexedRecord]:
    """Newest-first variant of the distance filter for list views."""
    return list(reversed(filter_by_distance_indexed(records, target_distance_km)))


def _number_text(value: float) -> str:
    # 10.0 is stored as 10 by the store, so it must match "10" but not "10.0"
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def search_history(records: Sequence[PerformanceRecord], term: str) -> List[IndexedRecord]:
    """
    Case-insensitive search over notes, ISO date and distance.

    An empty term keeps every record.
    """
    needle = (term or "").lower()
    return [
        IndexedRecord(index=i, record=record)
        for i, record in enumerate(records)
        if needle in (record.notes or "").lower()
        or needle in record.date.isoformat()
        or needle in _number_text(record.distance_km)
    ]


def _pace_key(item: IndexedRecord) -> float:
    pace = item.record.pace_seconds_per_km
    return math.inf if pace is None else pace


def sort_history(items: Sequence[IndexedRecord], order: HistorySort | str) -> List[IndexedRecord]:
    """Sort history entries; an unknown order keeps the input order."""
    try:
        order = HistorySort(order)
    except ValueError:
        return list(items)

    if order is HistorySort.DATE_DESC:
        return sorted(items, key=lambda item: item.record.date, reverse=True)
    if order is HistorySort.DATE_ASC:
        return sorted(items, key=lambda item: item.record.date)
    if order is HistorySort.DISTANCE_DESC:
        return sorted(items, key=lambda item: item.record.distance_km, reverse=True)
    if order is HistorySort.DISTANCE_ASC:
        return sorted(items, key=lambda item: item.record.distance_km)
    if order is HistorySort.PACE_ASC:
        return sorted(items, key=_pace_key)
    return sorted(items, key=_pace_key, reverse=True)
