"""
Record snapshot loading.

The store's "read collection" responses are saved as JSON arrays of
records. This module reads those files; it never writes them.
"""

import json
import logging
from pathlib import Path
from typing import List, Type, TypeVar

from pydantic import ValidationError as PydanticValidationError

from .exceptions import DataLoadError
from .models.records import PerformanceRecord, RaceResult, TrainingRun

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=PerformanceRecord)


def _read_array(path: Path) -> list:
    if not path.exists():
        raise DataLoadError(f"Snapshot file not found: {path}", path=str(path))

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise DataLoadError(
            f"Snapshot file is not valid JSON: {path}",
            path=str(path),
            details={"line": e.lineno, "column": e.colno},
        ) from e
    except OSError as e:
        raise DataLoadError(f"Could not read snapshot file: {e}", path=str(path)) from e

    if not isinstance(data, list):
        raise DataLoadError(
            f"Snapshot must be a JSON array of records, got {type(data).__name__}",
            path=str(path),
        )
    return data


def parse_records(payloads: list, model: Type[RecordT], source: str = "<memory>") -> List[RecordT]:
    """
    Parse raw store payloads into record models, keeping their order.

    Raises:
        DataLoadError: If any payload fails type validation
    """
    records = []
    for index, payload in enumerate(payloads):
        try:
            records.append(model.from_payload(payload))
        except PydanticValidationError as e:
            errors = [
                {"field": ".".join(str(x) for x in error["loc"]), "message": error["msg"]}
                for error in e.errors()
            ]
            raise DataLoadError(
                f"Invalid record at position {index} in {source}",
                path=source,
                details={"index": index, "errors": errors},
            ) from e
    return records


def load_runs(path: Path | str) -> List[TrainingRun]:
    """Load a training-run snapshot in the store's native order."""
    path = Path(path)
    runs = parse_records(_read_array(path), TrainingRun, source=str(path))
    logger.info(f"Loaded {len(runs)} run(s) from {path}")
    return runs


def load_races(path: Path | str) -> List[RaceResult]:
    """Load a race snapshot in the store's native order."""
    path = Path(path)
    races = parse_records(_read_array(path), RaceResult, source=str(path))
    logger.info(f"Loaded {len(races)} race(s) from {path}")
    return races
