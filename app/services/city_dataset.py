"""
City Dataset

Loads the bundled national municipality list once per process. Rows are
expected to carry ``city``, ``state_id``, ``lat``, ``lng`` and ``population``;
numeric fields may arrive as numeric-looking strings.
"""
import json
import logging
import math
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from app.config import get_settings
from app.models.schemas import CityRecord
from app.services.exceptions import DatasetError

logger = logging.getLogger(__name__)

CityDataset = tuple[CityRecord, ...]


def _to_float(value: Any) -> Optional[float]:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _to_int(value: Any) -> Optional[int]:
    number = _to_float(value)
    return int(number) if number is not None else None


def _to_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_city_row(row: dict) -> CityRecord:
    """Convert one raw dataset row into a CityRecord."""
    return CityRecord(
        name=_to_str(row.get("city")),
        state=_to_str(row.get("state_id")),
        latitude=_to_float(row.get("lat")),
        longitude=_to_float(row.get("lng")),
        population=_to_int(row.get("population")),
    )


def parse_city_rows(rows: list) -> CityDataset:
    """Parse a list of raw rows, dropping anything that is not an object."""
    records = [parse_city_row(row) for row in rows if isinstance(row, dict)]
    return tuple(records)


def load_city_dataset(path: Path) -> CityDataset:
    """
    Load the city dataset from a JSON file.

    Args:
        path: Location of the JSON array of city objects

    Returns:
        Immutable tuple of CityRecord in file order

    Raises:
        DatasetError: If the file is missing, unreadable or not a JSON array
    """
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise DatasetError(str(path), "file not found") from e
    except OSError as e:
        raise DatasetError(str(path), str(e)) from e
    except json.JSONDecodeError as e:
        raise DatasetError(str(path), f"invalid JSON ({e.msg} at line {e.lineno})") from e

    if not isinstance(raw, list):
        raise DatasetError(str(path), "expected a JSON array of city objects")

    dataset = parse_city_rows(raw)
    incomplete = sum(1 for record in dataset if not record.is_complete)
    logger.info(f"Loaded {len(dataset):,} cities from {path} ({incomplete:,} incomplete)")
    return dataset


@lru_cache
def get_city_dataset() -> CityDataset:
    """Process-wide dataset, loaded on first use."""
    return load_city_dataset(get_settings().cities_data_path)
