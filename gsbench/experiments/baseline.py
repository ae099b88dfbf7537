"""Baseline persistence.

A baseline is the RunStatistics of an earlier measurement, stored as JSON:

    {"data": {"Ackley": [{"dim": 10, "success_rate": 1.0, ...}, ...], ...}}

Python's float repr round-trips exactly, so a saved baseline loads back
field-for-field identical, in the same order.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict
import json
import logging
import numbers

from ..models.stats import STAT_FIELDS, RunStatistics, StatPoint

logger = logging.getLogger(__name__)


class BaselineLoadError(Exception):
    """Raised when a baseline file is missing or malformed."""


def save_baseline(stats: RunStatistics, path: str | Path) -> Path:
    """Write run statistics to a JSON file.

    Args:
        stats: Statistics to persist
        path: Output file (parent directories are created)

    Returns:
        Path written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        json.dump(stats.to_dict(), f, indent=2)
    logger.debug(f"Wrote {sum(len(p) for _, p in stats.items())} stat points to {path}")
    return path


def load_baseline(path: str | Path) -> RunStatistics:
    """Load run statistics from a JSON file.

    Raises:
        BaselineLoadError: If the file is missing, is not valid JSON, or does
            not have the expected structure
    """
    path = Path(path)
    try:
        with open(path, 'r') as f:
            document = json.load(f)
    except FileNotFoundError as e:
        raise BaselineLoadError(f"Baseline file not found: {path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise BaselineLoadError(f"Failed to read baseline {path}: {e}") from e

    return stats_from_document(document, source=str(path))


def stats_from_document(document: Any, source: str = "<document>") -> RunStatistics:
    """Build RunStatistics from a decoded baseline document."""
    if not isinstance(document, dict) or not isinstance(document.get("data"), dict):
        raise BaselineLoadError(f"{source}: expected an object with a 'data' mapping")

    stats = RunStatistics()
    for name, records in document["data"].items():
        if not isinstance(records, list):
            raise BaselineLoadError(f"{source}: entry for {name!r} is not a list")
        for i, record in enumerate(records):
            stats.add(name, _point_from_record(record, f"{source}: {name}[{i}]"))
    return stats


def _point_from_record(record: Any, where: str) -> StatPoint:
    if not isinstance(record, dict):
        raise BaselineLoadError(f"{where}: expected an object")

    missing = [k for k in STAT_FIELDS if k not in record]
    unknown = [k for k in record if k not in STAT_FIELDS]
    if missing or unknown:
        raise BaselineLoadError(f"{where}: missing fields {missing}, unknown fields {unknown}")

    values: Dict[str, Any] = {}
    for key in STAT_FIELDS:
        value = record[key]
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise BaselineLoadError(f"{where}: field {key!r} is not numeric ({value!r})")
        values[key] = value

    if not float(values["dim"]).is_integer():
        raise BaselineLoadError(f"{where}: dim must be an integer, got {values['dim']!r}")
    values["dim"] = int(values["dim"])
    return StatPoint(**{k: (v if k == "dim" else float(v)) for k, v in values.items()})
