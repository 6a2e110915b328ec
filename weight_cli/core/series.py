"""Read, normalize and derive logic for weight series."""

from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Protocol, Sequence, Tuple

from weight_cli.core.constants import KEY_FIELD, NUMBER_TAG, ROLLING_HALF_WINDOW, STRING_TAG
from weight_cli.core.errors import EmptySeries, MalformedRecord
from weight_cli.core.models import WeightRecord
from weight_cli.utils.timestamps import format_long, parse_long

Item = Dict[str, Dict[str, str]]


class ItemScanner(Protocol):
    def scan(self) -> List[Item]:
        ...


def _attribute(item: Dict[str, Any], name: str, tag: str) -> str:
    attr = item.get(name)
    if not isinstance(attr, dict) or tag not in attr:
        raise MalformedRecord(f"Item field '{name}' is missing or not of type {tag}: {item!r}")
    return str(attr[tag])


def _number(item: Dict[str, Any], name: str) -> float:
    raw = _attribute(item, name, NUMBER_TAG)
    try:
        value = float(raw)
    except ValueError:
        raise MalformedRecord(f"Item field '{name}' is not numeric: {raw!r}") from None
    if not math.isfinite(value):
        raise MalformedRecord(f"Item field '{name}' is not a finite number: {raw!r}")
    return value


def parse_record(item: Dict[str, Any]) -> WeightRecord:
    """Convert a raw store item into a WeightRecord."""
    raw_ts = _attribute(item, KEY_FIELD, STRING_TAG)
    try:
        timestamp = parse_long(raw_ts)
    except ValueError:
        raise MalformedRecord(f"Item timestamp has unexpected format: {raw_ts!r}") from None

    weight = _number(item, "weight")

    has_workout = "workout" in item
    has_calories = "calories" in item
    if has_workout != has_calories:
        raise MalformedRecord(f"Item {raw_ts} has only one of workout/calories")

    workout: Optional[str] = None
    calories: Optional[float] = None
    if has_workout:
        workout = _attribute(item, "workout", STRING_TAG)
        calories = _number(item, "calories")

    return WeightRecord(timestamp=timestamp, weight=weight, workout=workout, calories=calories)


def record_to_item(record: WeightRecord) -> Item:
    """Serialize a record into the store's attribute-value item format."""
    item: Item = {
        KEY_FIELD: {STRING_TAG: format_long(record.timestamp)},
        "weight": {NUMBER_TAG: str(float(record.weight))},
    }
    if record.workout is not None and record.calories is not None:
        item["workout"] = {STRING_TAG: record.workout}
        item["calories"] = {NUMBER_TAG: str(float(record.calories))}
    return item


def sort_records(records: Iterable[WeightRecord]) -> List[WeightRecord]:
    return sorted(records, key=lambda record: record.timestamp)


def load_series(store: ItemScanner) -> List[WeightRecord]:
    """Scan the store and return all records sorted by timestamp."""
    return sort_records(parse_record(item) for item in store.scan())


def filter_window(
    records: Sequence[WeightRecord],
    lookback: Optional[timedelta],
) -> List[WeightRecord]:
    """Keep records within `lookback` of the latest record.

    `records` must already be sorted ascending. A `lookback` of None keeps
    everything.
    """
    if not records:
        raise EmptySeries("No weight records found")
    if lookback is None:
        return list(records)
    if lookback < timedelta(0):
        raise ValueError(f"lookback must not be negative, got {lookback}")

    latest = records[-1].timestamp
    if lookback >= latest - datetime.min:
        return list(records)
    cutoff = latest - lookback
    return [record for record in records if record.timestamp >= cutoff]


def rolling_daily_average(
    records: Sequence[WeightRecord],
    half_window: timedelta = ROLLING_HALF_WINDOW,
) -> List[float]:
    """Centered mean of weights within +/- half_window of each record."""
    averages: List[float] = []
    for record in records:
        lower = record.timestamp - half_window
        upper = record.timestamp + half_window
        window = [other.weight for other in records if lower <= other.timestamp <= upper]
        averages.append(sum(window) / len(window))
    return averages


def weight_extrema(records: Sequence[WeightRecord]) -> Tuple[float, float]:
    """Return (min, max) weight over the series."""
    if not records:
        raise EmptySeries("No weight records found")
    weights = [record.weight for record in records]
    return min(weights), max(weights)


def record_to_payload(record: WeightRecord) -> Dict[str, Any]:
    """JSON-friendly view of a record for --json output."""
    return {
        "timestamp": format_long(record.timestamp),
        "weight": record.weight,
        "workout": record.workout,
        "calories": record.calories,
    }
