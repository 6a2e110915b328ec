from __future__ import annotations

import dataclasses
from datetime import datetime

import pytest

from weight_cli.core.errors import InvalidInput
from weight_cli.core.models import WeightRecord, build_record

NOW = datetime(2026, 2, 14, 9, 15, 42, 123456)


def test_build_record_defaults_to_now_truncated() -> None:
    record = build_record(80.4, now=NOW)
    assert record.timestamp == datetime(2026, 2, 14, 9, 15, 42)
    assert record.weight == 80.4
    assert not record.has_workout


def test_build_record_short_timestamp_uses_current_year() -> None:
    record = build_record(80.4, timestamp="02/10 07:30", now=NOW)
    assert record.timestamp == datetime(2026, 2, 10, 7, 30)


def test_build_record_short_timestamp_leap_day() -> None:
    record = build_record(80.4, timestamp="02/29 06:00", now=datetime(2028, 3, 1))
    assert record.timestamp == datetime(2028, 2, 29, 6, 0)


def test_build_record_accepts_long_timestamp() -> None:
    record = build_record(80.4, timestamp="12/31/2025-23:59:59", now=NOW)
    assert record.timestamp == datetime(2025, 12, 31, 23, 59, 59)


def test_build_record_with_workout_and_calories() -> None:
    record = build_record(81, workout=" swim ", calories=420, now=NOW)
    assert record.workout == "swim"
    assert record.calories == 420.0


def test_build_record_zero_calories_is_kept() -> None:
    record = build_record(81, workout="stretching", calories=0, now=NOW)
    assert record.calories == 0.0


@pytest.mark.parametrize(
    ("workout", "calories"),
    [("run", None), (None, 300.0), ("   ", 300.0)],
)
def test_build_record_requires_workout_and_calories_together(workout, calories) -> None:
    with pytest.raises(InvalidInput, match="together"):
        build_record(80, workout=workout, calories=calories, now=NOW)


@pytest.mark.parametrize("weight", [0, -1.5, float("nan")])
def test_build_record_rejects_non_positive_weight(weight: float) -> None:
    with pytest.raises(InvalidInput, match="Weight"):
        build_record(weight, now=NOW)


def test_build_record_rejects_negative_calories() -> None:
    with pytest.raises(InvalidInput, match="Calories"):
        build_record(80, workout="run", calories=-10, now=NOW)


def test_build_record_rejects_bad_timestamp() -> None:
    with pytest.raises(InvalidInput, match="Invalid timestamp"):
        build_record(80, timestamp="yesterday", now=NOW)


def test_weight_record_is_immutable() -> None:
    record = WeightRecord(NOW, 80.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.weight = 81.0  # type: ignore[misc]
