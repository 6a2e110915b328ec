"""Weight record model and write-path validation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from weight_cli.core.errors import InvalidInput
from weight_cli.utils.timestamps import parse_user_timestamp


@dataclass(frozen=True)
class WeightRecord:
    """One weight measurement, optionally annotated with a workout."""

    timestamp: datetime
    weight: float
    workout: Optional[str] = None
    calories: Optional[float] = None

    @property
    def has_workout(self) -> bool:
        return self.workout is not None


def build_record(
    weight: float,
    timestamp: Optional[str] = None,
    workout: Optional[str] = None,
    calories: Optional[float] = None,
    now: Optional[datetime] = None,
) -> WeightRecord:
    """Build a validated record from user-supplied values.

    `timestamp` may be short form (current year implied) or long form;
    when omitted the record is stamped with `now` truncated to seconds.
    """
    if workout is not None and not workout.strip():
        workout = None
    if (workout is None) != (calories is None):
        raise InvalidInput("--workout has to be provided together with --calories")

    weight = float(weight)
    if not math.isfinite(weight) or weight <= 0:
        raise InvalidInput(f"Weight must be a positive number, got {weight}")
    if calories is not None:
        calories = float(calories)
        if not math.isfinite(calories) or calories < 0:
            raise InvalidInput(f"Calories must be non-negative, got {calories}")

    current = now or datetime.now()
    if timestamp:
        try:
            dt = parse_user_timestamp(timestamp, now=current)
        except ValueError as exc:
            raise InvalidInput(str(exc)) from exc
    else:
        dt = current
    dt = dt.replace(microsecond=0)

    return WeightRecord(
        timestamp=dt,
        weight=weight,
        workout=workout.strip() if workout is not None else None,
        calories=calories,
    )
