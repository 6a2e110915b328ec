"""Terminal line chart of weight series."""

from __future__ import annotations

from typing import List, Optional, Sequence

import plotext as plt

from weight_cli.core.constants import DEFAULT_PLOT_HEIGHT, DEFAULT_PLOT_WIDTH
from weight_cli.core.errors import EmptySeries
from weight_cli.core.models import WeightRecord
from weight_cli.core.series import rolling_daily_average, weight_extrema
from weight_cli.utils.formatting import format_level
from weight_cli.utils.timestamps import format_short

MAX_TICKS = 6


def _hours_since_start(records: Sequence[WeightRecord]) -> List[float]:
    start = records[0].timestamp
    return [(record.timestamp - start).total_seconds() / 3600.0 for record in records]


def _tick_indices(count: int, max_ticks: int = MAX_TICKS) -> List[int]:
    if count <= max_ticks:
        return list(range(count))
    step = (count - 1) / (max_ticks - 1)
    return sorted({round(i * step) for i in range(max_ticks)})


def build_chart(
    records: Sequence[WeightRecord],
    minmax: bool = False,
    targets: Optional[Sequence[float]] = None,
    width: int = DEFAULT_PLOT_WIDTH,
    height: int = DEFAULT_PLOT_HEIGHT,
    color: bool = True,
) -> str:
    """Render raw weights, the daily average and reference lines as text."""
    if not records:
        raise EmptySeries("No weight records to plot")

    xs = _hours_since_start(records)
    weights = [record.weight for record in records]
    averages = rolling_daily_average(records)

    plt.clear_figure()
    plt.plotsize(width, height)
    if not color:
        plt.theme("clear")

    plt.plot(xs, weights, label="raw data")
    plt.plot(xs, averages, label="daily avg.")

    if minmax:
        wmin, wmax = weight_extrema(records)
        plt.plot(xs, [wmin] * len(xs), label=f"min ({format_level(wmin)})")
        plt.plot(xs, [wmax] * len(xs), label=f"max ({format_level(wmax)})")

    for target in targets or []:
        plt.plot(xs, [target] * len(xs), label=f"target ({format_level(target)})")

    ticks = _tick_indices(len(records))
    plt.xticks([xs[i] for i in ticks], [format_short(records[i].timestamp) for i in ticks])
    plt.xlabel("time")
    plt.ylabel("kg")
    return plt.build()
