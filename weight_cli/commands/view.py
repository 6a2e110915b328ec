"""List and plot commands."""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Dict, List, Optional

import typer

from weight_cli.commands.common import fail, get_state, load_window, print_json_payload
from weight_cli.core.config import (
    ConfigError,
    resolve_list_days,
    resolve_plot_size,
    resolve_plot_targets,
    resolve_plot_weeks,
)
from weight_cli.core.constants import MAX_LOOKBACK_DAYS, MAX_LOOKBACK_WEEKS
from weight_cli.core.errors import WeightError
from weight_cli.core.series import record_to_payload, rolling_daily_average, weight_extrema
from weight_cli.render.chart import build_chart
from weight_cli.render.table import build_table, plain_lines
from weight_cli.utils.formatting import window_label
from weight_cli.utils.parsing import parse_targets


def list_command(
    ctx: typer.Context,
    num_days: Optional[int] = typer.Argument(
        None, min=0, max=MAX_LOOKBACK_DAYS, help="Number of days to list (default from config)"
    ),
    all_records: bool = typer.Option(False, "--all", "-a", help="List all data"),
) -> None:
    """List recent weight records."""
    state = get_state(ctx)
    days = num_days if num_days is not None else resolve_list_days(state.config)
    lookback = None if all_records else timedelta(days=days)

    try:
        records = load_window(state, lookback)
    except WeightError as exc:
        fail(state, str(exc), prefix="List failed")

    label = window_label(None if all_records else days, "day")
    if state.json_output:
        payload = {
            "window": {"days": None if all_records else days, "all": all_records},
            "count": len(records),
            "records": [record_to_payload(record) for record in records],
        }
        print_json_payload(state, payload)
        return

    if state.plain_output:
        for line in plain_lines(records):
            typer.echo(line)
        return

    state.console.print(label)
    state.console.print(build_table(records))


def _resolve_targets(config: Dict[str, Any], raw: Optional[str]) -> List[float]:
    try:
        targets = parse_targets(raw)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--targets")
    if targets is None:
        try:
            targets = resolve_plot_targets(config)
        except ConfigError as exc:
            raise typer.BadParameter(str(exc), param_hint="--targets")
    return targets


def plot_command(
    ctx: typer.Context,
    num_weeks: Optional[int] = typer.Argument(
        None, min=0, max=MAX_LOOKBACK_WEEKS, help="Number of weeks to plot (default from config)"
    ),
    minmax: bool = typer.Option(False, "--minmax", "-m", help="Plot min & max over the displayed period"),
    targets: Optional[str] = typer.Option(
        None,
        "--targets",
        "-t",
        help="Comma-separated target weights drawn as horizontal lines (default from config)",
    ),
    all_records: bool = typer.Option(False, "--all", "-a", help="Plot all data"),
) -> None:
    """Plot the weight trend with a daily average."""
    state = get_state(ctx)
    weeks = num_weeks if num_weeks is not None else resolve_plot_weeks(state.config)
    levels = _resolve_targets(state.config, targets)
    lookback = None if all_records else timedelta(weeks=weeks)

    width, height = resolve_plot_size(state.config)
    try:
        records = load_window(state, lookback)
        if state.json_output:
            payload: Dict[str, Any] = {
                "window": {"weeks": None if all_records else weeks, "all": all_records},
                "count": len(records),
                "records": [record_to_payload(record) for record in records],
                "daily_avg": rolling_daily_average(records),
                "targets": levels,
            }
            if minmax:
                wmin, wmax = weight_extrema(records)
                payload["min"] = wmin
                payload["max"] = wmax
            print_json_payload(state, payload)
            return

        chart = build_chart(
            records,
            minmax=minmax,
            targets=levels,
            width=width,
            height=height,
            color=not state.plain_output,
        )
    except WeightError as exc:
        fail(state, str(exc), prefix="Plot failed")

    label = window_label(None if all_records else weeks, "week")
    if state.plain_output:
        typer.echo(label)
    else:
        state.console.print(label)
    typer.echo(chart)
