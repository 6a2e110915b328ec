"""Shared command helpers."""

from __future__ import annotations

import json
from datetime import timedelta
from typing import Any, List, NoReturn, Optional

import typer
from rich.markup import escape

from weight_cli.core.models import WeightRecord
from weight_cli.core.series import filter_window, load_series
from weight_cli.core.state import CLIState


def get_state(ctx: typer.Context) -> CLIState:
    """Extract validated CLI state from Typer context."""
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=2)
    return state


def print_json_payload(state: CLIState, payload: Any) -> None:
    """Print JSON payload with plain-mode fallback for piping."""
    if state.plain_output:
        typer.echo(json.dumps(payload, separators=(",", ":")))
        return
    state.console.print_json(data=payload)


def fail(state: CLIState, message: str, prefix: str = "Error") -> NoReturn:
    """Report an error in the active output mode and exit with code 1."""
    if state.json_output:
        print_json_payload(state, {"status": "error", "message": message})
    elif state.plain_output:
        typer.echo("status\terror")
        typer.echo(f"message\t{message}")
    else:
        state.console.print(f"[red]{prefix}:[/red] {escape(message)}")
    raise typer.Exit(code=1)


def load_window(state: CLIState, lookback: Optional[timedelta]) -> List[WeightRecord]:
    """Scan the store and keep the trailing window of records."""
    store = state.make_store()
    records = load_series(store)
    state.debug(f"Loaded {len(records)} records from {store.table_name}")
    windowed = filter_window(records, lookback)
    state.debug(f"{len(windowed)} records within the requested window")
    return windowed
