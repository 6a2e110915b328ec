"""Record track, delete and import commands."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
import yaml
from rich.markup import escape

from weight_cli.commands.common import fail, get_state, print_json_payload
from weight_cli.core.constants import DT_FORMAT_LONG_HUMAN, DT_FORMAT_SHORT_HUMAN
from weight_cli.core.errors import InvalidInput, WeightError
from weight_cli.core.models import WeightRecord, build_record
from weight_cli.core.series import record_to_payload
from weight_cli.utils.formatting import format_weight
from weight_cli.utils.parsing import load_record_input
from weight_cli.utils.timestamps import format_long, validate_long_timestamp, validate_user_timestamp


def track_command(
    ctx: typer.Context,
    weight: float = typer.Argument(..., help="Weight in kilograms"),
    timestamp: Optional[str] = typer.Option(
        None,
        "--timestamp",
        "-t",
        help=f"Timestamp of the measurement ({DT_FORMAT_SHORT_HUMAN}, current year); defaults to now",
        callback=validate_user_timestamp,
    ),
    workout: Optional[str] = typer.Option(
        None, "--workout", "-w", help="Workout that burned the calories given by --calories"
    ),
    calories: Optional[float] = typer.Option(None, "--calories", "-c", help="Calories burned by the workout"),
) -> None:
    """Track a weight measurement."""
    state = get_state(ctx)

    try:
        record = build_record(weight=weight, timestamp=timestamp, workout=workout, calories=calories)
        item = state.make_store().put(record)
    except WeightError as exc:
        fail(state, str(exc), prefix="Track failed")

    state.debug(f"Stored item {item}")
    key = format_long(record.timestamp)
    if state.json_output:
        print_json_payload(state, {"status": "tracked", "record": record_to_payload(record)})
        return

    if state.plain_output:
        typer.echo("status\ttracked")
        typer.echo(f"timestamp\t{key}")
        typer.echo(f"weight\t{format_weight(record.weight)}")
        return

    message = f"Tracked {format_weight(record.weight)} kg at {key}"
    if record.has_workout:
        message += f" ({escape(record.workout or '')}, {record.calories:g} kcal)"
    state.console.print(message)


def delete_command(
    ctx: typer.Context,
    timestamp: str = typer.Argument(
        ...,
        help=f"Timestamp of the record to delete ({DT_FORMAT_LONG_HUMAN})",
        callback=validate_long_timestamp,
    ),
) -> None:
    """Delete a weight record by timestamp."""
    state = get_state(ctx)

    try:
        state.make_store().delete(timestamp)
    except WeightError as exc:
        fail(state, str(exc), prefix="Delete failed")

    if state.json_output:
        print_json_payload(state, {"status": "deleted", "timestamp": timestamp})
        return

    if state.plain_output:
        typer.echo("status\tdeleted")
        typer.echo(f"timestamp\t{timestamp}")
        return

    state.console.print(f"Deleted record {timestamp}")


def records_from_input(raw_records: List[Dict[str, Any]]) -> List[WeightRecord]:
    """Validate raw input objects into records, failing on the first bad one."""
    records: List[WeightRecord] = []
    for index, raw in enumerate(raw_records, 1):
        if raw.get("weight") is None:
            raise InvalidInput(f"Record {index} is missing 'weight'")
        timestamp = raw.get("timestamp")
        calories = raw.get("calories")
        try:
            record = build_record(
                weight=float(raw["weight"]),
                timestamp=str(timestamp) if timestamp is not None else None,
                workout=str(raw["workout"]) if raw.get("workout") is not None else None,
                calories=float(calories) if calories is not None else None,
            )
        except (TypeError, ValueError) as exc:
            raise InvalidInput(f"Record {index}: {exc}") from exc
        except InvalidInput as exc:
            raise InvalidInput(f"Record {index}: {exc}") from exc
        records.append(record)
    return records


def import_command(
    ctx: typer.Context,
    file: Optional[Path] = typer.Argument(
        None, exists=True, dir_okay=False, help="JSON/YAML file with record(s)"
    ),
    stdin: bool = typer.Option(False, "--stdin", help="Read JSON/YAML records from stdin"),
    dry_run: bool = typer.Option(False, help="Show records without storing them"),
) -> None:
    """Import weight records from a JSON or YAML file or stdin."""
    state = get_state(ctx)

    if file is None and not stdin:
        raise typer.BadParameter("Provide a FILE or --stdin")
    source = str(file) if file is not None else "stdin"

    stdin_text = sys.stdin.read() if stdin and file is None else ""
    try:
        raw_records = load_record_input(file_path=file, read_stdin=stdin, stdin_text=stdin_text)
    except (ValueError, yaml.YAMLError) as exc:
        fail(state, f"Could not parse {source}: {exc}", prefix="Import failed")
    if not raw_records:
        raise typer.BadParameter(f"No records found in {source}")

    try:
        records = records_from_input(raw_records)
        if not dry_run:
            store = state.make_store()
            for record in records:
                store.put(record)
                state.debug(f"Stored {format_long(record.timestamp)}")
    except WeightError as exc:
        fail(state, str(exc), prefix="Import failed")

    status = "dry-run" if dry_run else "imported"
    payloads = [record_to_payload(record) for record in records]
    if state.json_output:
        print_json_payload(state, {"status": status, "count": len(records), "records": payloads})
        return

    if state.plain_output:
        typer.echo(f"status\t{status}")
        typer.echo(f"count\t{len(records)}")
        return

    verb = "Would import" if dry_run else "Imported"
    state.console.print(f"{verb} {len(records)} record(s) from {escape(source)}")
