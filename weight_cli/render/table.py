"""Tabular rendering of weight series."""

from __future__ import annotations

from typing import List, Sequence

from rich.table import Table
from rich.text import Text

from weight_cli.core.models import WeightRecord
from weight_cli.utils.formatting import format_calories, format_weight
from weight_cli.utils.timestamps import format_short

COLUMNS = ("datetime", "weight", "workout", "calories")


def record_row(record: WeightRecord) -> List[str]:
    return [
        format_short(record.timestamp),
        format_weight(record.weight),
        record.workout if record.workout is not None else "-",
        format_calories(record.calories),
    ]


def build_table(records: Sequence[WeightRecord], title: str = "") -> Table:
    """Build a rich table with one row per record."""
    table = Table(title=title or None)
    for column in COLUMNS:
        justify = "right" if column in {"weight", "calories"} else "left"
        table.add_column(column, justify=justify, no_wrap=True)
    for record in records:
        # Cells are literal text; workout names may contain brackets.
        table.add_row(*(Text(cell) for cell in record_row(record)))
    return table


def plain_lines(records: Sequence[WeightRecord]) -> List[str]:
    """Tab-separated rows, header first, for --plain output."""
    lines = ["\t".join(COLUMNS)]
    lines.extend("\t".join(record_row(record)) for record in records)
    return lines
