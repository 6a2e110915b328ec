"""Formatting helpers used by console output."""

from __future__ import annotations

from typing import Optional


def format_weight(kg: Optional[float]) -> str:
    """Format weight with two decimals."""
    if kg is None:
        return "-"
    return f"{float(kg):.2f}"


def format_calories(calories: Optional[float]) -> str:
    if calories is None:
        return "-"
    return f"{float(calories):.2f}"


def format_level(value: float) -> str:
    """Format a reference level without a trailing .0 for whole numbers."""
    return f"{value:g}"


def window_label(count: Optional[int], unit: str) -> str:
    """Describe the displayed window, e.g. '2 days data:'."""
    if count is None:
        return "all data:"
    return f"{count} {unit}{'s' if count != 1 else ''} data:"
