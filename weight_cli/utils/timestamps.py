"""Timestamp parsing and formatting helpers."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

import typer

from weight_cli.core.constants import (
    DT_FORMAT_LONG,
    DT_FORMAT_LONG_HUMAN,
    DT_FORMAT_SHORT,
    DT_FORMAT_SHORT_HUMAN,
)


def format_long(value: datetime) -> str:
    """Format datetime as the stored key (MM/DD/YYYY-HH:MM:SS)."""
    return value.strftime(DT_FORMAT_LONG)


def format_short(value: datetime) -> str:
    """Format datetime for display (MM/DD HH:MM)."""
    return value.strftime(DT_FORMAT_SHORT)


def parse_long(value: str) -> datetime:
    """Parse a stored key timestamp. Raises ValueError on mismatch."""
    return datetime.strptime(value, DT_FORMAT_LONG)


def parse_short(value: str, now: Optional[datetime] = None) -> datetime:
    """Parse MM/DD HH:MM, filling in the year from `now`."""
    year = (now or datetime.now()).year
    # Prefix the year before parsing so Feb 29 resolves in leap years.
    return datetime.strptime(f"{year}/{value.strip()}", f"%Y/{DT_FORMAT_SHORT}")


def parse_user_timestamp(value: str, now: Optional[datetime] = None) -> datetime:
    """Parse a user-supplied timestamp in short or long form."""
    text = value.strip()
    try:
        return parse_long(text)
    except ValueError:
        pass
    try:
        return parse_short(text, now=now)
    except ValueError:
        raise ValueError(
            f"Invalid timestamp '{value}'. Expected {DT_FORMAT_SHORT_HUMAN} "
            f"or {DT_FORMAT_LONG_HUMAN}"
        ) from None


def validate_long_timestamp(value: Optional[str]) -> Optional[str]:
    """Typer callback that validates the stored key format."""
    if value is None:
        return value
    try:
        parse_long(value)
    except ValueError:
        raise typer.BadParameter(
            f"Invalid timestamp '{value}'. Expected format: {DT_FORMAT_LONG_HUMAN} "
            "(e.g. 02/14/2026-07:30:00)"
        )
    return value


def validate_user_timestamp(value: Optional[str]) -> Optional[str]:
    """Typer callback for --timestamp on track."""
    if value is None:
        return value
    try:
        parse_user_timestamp(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc))
    return value
