"""Parsing helpers for CLI values and record input files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml


def parse_targets(value: Optional[str]) -> Optional[List[float]]:
    """Parse comma-separated reference levels, e.g. '80,82.5'.

    Returns None when the option was not given and an empty list for an
    empty string, which disables reference lines.
    """
    if value is None:
        return None
    targets: List[float] = []
    for part in value.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            targets.append(float(part))
        except ValueError:
            raise ValueError(f"Invalid target '{part}': expected a number") from None
    return targets


def load_record_input(file_path: Optional[Path], read_stdin: bool = False, stdin_text: str = "") -> List[Dict[str, Any]]:
    """Load record object(s) from a JSON/YAML file or stdin text."""
    raw_data: Any
    if file_path:
        text = file_path.read_text()
        if file_path.suffix.lower() in {".yaml", ".yml"}:
            raw_data = yaml.safe_load(text)
        else:
            raw_data = json.loads(text)
    elif read_stdin:
        text = stdin_text.strip()
        if not text:
            return []
        try:
            raw_data = json.loads(text)
        except json.JSONDecodeError:
            raw_data = yaml.safe_load(text)
    else:
        return []

    if isinstance(raw_data, dict):
        return [raw_data]
    if isinstance(raw_data, list):
        return [item for item in raw_data if isinstance(item, dict)]
    return []
