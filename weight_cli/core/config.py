"""Configuration loading and resolution."""

from __future__ import annotations

import copy
import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # Python 3.9-3.10
    import tomli as tomllib  # type: ignore[no-redef]

from weight_cli.core.constants import (
    AWS_CONFIG_KEYS,
    DEFAULT_LIST_DAYS,
    DEFAULT_PLOT_HEIGHT,
    DEFAULT_PLOT_WEEKS,
    DEFAULT_PLOT_WIDTH,
    DEFAULT_TABLE_NAME,
    DEFAULT_TARGETS,
    MAX_LOOKBACK_DAYS,
    MAX_LOOKBACK_WEEKS,
)


class ConfigError(RuntimeError):
    """Raised when config file parsing fails."""


@dataclass(frozen=True)
class AWSCredentials:
    """Explicit credentials for reaching the item store."""

    access_key_id: str
    secret_access_key: str
    region: str


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def expand_path(path_str: str) -> Path:
    """Expand user/env vars and return absolute path."""
    return Path(os.path.expandvars(path_str)).expanduser().resolve()


def default_config_path() -> Path:
    """Get default config file path."""
    raw = os.getenv("WEIGHT_CONFIG_FILE", "~/.config/weight-cli/config.toml")
    return expand_path(raw)


def legacy_config_path() -> Path:
    """Config file used by earlier releases of the tool."""
    return expand_path("~/.config/kai-cli.toml")


def _default_config() -> Dict[str, Any]:
    return {
        "store": {
            "table_name": DEFAULT_TABLE_NAME,
        },
        "list": {
            "default_days": DEFAULT_LIST_DAYS,
        },
        "plot": {
            "default_weeks": DEFAULT_PLOT_WEEKS,
            "targets": list(DEFAULT_TARGETS),
            "width": DEFAULT_PLOT_WIDTH,
            "height": DEFAULT_PLOT_HEIGHT,
        },
    }


DEFAULT_CONFIG: Dict[str, Any] = _default_config()


def _read_config(path: Path) -> Dict[str, Any]:
    suffix = path.suffix.lower()
    text = path.read_text()
    try:
        if suffix in {".toml", ""}:
            loaded = tomllib.loads(text)
        else:
            loaded = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in config file {path}: {exc}") from exc
    except Exception as exc:
        if suffix in {".toml", ""}:
            raise ConfigError(f"Invalid TOML in config file {path}: {exc}") from exc
        raise ConfigError(f"Failed to parse config file {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file {path} must contain an object/table at the root")
    return loaded


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from disk, merged with defaults."""
    cfg_path = path or default_config_path()
    cfg = _default_config()

    source: Optional[Path] = None
    if cfg_path.exists():
        source = cfg_path
    elif path is None:
        legacy = legacy_config_path()
        if legacy.exists():
            source = legacy

    if source:
        loaded = _read_config(source)
        cfg = _deep_merge(cfg, loaded)

    resolve_aws_credentials(cfg)
    resolve_list_days(cfg)
    resolve_plot_weeks(cfg)
    resolve_plot_size(cfg)
    resolve_plot_targets(cfg)
    return cfg


def resolve_aws_credentials(config: Dict[str, Any]) -> Optional[AWSCredentials]:
    """Build explicit credentials from the [aws] section, if configured.

    The three keys are co-required; a section with none of them means
    ambient AWS credentials are used.
    """
    section = config.get("aws") or {}
    if not isinstance(section, dict):
        raise ConfigError("The [aws] config section must be a table")

    present = [key for key in AWS_CONFIG_KEYS if section.get(key)]
    if not present:
        return None
    if len(present) != len(AWS_CONFIG_KEYS):
        keys = ", ".join(f'"{key}"' for key in AWS_CONFIG_KEYS)
        raise ConfigError(f"Please provide all aws keys ({keys}) in the [aws] config section")

    return AWSCredentials(
        access_key_id=str(section["access_key_id"]),
        secret_access_key=str(section["secret_access_key"]),
        region=str(section["default_region"]),
    )


def resolve_table_name(config: Dict[str, Any]) -> str:
    """Resolve the store table name with env override first."""
    return os.getenv("WEIGHT_TABLE_NAME") or str(
        config.get("store", {}).get("table_name") or DEFAULT_TABLE_NAME
    )


def _section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = config.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"The [{name}] config section must be a table")
    return section


def _int_setting(config: Dict[str, Any], section: str, key: str, default: int, minimum: int, maximum: int) -> int:
    value = _section(config, section).get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{section}.{key} must be an integer, got {value!r}")
    if not minimum <= value <= maximum:
        raise ConfigError(f"{section}.{key} must be between {minimum} and {maximum}, got {value}")
    return value


def resolve_list_days(config: Dict[str, Any]) -> int:
    return _int_setting(config, "list", "default_days", DEFAULT_LIST_DAYS, 0, MAX_LOOKBACK_DAYS)


def resolve_plot_weeks(config: Dict[str, Any]) -> int:
    return _int_setting(config, "plot", "default_weeks", DEFAULT_PLOT_WEEKS, 0, MAX_LOOKBACK_WEEKS)


def resolve_plot_size(config: Dict[str, Any]) -> Tuple[int, int]:
    """Return (width, height) of the chart in terminal cells."""
    width = _int_setting(config, "plot", "width", DEFAULT_PLOT_WIDTH, 10, 10_000)
    height = _int_setting(config, "plot", "height", DEFAULT_PLOT_HEIGHT, 5, 10_000)
    return width, height


def resolve_plot_targets(config: Dict[str, Any]) -> List[float]:
    raw = _section(config, "plot").get("targets", DEFAULT_TARGETS)
    if not isinstance(raw, list):
        raise ConfigError("plot.targets must be a list of numbers")
    try:
        return [float(value) for value in raw]
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"plot.targets must be a list of numbers: {exc}") from exc
