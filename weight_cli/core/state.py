"""Runtime state container for CLI context."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from rich.console import Console

from weight_cli.core.config import resolve_aws_credentials, resolve_table_name
from weight_cli.core.store import WeightStore


@dataclass
class CLIState:
    """Output options, loaded configuration and the shared console."""

    json_output: bool
    plain_output: bool
    verbose: bool
    quiet: bool
    config_path: Path
    config: Dict[str, Any]
    console: Console

    def debug(self, message: str) -> None:
        """Print a diagnostic line when --verbose is set."""
        if self.verbose and not self.json_output:
            self.console.log(message)

    def make_store(self) -> WeightStore:
        """Build the item store from the loaded configuration."""
        table_name = resolve_table_name(self.config)
        credentials = resolve_aws_credentials(self.config)
        self.debug(
            f"Using table {table_name} with "
            f"{'configured' if credentials else 'ambient'} AWS credentials"
        )
        return WeightStore(table_name=table_name, credentials=credentials)
