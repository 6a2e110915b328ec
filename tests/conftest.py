from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
from typer.testing import CliRunner

from weight_cli.core.models import WeightRecord
from weight_cli.core.series import record_to_item


class FakeStore:
    """In-memory stand-in for WeightStore."""

    def __init__(self, items: Optional[List[Dict[str, Any]]] = None, table_name: str = "weight-test") -> None:
        self.items = list(items or [])
        self.table_name = table_name
        self.put_records: List[WeightRecord] = []
        self.deleted: List[str] = []

    def scan(self) -> List[Dict[str, Any]]:
        return list(self.items)

    def put(self, record: WeightRecord) -> Dict[str, Any]:
        self.put_records.append(record)
        item = record_to_item(record)
        self.items.append(item)
        return item

    def delete(self, key: str) -> Dict[str, Any]:
        self.deleted.append(key)
        return {"timestamp": {"S": key}}


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("WEIGHT_CONFIG_FILE", str(tmp_path / "missing-config.toml"))
    monkeypatch.delenv("WEIGHT_TABLE_NAME", raising=False)
    monkeypatch.setattr(
        "weight_cli.core.config.legacy_config_path",
        lambda: tmp_path / "missing-legacy.toml",
    )


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def sample_items() -> List[Dict[str, Any]]:
    return [
        {"timestamp": {"S": "02/14/2026-20:00:00"}, "weight": {"N": "82.0"}},
        {
            "timestamp": {"S": "02/14/2026-08:00:00"},
            "weight": {"N": "80.0"},
            "workout": {"S": "run"},
            "calories": {"N": "350.0"},
        },
        {"timestamp": {"S": "02/10/2026-08:00:00"}, "weight": {"N": "81.5"}},
    ]


@pytest.fixture()
def sample_records() -> List[WeightRecord]:
    return [
        WeightRecord(datetime(2026, 2, 10, 8, 0, 0), 81.5),
        WeightRecord(datetime(2026, 2, 14, 8, 0, 0), 80.0, workout="run", calories=350.0),
        WeightRecord(datetime(2026, 2, 14, 20, 0, 0), 82.0),
    ]


@pytest.fixture()
def fake_store(sample_items: List[Dict[str, Any]]) -> FakeStore:
    return FakeStore(sample_items)


@pytest.fixture()
def use_store(monkeypatch: pytest.MonkeyPatch):
    def _use(store: FakeStore) -> FakeStore:
        monkeypatch.setattr("weight_cli.core.state.CLIState.make_store", lambda self: store)
        return store

    return _use


@pytest.fixture()
def write_temp_json(tmp_path: Path):
    def _write(name: str, payload: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload, indent=2) + "\n")
        return path

    return _write


@pytest.fixture()
def write_temp_text(tmp_path: Path):
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content.strip() + "\n")
        return path

    return _write


@pytest.fixture()
def store_factory():
    return FakeStore
