# Shared pytest fixtures
from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Any, Callable

import pandas as pd
import pytest

from inventory_compliance.config.rules import default_rule_set
from inventory_compliance.logging.init import reset_logging
from inventory_compliance.models.rule_set import RuleSet


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("INVENTORY_RULES_FILE", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
header_row: 1
output_directory: ./output
header_language: es
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "inventory.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def rules() -> RuleSet:
    return default_rule_set()


@pytest.fixture()
def inventory_rows() -> list[dict[str, Any]]:
    return [
        {
            "Hostname": "PC-001",
            "Procesador (marca y modelo)": "Intel(R) Core(TM) i5-8500 @ 3.00GHz",
            "Memoria RAM": "16384",
            "Disco Duro": "512 GB SSD",
        },
        {
            "Hostname": "PC-002",
            "Procesador (marca y modelo)": "AMD Ryzen 5 2600",
            "Memoria RAM": "8 GB DDR4",
            "Disco Duro": "1 TB",
        },
        {
            "Hostname": "PC-003",
            "Procesador (marca y modelo)": "Intel Core i7-10700K 3.8 GHz",
            "Memoria RAM": "4GB",
            "Disco Duro": "256 SSD",
        },
    ]


@pytest.fixture()
def make_workbook(temp_workdir: Path) -> Callable[..., Path]:
    """Factory writing a one-sheet .xlsx into ./data (pandas + openpyxl)."""

    def _make(name: str, rows: list[dict[str, Any]], sheet_name: str = "Inventario") -> Path:
        path = temp_workdir / "data" / name
        pd.DataFrame(rows).to_excel(path, sheet_name=sheet_name, index=False, engine="openpyxl")
        return path

    return _make


@pytest.fixture(autouse=True)
def _fresh_logging():
    reset_logging()
    yield
    reset_logging()
