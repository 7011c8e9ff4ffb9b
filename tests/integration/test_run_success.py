from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
import pytest

from inventory_compliance.cli.__main__ import main as cli_main

"""End-to-end directory run: workbooks in ./data, results JSON in ./output."""

pytestmark = pytest.mark.integration


def test_directory_run_writes_results(temp_workdir: Path, write_config, make_workbook, inventory_rows, capsys):
    make_workbook("sede_norte.xlsx", inventory_rows)
    make_workbook("sede_sur.xlsx", inventory_rows[:2], sheet_name="Equipos")

    code = cli_main([])

    out = capsys.readouterr().out
    assert code == 0
    assert "SUMMARY files=2/2 success=2 failed=0 rows=5 passing=2 failing=3" in out

    north = json.loads((temp_workdir / "output" / "results-sede_norte.json").read_text(encoding="utf-8"))
    south = json.loads((temp_workdir / "output" / "results-sede_sur.json").read_text(encoding="utf-8"))
    assert north["sheet"] == "Inventario"
    assert south["sheet"] == "Equipos"
    assert north["statistics"]["totalProcessors"] == 3
    assert north["statistics"]["ram"]["distribution"] == {"16 GB": 1, "8 GB": 1, "4 GB": 1}
    assert [row["Hostname"] for row in north["rows"]] == ["PC-001", "PC-002", "PC-003"]
    assert north["rows"][2]["Motivo Incumplimiento"] == "Insufficient capacity: 4 GB (requires 8 GB or more)"
    # nothing went wrong, so no error log
    assert list((temp_workdir / "logs").iterdir()) == []


def test_header_row_and_sheet_name(temp_workdir: Path, write_config):
    path = temp_workdir / "data" / "inventario.xlsx"
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame([["x"]]).to_excel(writer, sheet_name="Portada", header=False, index=False)
        pd.DataFrame(
            [
                ["Inventario de equipos 2024", None],
                ["CPU", "RAM"],
                ["Intel Core i7-8700 3.2 GHz", 16384],
            ]
        ).to_excel(writer, sheet_name="Equipos", header=False, index=False)
    write_config.write_text(
        write_config.read_text(encoding="utf-8").replace("header_row: 1", "header_row: 2")
        + "sheet_name: Equipos\n",
        encoding="utf-8",
    )

    assert cli_main([]) == 0

    payload = json.loads((temp_workdir / "output" / "results-inventario.json").read_text(encoding="utf-8"))
    row = payload["rows"][0]
    assert row["RAM Normalizada"] == "16 GB"
    assert row["Cumple Requisitos"] == "Sí"
    assert payload["columns"] == {"processor": "CPU", "memory": "RAM", "storage": None}


def test_processor_only_dataset(temp_workdir: Path, write_config, make_workbook, capsys):
    make_workbook(
        "cpus.xlsx",
        [
            {"Procesador": "Intel(R) Core(TM) i5-8500 @ 3.00GHz"},
            {"Procesador": "Intel Celeron N4000"},
        ],
    )

    assert cli_main(["--lang", "en"]) == 0

    payload = json.loads((temp_workdir / "output" / "results-cpus.json").read_text(encoding="utf-8"))
    first, second = payload["rows"]
    assert first["Meets Requirements"] == "Yes"
    assert "RAM Normalized" not in first
    assert second["Failure Reason"] == "Does not meet brand/model requirements: Intel Celeron"
    assert payload["statistics"]["ram"]["total"] == 0
    assert "rows=2 passing=1 failing=1" in capsys.readouterr().out
