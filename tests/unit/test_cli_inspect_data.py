from __future__ import annotations

from pathlib import Path

from inventory_compliance.cli.__main__ import main as cli_main


def test_cli_inspect_data_branch(temp_workdir: Path, write_config: Path, make_workbook, inventory_rows, capsys):
    """--inspect-data prints header, discovered columns and sample rows, then exits."""
    make_workbook("inventario.xlsx", inventory_rows)

    code = cli_main(["--inspect-data"])

    out = capsys.readouterr().out
    assert code == 0
    assert 'FILE: inventario.xlsx' in out
    assert 'SHEET: Inventario cols=' in out
    assert 'columns: processor=Procesador (marca y modelo) memory=Memoria RAM storage=Disco Duro' in out
    assert 'sample_rows=' in out
    # no analysis happens in this mode
    assert 'SUMMARY' not in out
    assert not (temp_workdir / "output").exists()


def test_cli_inspect_data_reports_unreadable_files(temp_workdir: Path, write_config: Path, capsys):
    (temp_workdir / 'data' / 'broken.xlsx').write_bytes(b"test")

    code = cli_main(["--inspect-data"])

    out = capsys.readouterr().out
    assert code == 0
    assert 'FILE: broken.xlsx' in out
    assert 'read_error:' in out


def test_cli_inspect_data_without_processor_column(temp_workdir: Path, write_config: Path, make_workbook, capsys):
    make_workbook("otro.xlsx", [{"Hostname": "PC-1"}])
    assert cli_main(["--inspect-data"]) == 0
    assert 'columns: no processor column found' in capsys.readouterr().out
