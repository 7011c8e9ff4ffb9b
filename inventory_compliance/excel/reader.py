from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.row_data import RowData

"""Inventory workbook reader.

Workbooks are read with pandas (openpyxl engine) without a header so the
header row can be chosen per configuration. Rows above the header are
ignored, fully empty rows are skipped, and NaN cells become None.
"""

__all__ = [
    "SheetData",
    "SheetHeaderError",
    "read_excel_file",
    "sheet_to_rows",
]


class SheetHeaderError(Exception):
    """Raised when the configured header row is missing or empty."""


@dataclass
class SheetData:
    sheet_name: str
    columns: list[str]
    rows: list[RowData]


def read_excel_file(path: Path, sheet_name: str | None = None) -> tuple[str, pd.DataFrame]:
    """Read one sheet of a workbook as a raw DataFrame.

    Args:
        path: Workbook path (.xlsx)
        sheet_name: Sheet to read; None reads the first sheet

    Returns:
        (sheet name, DataFrame with integer column labels)

    Raises:
        ValueError: The requested sheet does not exist
    """
    with pd.ExcelFile(path, engine="openpyxl") as xls:
        names = [str(n) for n in xls.sheet_names]
        if sheet_name is None:
            target = names[0]
        elif sheet_name in names:
            target = sheet_name
        else:
            raise ValueError(f"sheet '{sheet_name}' not found in {path.name} (available: {names})")
        df = xls.parse(target, header=None)
    return target, df


def _column_names(header: list[Any]) -> list[str]:
    columns: list[str] = []
    for index, value in enumerate(header):
        name = "" if pd.isna(value) else str(value).strip()
        columns.append(name or f"Column {index + 1}")
    return columns


def sheet_to_rows(df: pd.DataFrame, sheet_name: str, header_row: int = 1) -> SheetData:
    """Apply the header row and convert the data rows to RowData.

    Steps:
    1. Validate the sheet has the header row (1-based `header_row`)
    2. Take column names from it; blank names become "Column N"
    3. Every following non-empty row becomes a RowData numbered by its
       worksheet row
    """
    header_index = header_row - 1
    if df.shape[0] <= header_index or df.iloc[header_index].isna().all():
        raise SheetHeaderError(f"sheet '{sheet_name}' lacks a header in row {header_row}")

    columns = _column_names(df.iloc[header_index].tolist())
    rows: list[RowData] = []
    for offset, (_, raw) in enumerate(df.iloc[header_index + 1:].iterrows()):
        if raw.isna().all():
            continue
        values: dict[str, Any] = {}
        for col, val in zip(columns, raw.tolist(), strict=False):
            values[col] = None if pd.isna(val) else val
        rows.append(RowData(row_number=header_row + offset + 1, values=values))

    return SheetData(sheet_name=sheet_name, columns=columns, rows=rows)
