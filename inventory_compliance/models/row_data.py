from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""RowData model: one spreadsheet row after header normalization."""

__all__ = [
    "RowData",
]


@dataclass(frozen=True)
class RowData:
    """Logical representation of a single inventory row.

    `row_number` is the 1-based worksheet row the values came from (the header
    row excluded), so error records can point back at the spreadsheet.
    """
    row_number: int
    values: dict[str, Any]  # Column name -> cell value (None for empty cells)
