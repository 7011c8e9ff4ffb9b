from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from .dataset_record import ColumnMapping, DatasetRecord
from .statistics import AggregateStatistics

"""ExcelFile domain model and FileStatus enum.

An ExcelFile is the processing context of one inventory workbook, tracking
its status from discovery to success/failure along with the records and
statistics it produced.
"""


class FileStatus(Enum):
    """Status enum for the workbook processing lifecycle.

    State transitions: pending -> processing -> (success | failed)
    """
    PENDING = "pending"
    PROCESSING = "processing"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class ExcelFile:
    path: Path
    name: str
    sheet: str | None = None  # Analysed sheet name
    start_time: datetime | None = None
    end_time: datetime | None = None
    status: FileStatus = FileStatus.PENDING
    columns: ColumnMapping | None = None
    records: list[DatasetRecord] = field(default_factory=list)
    statistics: AggregateStatistics | None = None
    output_rows: list[dict[str, Any]] = field(default_factory=list)
    error: str | None = None  # Failure reason summary

    @property
    def total_rows(self) -> int:
        return len(self.records)
