from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .statistics import AggregateStatistics

"""Processing result models for directory analysis runs.

ProcessingResult carries everything the SUMMARY line needs plus the
fleet-wide statistics folded over the records of every successful workbook.
"""

__all__ = [
    "FileStat",
    "ProcessingResult",
]


@dataclass(frozen=True)
class FileStat:
    """Per-workbook processing statistics."""
    file_name: str
    status: str  # success/failed
    rows: int
    passing: int
    failing: int
    elapsed_seconds: float
    error: str | None = None


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results for one run over the source directory."""
    success_files: int
    failed_files: int
    total_rows: int
    passing_rows: int
    failing_rows: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    statistics: AggregateStatistics | None = None  # None when no rows were analysed
    file_stats: list[FileStat] | None = None

    @property
    def compliance_rate(self) -> float:
        if self.total_rows == 0:
            return 0.0
        return self.passing_rows / self.total_rows * 100
