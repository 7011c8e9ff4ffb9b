from __future__ import annotations

import json
import logging
from dataclasses import replace
from datetime import UTC, datetime
from pathlib import Path

from ..excel.reader import read_excel_file, sheet_to_rows
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.config_models import AppConfig
from ..models.dataset_record import DatasetRecord
from ..models.error_record import FILE_LEVEL
from ..models.excel_file import ExcelFile, FileStatus
from ..models.processing_result import FileStat, ProcessingResult
from ..models.rule_set import RuleSet
from .aggregator import aggregate
from .ingestion import ingest_rows
from .output_rows import build_output_rows
from .progress import ProgressTracker

logger = logging.getLogger(__name__)

"""Directory analysis orchestration.

process_all() scans the configured directory for .xlsx workbooks and
analyses them one after another:

1. read the configured sheet (first sheet by default)
2. ingest the rows (column discovery, classification, verdicts)
3. fold the records into per-workbook statistics
4. optionally write results-<workbook>.json to the output directory

A workbook that cannot be analysed (unreadable file, missing header, empty
sheet, no processor column) is marked FAILED, recorded in the error log and
skipped; the remaining workbooks are still processed.
"""

__all__ = [
    "ProcessingError",
    "analyse_workbook",
    "process_all",
    "scan_excel_files",
    "write_results",
]


class ProcessingError(Exception):
    """Fatal error preventing a directory run (e.g. missing source directory)."""


def scan_excel_files(directory: Path) -> list[Path]:
    """Return the .xlsx files of `directory` (non-recursive, sorted by name).

    Raises:
        ProcessingError: If directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")

    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")

    try:
        # "~$" files are Excel lock files of workbooks currently open
        return sorted(
            p for p in directory.iterdir()
            if p.is_file() and p.suffix == ".xlsx" and not p.name.startswith("~$")
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def analyse_workbook(
    file_path: Path,
    rules: RuleSet,
    *,
    sheet_name: str | None = None,
    header_row: int = 1,
    language: str = "es",
    error_log: ErrorLogBuffer | None = None,
) -> ExcelFile:
    """Analyse one workbook; failures are captured in the returned ExcelFile.

    Returns:
        ExcelFile with status SUCCESS (records, statistics and output rows
        filled in) or FAILED (error set)
    """
    start_time = datetime.now(UTC)
    workbook = ExcelFile(path=file_path, name=file_path.name, start_time=start_time, status=FileStatus.PROCESSING)
    sheet = sheet_name or FILE_LEVEL

    try:
        sheet, df = read_excel_file(file_path, sheet_name)
        sheet_data = sheet_to_rows(df, sheet, header_row=header_row)
        columns, records = ingest_rows(
            sheet_data.rows,
            rules,
            error_log=error_log,
            source=(file_path.name, sheet),
        )
    except Exception as e:
        logger.error(f"{file_path.name}: {e}")
        if error_log is not None:
            error_log.append(
                ErrorRecord.create(
                    file=file_path.name,
                    sheet=sheet,
                    row=-1,
                    component=FILE_LEVEL,
                    error_type=type(e).__name__.upper(),
                    message=str(e),
                )
            )
        return replace(
            workbook,
            sheet=sheet,
            end_time=datetime.now(UTC),
            status=FileStatus.FAILED,
            error=str(e),
        )

    statistics = aggregate(records)
    logger.info(
        f"{file_path.name} [{sheet}]: rows={statistics.total} passing={statistics.passing} "
        f"failing={statistics.failing}"
    )
    return replace(
        workbook,
        sheet=sheet,
        end_time=datetime.now(UTC),
        status=FileStatus.SUCCESS,
        columns=columns,
        records=records,
        statistics=statistics,
        output_rows=build_output_rows(records, language),
    )


def write_results(workbook: ExcelFile, output_directory: Path) -> Path:
    """Write results-<workbook stem>.json with the output rows and statistics."""
    output_directory.mkdir(parents=True, exist_ok=True)
    target = output_directory / f"results-{workbook.path.stem}.json"
    payload = {
        "file": workbook.name,
        "sheet": workbook.sheet,
        "columns": {
            "processor": workbook.columns.processor if workbook.columns else None,
            "memory": workbook.columns.memory if workbook.columns else None,
            "storage": workbook.columns.storage if workbook.columns else None,
        },
        "statistics": workbook.statistics.to_dict() if workbook.statistics else None,
        "rows": workbook.output_rows,
    }
    # default=str covers timestamps and numpy scalars from the raw fields
    target.write_text(json.dumps(payload, ensure_ascii=False, indent=2, default=str), encoding="utf-8")
    return target


def process_all(config: AppConfig, rules: RuleSet, *, error_log: ErrorLogBuffer | None = None) -> ProcessingResult:
    """Analyse every workbook in the configured directory.

    Args:
        config: App configuration (directory, sheet, header row, output)
        rules: Policy every record is evaluated against
        error_log: Buffer for error records; a fresh one is used when omitted

    Returns:
        ProcessingResult with per-file stats and fleet-wide statistics over
        the records of every successful workbook

    Raises:
        ProcessingError: The source directory is missing or unreadable
    """
    start_time = datetime.now(UTC)
    error_log = error_log if error_log is not None else ErrorLogBuffer()

    file_paths = scan_excel_files(Path(config.source_directory))
    output_directory = Path(config.output_directory) if config.output_directory else None

    file_stats: list[FileStat] = []
    all_records: list[DatasetRecord] = []
    success_count = 0
    failed_count = 0
    passing_rows = 0

    with ProgressTracker(len(file_paths)) as progress:
        for file_path in file_paths:
            progress.start_file(file_path)

            workbook = analyse_workbook(
                file_path,
                rules,
                sheet_name=config.sheet_name,
                header_row=config.header_row,
                language=config.header_language,
                error_log=error_log,
            )
            elapsed = (
                (workbook.end_time - workbook.start_time).total_seconds()
                if workbook.start_time and workbook.end_time
                else 0.0
            )

            if workbook.status is FileStatus.SUCCESS and workbook.statistics is not None:
                success_count += 1
                all_records.extend(workbook.records)
                passing_rows += workbook.statistics.passing
                if output_directory is not None:
                    written = write_results(workbook, output_directory)
                    logger.debug(f"results written to {written}")
                file_stats.append(
                    FileStat(
                        file_name=workbook.name,
                        status=workbook.status.value,
                        rows=workbook.total_rows,
                        passing=workbook.statistics.passing,
                        failing=workbook.statistics.failing,
                        elapsed_seconds=elapsed,
                    )
                )
            else:
                failed_count += 1
                file_stats.append(
                    FileStat(
                        file_name=workbook.name,
                        status=workbook.status.value,
                        rows=0,
                        passing=0,
                        failing=0,
                        elapsed_seconds=elapsed,
                        error=workbook.error,
                    )
                )

            progress.set_postfix(success=success_count, failed=failed_count, rows=len(all_records))
            progress.finish_file(success=workbook.status is FileStatus.SUCCESS)

    log_path = error_log.flush()
    if log_path is not None:
        logger.warning(f"errors recorded in {log_path}")

    end_time = datetime.now(UTC)
    total_rows = len(all_records)
    return ProcessingResult(
        success_files=success_count,
        failed_files=failed_count,
        total_rows=total_rows,
        passing_rows=passing_rows,
        failing_rows=total_rows - passing_rows,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        statistics=aggregate(all_records) if all_records else None,
        file_stats=file_stats,
    )
