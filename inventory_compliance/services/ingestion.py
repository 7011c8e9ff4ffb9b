from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any, Callable

from ..classifiers.memory import classify_memory
from ..classifiers.processor import describe_processor
from ..classifiers.storage import classify_storage
from ..logging.error_log import ErrorLogBuffer
from ..models.dataset_record import ColumnMapping, Component, ComponentResult, DatasetRecord
from ..models.error_record import ErrorRecord
from ..models.hardware import (
    UNKNOWN_LABEL,
    Brand,
    ClassificationStatus,
    ClassifiedMemory,
    ClassifiedProcessor,
    ClassifiedStorage,
    DeviceType,
    MemoryType,
)
from ..models.row_data import RowData
from ..models.rule_set import RuleSet
from ..models.verdict import ComplianceVerdict
from .compliance import (
    PROCESSING_ERROR_REASON,
    combine_verdicts,
    evaluate_memory,
    evaluate_processor,
    evaluate_storage,
)

"""Dataset ingestion: rows in, DatasetRecords out.

Fatal conditions are limited to an empty dataset and a dataset without a
processor column (IngestionError). Anything that goes wrong while
classifying one component of one row is logged, recorded in the error log
buffer and turned into an ERROR-status component that fails with
"Error in processing"; the row is kept.
"""

__all__ = [
    "COLUMN_TOKENS",
    "IngestionError",
    "cell_to_text",
    "discover_columns",
    "ingest_rows",
]

logger = logging.getLogger(__name__)

# Case-insensitive substrings identifying each component's column
COLUMN_TOKENS: Mapping[Component, tuple[str, ...]] = {
    Component.PROCESSOR: ("procesador", "processor", "cpu", "micro"),
    Component.MEMORY: ("ram", "memoria", "memory"),
    Component.STORAGE: ("disco", "disk", "hdd", "ssd", "storage", "almacenamiento"),
}


class IngestionError(Exception):
    """Raised when a dataset cannot be analysed at all."""


def cell_to_text(value: Any) -> str | None:
    """Convert a spreadsheet cell to the text the classifiers expect.

    None/NaN -> None, integral floats lose their ".0" (16384.0 -> "16384"),
    everything else goes through str().
    """
    if value is None:
        return None
    if isinstance(value, float):
        if math.isnan(value):
            return None
        if value.is_integer():
            return str(int(value))
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    text = str(value).strip()
    return text or None


def _find_column(columns: Iterable[str], tokens: tuple[str, ...], taken: set[str]) -> str | None:
    for column in columns:
        if column in taken:
            continue
        lowered = column.lower()
        if any(token in lowered for token in tokens):
            return column
    return None


def discover_columns(row: Mapping[str, Any]) -> ColumnMapping:
    """Identify the processor / memory / storage columns from a row's keys.

    Processor tokens are matched first; a column claimed as processor is not
    reused for memory or storage.

    Raises:
        IngestionError: No processor column exists
    """
    columns = [str(name) for name in row.keys()]
    taken: set[str] = set()

    processor = _find_column(columns, COLUMN_TOKENS[Component.PROCESSOR], taken)
    if processor is None:
        raise IngestionError(
            f"no processor column found (looked for {', '.join(COLUMN_TOKENS[Component.PROCESSOR])}) "
            f"in columns: {columns}"
        )
    taken.add(processor)

    memory = _find_column(columns, COLUMN_TOKENS[Component.MEMORY], taken)
    if memory is not None:
        taken.add(memory)
    storage = _find_column(columns, COLUMN_TOKENS[Component.STORAGE], taken)
    return ColumnMapping(processor=processor, memory=memory, storage=storage)


def _failed_processor(text: str | None) -> ClassifiedProcessor:
    return ClassifiedProcessor(
        original_text=text or "",
        brand=Brand.UNKNOWN,
        family=UNKNOWN_LABEL,
        normalized_label=UNKNOWN_LABEL,
        status=ClassificationStatus.ERROR,
    )


def _failed_memory(text: str | None) -> ClassifiedMemory:
    return ClassifiedMemory(
        original_text=text or "",
        capacity_gb=0,
        memory_type=MemoryType.UNKNOWN,
        normalized_label=UNKNOWN_LABEL,
        status=ClassificationStatus.ERROR,
    )


def _failed_storage(text: str | None) -> ClassifiedStorage:
    return ClassifiedStorage(
        original_text=text or "",
        capacity_gb=0,
        device_type=DeviceType.UNKNOWN,
        display_capacity=0,
        display_unit="GB",
        normalized_label=UNKNOWN_LABEL,
        status=ClassificationStatus.ERROR,
    )


_PIPELINES: Mapping[Component, tuple[Callable[[Any], Any], Callable[[Any, RuleSet], ComplianceVerdict], Callable[[str | None], Any]]] = {
    Component.PROCESSOR: (describe_processor, evaluate_processor, _failed_processor),
    Component.MEMORY: (classify_memory, evaluate_memory, _failed_memory),
    Component.STORAGE: (classify_storage, evaluate_storage, _failed_storage),
}


def _classify_component(
    component: Component,
    text: str | None,
    rules: RuleSet,
    row_number: int,
    error_log: ErrorLogBuffer | None,
    source: tuple[str, str],
) -> ComponentResult[Any]:
    classify, evaluate, failed = _PIPELINES[component]
    try:
        classified = classify(text)
        return ComponentResult(classified=classified, verdict=evaluate(classified, rules))
    except Exception as e:
        logger.warning(f"row {row_number}: {component.value} classification failed: {e}")
        if error_log is not None:
            file_name, sheet = source
            error_log.append(
                ErrorRecord.create(
                    file=file_name,
                    sheet=sheet,
                    row=row_number,
                    component=component.value,
                    error_type="CLASSIFICATION_ERROR",
                    message=f"{type(e).__name__}: {e}",
                )
            )
        return ComponentResult(
            classified=failed(text),
            verdict=ComplianceVerdict.fail(PROCESSING_ERROR_REASON),
        )


def _as_row_data(rows: Iterable[RowData | Mapping[str, Any]]) -> list[RowData]:
    result: list[RowData] = []
    for index, row in enumerate(rows, start=1):
        if isinstance(row, RowData):
            result.append(row)
        else:
            result.append(RowData(row_number=index, values=dict(row)))
    return result


def ingest_rows(
    rows: Iterable[RowData | Mapping[str, Any]],
    rules: RuleSet,
    *,
    columns: ColumnMapping | None = None,
    error_log: ErrorLogBuffer | None = None,
    source: tuple[str, str] = ("<memory>", "<memory>"),
) -> tuple[ColumnMapping, list[DatasetRecord]]:
    """Classify and evaluate every row of a dataset.

    Args:
        rows: RowData objects or plain column -> value mappings
        rules: Policy every component is evaluated against
        columns: Column mapping; discovered from the first row when omitted
        error_log: Receives one ErrorRecord per absorbed component failure
        source: (file, sheet) written into error records

    Returns:
        (column mapping, one DatasetRecord per input row in input order)

    Raises:
        IngestionError: The dataset is empty or has no processor column
    """
    data = _as_row_data(rows)
    if not data:
        raise IngestionError("dataset is empty")
    mapping = columns if columns is not None else discover_columns(data[0].values)
    logger.debug(
        f"columns: processor={mapping.processor!r} memory={mapping.memory!r} storage={mapping.storage!r}"
    )

    column_for = {
        Component.PROCESSOR: mapping.processor,
        Component.MEMORY: mapping.memory,
        Component.STORAGE: mapping.storage,
    }

    records: list[DatasetRecord] = []
    for row in data:
        results: dict[Component, ComponentResult[Any]] = {}
        for component, column in column_for.items():
            if column is None:
                results[component] = ComponentResult(classified=None, verdict=ComplianceVerdict.not_applicable())
                continue
            text = cell_to_text(row.values.get(column))
            results[component] = _classify_component(component, text, rules, row.row_number, error_log, source)

        records.append(
            DatasetRecord(
                row_number=row.row_number,
                raw_fields=dict(row.values),
                processor=results[Component.PROCESSOR],
                memory=results[Component.MEMORY],
                storage=results[Component.STORAGE],
                verdict=combine_verdicts(*(results[c].verdict for c in Component)),
            )
        )
    return mapping, records
