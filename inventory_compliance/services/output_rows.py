from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from ..classifiers.memory import format_gb
from ..classifiers.storage import format_storage_size
from ..models.dataset_record import DatasetRecord

"""Flat output rows for export collaborators.

Each row is the original spreadsheet fields followed by the appended
classification fields. Spanish column names are the default because the
existing spreadsheet and PDF exports key on them.
"""

__all__ = [
    "HEADERS",
    "build_output_row",
    "build_output_rows",
]

NOT_AVAILABLE = "N/A"

_FIELDS = (
    "processor_label",
    "processor_brand",
    "processor_family",
    "generation",
    "speed",
    "processor_passes",
    "processor_reason",
    "memory_label",
    "memory_capacity",
    "memory_type",
    "memory_passes",
    "memory_reason",
    "storage_label",
    "storage_capacity",
    "storage_type",
    "storage_passes",
    "storage_reason",
    "passes",
    "reason",
)

HEADERS: dict[str, dict[str, str]] = {
    "es": dict(zip(_FIELDS, (
        "Procesador Normalizado",
        "Marca Procesador",
        "Modelo Procesador",
        "Generación",
        "Velocidad",
        "Cumple Requisitos Procesador",
        "Motivo Incumplimiento Procesador",
        "RAM Normalizada",
        "Capacidad RAM",
        "Tipo RAM",
        "Cumple Requisitos RAM",
        "Motivo Incumplimiento RAM",
        "Almacenamiento Normalizado",
        "Capacidad Almacenamiento",
        "Tipo Almacenamiento",
        "Cumple Requisitos Almacenamiento",
        "Motivo Incumplimiento Almacenamiento",
        "Cumple Requisitos",
        "Motivo Incumplimiento",
    ))),
    "en": dict(zip(_FIELDS, (
        "Processor Normalized",
        "Processor Brand",
        "Processor Model",
        "Generation",
        "Speed",
        "Processor Meets Requirements",
        "Processor Failure Reason",
        "RAM Normalized",
        "RAM Capacity",
        "RAM Type",
        "RAM Meets Requirements",
        "RAM Failure Reason",
        "Storage Normalized",
        "Storage Capacity",
        "Storage Type",
        "Storage Meets Requirements",
        "Storage Failure Reason",
        "Meets Requirements",
        "Failure Reason",
    ))),
}

_YES = {"es": "Sí", "en": "Yes"}


def _flag(passes: bool, language: str) -> str:
    return _YES[language] if passes else "No"


def build_output_row(record: DatasetRecord, language: str = "es") -> dict[str, Any]:
    """Flatten a record into original fields plus appended fields.

    Memory and storage fields are only appended when the dataset had those
    columns.

    Raises:
        ValueError: Unsupported language
    """
    if language not in HEADERS:
        raise ValueError(f"unsupported header language: {language!r} (expected one of {sorted(HEADERS)})")
    headers = HEADERS[language]
    row: dict[str, Any] = dict(record.raw_fields)

    processor = record.processor.classified
    if processor is not None:
        row[headers["processor_label"]] = processor.normalized_label
        row[headers["processor_brand"]] = processor.brand.value
        row[headers["processor_family"]] = processor.family
        row[headers["generation"]] = processor.generation or NOT_AVAILABLE
        row[headers["speed"]] = processor.speed_label or NOT_AVAILABLE
        row[headers["processor_passes"]] = _flag(record.processor.verdict.passes, language)
        row[headers["processor_reason"]] = record.processor.verdict.reason

    memory = record.memory.classified
    if memory is not None:
        row[headers["memory_label"]] = memory.normalized_label
        row[headers["memory_capacity"]] = f"{format_gb(memory.capacity_gb)} GB" if memory.capacity_gb else NOT_AVAILABLE
        row[headers["memory_type"]] = memory.memory_type.value
        row[headers["memory_passes"]] = _flag(record.memory.verdict.passes, language)
        row[headers["memory_reason"]] = record.memory.verdict.reason

    storage = record.storage.classified
    if storage is not None:
        row[headers["storage_label"]] = storage.normalized_label
        row[headers["storage_capacity"]] = (
            format_storage_size(storage.capacity_gb) if storage.capacity_gb else NOT_AVAILABLE
        )
        row[headers["storage_type"]] = storage.device_type.value
        row[headers["storage_passes"]] = _flag(record.storage.verdict.passes, language)
        row[headers["storage_reason"]] = record.storage.verdict.reason

    row[headers["passes"]] = _flag(record.verdict.overall_passes, language)
    row[headers["reason"]] = record.verdict.overall_reason
    return row


def build_output_rows(records: Iterable[DatasetRecord], language: str = "es") -> list[dict[str, Any]]:
    return [build_output_row(record, language) for record in records]
