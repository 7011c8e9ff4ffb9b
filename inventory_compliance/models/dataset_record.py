from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from .hardware import ClassifiedMemory, ClassifiedProcessor, ClassifiedStorage
from .verdict import ComplianceVerdict, RecordVerdict

"""DatasetRecord: one classified inventory row.

Records are created once per row during ingestion and never mutated; the
aggregator folds them into statistics and the output row builder flattens
them for export collaborators.
"""

__all__ = [
    "ColumnMapping",
    "Component",
    "ComponentResult",
    "DatasetRecord",
]

T = TypeVar("T", ClassifiedProcessor, ClassifiedMemory, ClassifiedStorage)


class Component(Enum):
    """Record components in verdict precedence order."""
    PROCESSOR = "processor"
    MEMORY = "memory"
    STORAGE = "storage"


@dataclass(frozen=True)
class ColumnMapping:
    """Spreadsheet columns holding each component's text."""
    processor: str
    memory: str | None = None
    storage: str | None = None


@dataclass(frozen=True)
class ComponentResult(Generic[T]):
    """Classified component plus its verdict.

    `classified` is None when the dataset has no column for the component;
    the verdict is then the not-applicable pass.
    """
    classified: T | None
    verdict: ComplianceVerdict

    @property
    def present(self) -> bool:
        return self.classified is not None


@dataclass(frozen=True)
class DatasetRecord:
    row_number: int
    raw_fields: dict[str, Any]
    processor: ComponentResult[ClassifiedProcessor]
    memory: ComponentResult[ClassifiedMemory]
    storage: ComponentResult[ClassifiedStorage]
    verdict: RecordVerdict

    def components(self) -> list[tuple[Component, ComponentResult[Any]]]:
        return [
            (Component.PROCESSOR, self.processor),
            (Component.MEMORY, self.memory),
            (Component.STORAGE, self.storage),
        ]
