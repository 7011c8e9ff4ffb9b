"""Domain models for the hardware inventory compliance classifier."""

from .config_models import AppConfig
from .dataset_record import ColumnMapping, Component, ComponentResult, DatasetRecord
from .error_record import ErrorRecord
from .excel_file import ExcelFile, FileStatus
from .hardware import (
    Brand,
    ClassificationStatus,
    ClassifiedMemory,
    ClassifiedProcessor,
    ClassifiedStorage,
    DeviceType,
    MemoryType,
)
from .processing_result import FileStat, ProcessingResult
from .row_data import RowData
from .rule_set import FamilyRule, OtherProcessorRule, RamRule, RuleSet, SpeedTier, StorageRule
from .statistics import AggregateStatistics, MemoryStatistics, StorageStatistics
from .verdict import ComplianceVerdict, RecordVerdict

__all__ = [
    # Configuration models
    "AppConfig",
    "FamilyRule",
    "OtherProcessorRule",
    "RamRule",
    "RuleSet",
    "SpeedTier",
    "StorageRule",
    # Classification models
    "Brand",
    "ClassificationStatus",
    "ClassifiedMemory",
    "ClassifiedProcessor",
    "ClassifiedStorage",
    "DeviceType",
    "MemoryType",
    # Verdicts and records
    "ColumnMapping",
    "Component",
    "ComponentResult",
    "ComplianceVerdict",
    "DatasetRecord",
    "RecordVerdict",
    "RowData",
    # Processing models
    "ErrorRecord",
    "ExcelFile",
    "FileStat",
    "FileStatus",
    "ProcessingResult",
    # Statistics
    "AggregateStatistics",
    "MemoryStatistics",
    "StorageStatistics",
]
