from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

"""Fleet-wide statistics models.

`AggregateStatistics.to_dict()` produces the structure consumed by chart and
report renderers; its key names and nesting are a compatibility contract and
must not change.
"""

__all__ = [
    "AggregateStatistics",
    "MemoryStatistics",
    "StorageStatistics",
]


@dataclass(frozen=True)
class MemoryStatistics:
    total: int = 0
    passing: int = 0
    failing: int = 0
    distribution: dict[str, int] = field(default_factory=dict)  # "16 GB" -> count
    mean_capacity_gb: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "meetingRequirements": self.passing,
            "notMeetingRequirements": self.failing,
            "distribution": dict(self.distribution),
            "avg": self.mean_capacity_gb,
        }


@dataclass(frozen=True)
class StorageStatistics:
    total: int = 0
    passing: int = 0
    failing: int = 0
    by_type: dict[str, int] = field(default_factory=dict)
    by_capacity: dict[str, int] = field(default_factory=dict)  # "1 TB" -> count
    mean_capacity_gb: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "meetingRequirements": self.passing,
            "notMeetingRequirements": self.failing,
            "byType": dict(self.by_type),
            "byCapacity": dict(self.by_capacity),
            "avgCapacity": self.mean_capacity_gb,
        }


@dataclass(frozen=True)
class AggregateStatistics:
    """Counts and distributions over every record of one ingestion pass."""
    total: int
    passing: int
    failing: int
    compliance_rate: float  # percentage, 0..100
    brand_distribution: dict[str, int]
    family_distribution: dict[str, int]
    generation_distribution: dict[str, int]
    brand_family_distribution: dict[str, int]
    failure_reasons: dict[str, int]
    memory: MemoryStatistics
    storage: StorageStatistics

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalProcessors": self.total,
            "meetingRequirements": self.passing,
            "notMeetingRequirements": self.failing,
            "complianceRate": self.compliance_rate,
            "brandDistribution": dict(self.brand_distribution),
            "modelDistribution": dict(self.family_distribution),
            "generationDistribution": dict(self.generation_distribution),
            "brandModelDistribution": dict(self.brand_family_distribution),
            "failureReasons": dict(self.failure_reasons),
            "ram": self.memory.to_dict(),
            "storage": self.storage.to_dict(),
        }
