from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from ..classifiers.memory import format_gb
from ..classifiers.storage import format_storage_size
from ..models.dataset_record import DatasetRecord
from ..models.hardware import UNKNOWN_LABEL
from ..models.statistics import AggregateStatistics, MemoryStatistics, StorageStatistics

"""Fleet statistics.

`aggregate` is a single ordered fold over the records; statistics are always
recomputed from scratch, never updated incrementally. Distributions keep the
first-seen order of their keys so output is deterministic.
"""

__all__ = [
    "aggregate",
]


def _mean(values: list[float]) -> float:
    if not values:
        return 0.0
    return round(sum(values) / len(values), 2)


def aggregate(records: Iterable[DatasetRecord]) -> AggregateStatistics:
    """Fold records into AggregateStatistics.

    Memory and storage sub-statistics only count records where the dataset
    has the component's column. Mean capacities ignore unknown (0 GB) values.
    """
    total = passing = 0
    brands: Counter[str] = Counter()
    families: Counter[str] = Counter()
    generations: Counter[str] = Counter()
    brand_families: Counter[str] = Counter()
    reasons: Counter[str] = Counter()

    memory_total = memory_passing = 0
    memory_sizes: Counter[str] = Counter()
    memory_capacities: list[float] = []

    storage_total = storage_passing = 0
    storage_types: Counter[str] = Counter()
    storage_sizes: Counter[str] = Counter()
    storage_capacities: list[float] = []

    for record in records:
        total += 1
        if record.verdict.overall_passes:
            passing += 1
        else:
            reasons[record.verdict.overall_reason] += 1

        processor = record.processor.classified
        if processor is not None:
            brands[processor.brand.value] += 1
            families[processor.family] += 1
            brand_families[f"{processor.brand.value} {processor.family}"] += 1
            if processor.generation:
                generations[processor.generation] += 1

        memory = record.memory.classified
        if memory is not None:
            memory_total += 1
            if record.memory.verdict.passes:
                memory_passing += 1
            if memory.capacity_gb > 0:
                memory_sizes[f"{format_gb(memory.capacity_gb)} GB"] += 1
                memory_capacities.append(memory.capacity_gb)
            else:
                memory_sizes[UNKNOWN_LABEL] += 1

        storage = record.storage.classified
        if storage is not None:
            storage_total += 1
            if record.storage.verdict.passes:
                storage_passing += 1
            storage_types[storage.device_type.value] += 1
            if storage.capacity_gb > 0:
                storage_sizes[format_storage_size(storage.capacity_gb)] += 1
                storage_capacities.append(storage.capacity_gb)
            else:
                storage_sizes[UNKNOWN_LABEL] += 1

    return AggregateStatistics(
        total=total,
        passing=passing,
        failing=total - passing,
        compliance_rate=(passing / total * 100) if total else 0.0,
        brand_distribution=dict(brands),
        family_distribution=dict(families),
        generation_distribution=dict(generations),
        brand_family_distribution=dict(brand_families),
        failure_reasons=dict(reasons),
        memory=MemoryStatistics(
            total=memory_total,
            passing=memory_passing,
            failing=memory_total - memory_passing,
            distribution=dict(memory_sizes),
            mean_capacity_gb=_mean(memory_capacities),
        ),
        storage=StorageStatistics(
            total=storage_total,
            passing=storage_passing,
            failing=storage_total - storage_passing,
            by_type=dict(storage_types),
            by_capacity=dict(storage_sizes),
            mean_capacity_gb=_mean(storage_capacities),
        ),
    )
