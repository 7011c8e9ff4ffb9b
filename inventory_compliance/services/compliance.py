from __future__ import annotations

import re

from ..classifiers.processor_families import ordinal
from ..classifiers.storage import format_storage_size
from ..classifiers.memory import format_gb
from ..models.hardware import (
    Brand,
    ClassificationStatus,
    ClassifiedMemory,
    ClassifiedProcessor,
    ClassifiedStorage,
    DeviceType,
)
from ..models.rule_set import FamilyRule, OtherProcessorRule, RuleSet
from ..models.verdict import ComplianceVerdict, RecordVerdict

"""Compliance rule resolver.

Every evaluation is a pure function of (classified component, RuleSet): the
same pair always yields the same verdict and reason string.

Processor evaluation order:
1. look up the family rule (absent or disabled -> generic brand/model failure)
2. Xeon "modern only" model check
3. generation threshold
4. speed threshold, possibly raised or lowered by generation tiers
"""

__all__ = [
    "INVALID_PROCESSOR_REASON",
    "PROCESSING_ERROR_REASON",
    "SSD_REQUIRED_REASON",
    "XEON_MODERN_REASON",
    "combine_verdicts",
    "evaluate_memory",
    "evaluate_processor",
    "evaluate_storage",
    "find_family_rule",
]

INVALID_PROCESSOR_REASON = "Invalid processor data"
PROCESSING_ERROR_REASON = "Error in processing"
SSD_REQUIRED_REASON = "SSD required but other device type detected"
XEON_MODERN_REASON = (
    "Requires a Xeon E5 v3 or later, E7 v3 or later, E-2xxx, "
    "or Gold/Silver/Bronze/Platinum series"
)

_MODERN_XEON: tuple[re.Pattern[str], ...] = (
    re.compile(r"E[57].*v[3-9]", re.IGNORECASE),
    re.compile(r"Gold|Silver|Bronze|Platinum", re.IGNORECASE),
    re.compile(r"E-\d{4}", re.IGNORECASE),
)

_INTEL_CORE_KEYS = {"Core i3": "i3", "Core i5": "i5", "Core i7": "i7", "Core i9": "i9"}
_RYZEN_KEYS = {
    "Ryzen 3": "ryzen3",
    "Ryzen 5": "ryzen5",
    "Ryzen 7": "ryzen7",
    "Ryzen 9": "ryzen9",
    "Ryzen Threadripper": "threadripper",
}
# Family name prefix -> other_processors key
_OTHER_FAMILY_KEYS: tuple[tuple[Brand, str, str], ...] = (
    (Brand.INTEL, "Xeon", "intelXeon"),
    (Brand.INTEL, "Celeron", "intelCeleron"),
    (Brand.INTEL, "Pentium", "intelPentium"),
    (Brand.AMD, "EPYC", "amdEpyc"),
    (Brand.AMD, "Athlon", "amdAthlon"),  # also "Athlon II", "Athlon 64"
)


def find_family_rule(processor: ClassifiedProcessor, rules: RuleSet) -> FamilyRule | None:
    """Return the rule governing the processor's family, if the RuleSet has one."""
    if processor.brand is Brand.INTEL and processor.family in _INTEL_CORE_KEYS:
        return rules.intel_core.get(_INTEL_CORE_KEYS[processor.family])
    if processor.brand is Brand.AMD and processor.family in _RYZEN_KEYS:
        return rules.amd_ryzen.get(_RYZEN_KEYS[processor.family])
    for brand, prefix, key in _OTHER_FAMILY_KEYS:
        if processor.brand is brand and processor.family.startswith(prefix):
            return rules.other_processors.get(key)
    return None


def _generation_number(generation: str | None) -> int:
    if not generation:
        return 0
    match = re.search(r"\d+", generation)
    return int(match.group(0)) if match else 0


def _is_modern_xeon(model_number: str | None) -> bool:
    if not model_number:
        return False
    return any(pattern.search(model_number) for pattern in _MODERN_XEON)


def _format_ghz(value: float) -> str:
    return str(float(value))


def evaluate_processor(processor: ClassifiedProcessor, rules: RuleSet) -> ComplianceVerdict:
    """Evaluate a classified processor against the processor rules of `rules`."""
    if processor.status is ClassificationStatus.ABSENT:
        return ComplianceVerdict.fail(INVALID_PROCESSOR_REASON)
    if processor.status is ClassificationStatus.ERROR:
        return ComplianceVerdict.fail(PROCESSING_ERROR_REASON)

    rule = find_family_rule(processor, rules)
    if rule is None or (isinstance(rule, OtherProcessorRule) and not rule.enabled):
        return ComplianceVerdict.fail(
            f"Does not meet brand/model requirements: {processor.brand.value} {processor.family}"
        )

    if isinstance(rule, OtherProcessorRule) and rule.modern_only and not _is_modern_xeon(processor.model_number):
        return ComplianceVerdict.fail(XEON_MODERN_REASON)

    generation = _generation_number(processor.generation)
    if rule.min_generation > 0 and generation < rule.min_generation:
        shown = processor.generation or "Unknown"
        return ComplianceVerdict.fail(
            f"Insufficient generation: {shown} (requires {ordinal(rule.min_generation)} Gen or later)"
        )

    required = rule.required_speed(generation)
    speed = processor.clock_speed_ghz or 0.0
    if required > 0 and speed < required:
        shown = _format_ghz(speed) if speed else "Unknown"
        return ComplianceVerdict.fail(
            f"Insufficient speed: {shown} GHz (requires {_format_ghz(required)} GHz or higher)"
        )

    return ComplianceVerdict.ok()


def evaluate_memory(memory: ClassifiedMemory, rules: RuleSet) -> ComplianceVerdict:
    if memory.status is ClassificationStatus.ERROR:
        return ComplianceVerdict.fail(PROCESSING_ERROR_REASON)
    minimum = rules.ram.min_capacity_gb
    if memory.capacity_gb >= minimum:
        return ComplianceVerdict.ok()
    return ComplianceVerdict.fail(
        f"Insufficient capacity: {format_gb(memory.capacity_gb)} GB (requires {format_gb(minimum)} GB or more)"
    )


def evaluate_storage(storage: ClassifiedStorage, rules: RuleSet) -> ComplianceVerdict:
    """Capacity check first, then the SSD preference.

    Sizes of 1000 GB and above are reported in TB, matching the classifier's
    display unit.
    """
    if storage.status is ClassificationStatus.ERROR:
        return ComplianceVerdict.fail(PROCESSING_ERROR_REASON)
    minimum = rules.storage.min_capacity_gb
    if storage.capacity_gb < minimum:
        return ComplianceVerdict.fail(
            f"Insufficient capacity: {format_storage_size(storage.capacity_gb)} "
            f"(requires {format_storage_size(minimum)} or more)"
        )
    if rules.storage.prefer_ssd and storage.device_type is not DeviceType.SSD:
        return ComplianceVerdict.fail(SSD_REQUIRED_REASON)
    return ComplianceVerdict.ok()


def combine_verdicts(*verdicts: ComplianceVerdict) -> RecordVerdict:
    """AND of the component verdicts, given in Processor -> Memory -> Storage order.

    The record reason is the reason of the first failing component.
    """
    for verdict in verdicts:
        if not verdict.passes:
            return RecordVerdict(overall_passes=False, overall_reason=verdict.reason)
    return RecordVerdict(overall_passes=True)
