from __future__ import annotations

import math
import re
from typing import Any

from ..models.hardware import UNKNOWN_LABEL, ClassificationStatus, ClassifiedMemory, MemoryType
from .capacity import CapacityDomain, parse_capacity
from .text import collapse_whitespace, strip_annotations

"""Memory (RAM) classifier.

Turns cells such as "16384", "8 GB DDR4 2400 MHz" or "16gGB" into a
ClassifiedMemory whose capacity is rounded to a canonical module size.
"""

__all__ = [
    "CANONICAL_MEMORY_SIZES",
    "classify_memory",
    "format_gb",
    "round_to_canonical_memory_size",
]

CANONICAL_MEMORY_SIZES: tuple[int, ...] = (2, 4, 6, 8, 12, 16, 24, 32, 48, 64, 96, 128, 256, 512)
MIN_COMMERCIAL_RAM_GB = 4

# Checked in this order; first hit wins
_TYPE_PATTERNS: tuple[tuple[re.Pattern[str], MemoryType], ...] = (
    (re.compile(r"ddr4", re.IGNORECASE), MemoryType.DDR4),
    (re.compile(r"ddr3", re.IGNORECASE), MemoryType.DDR3),
    (re.compile(r"ddr5", re.IGNORECASE), MemoryType.DDR5),
    (re.compile(r"ddr2", re.IGNORECASE), MemoryType.DDR2),
)

_SPEED_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"(?<!\d)(\d{1,5})\s*mhz", re.IGNORECASE),
    re.compile(r"(?<!\d)(\d{1,5})\s*hz", re.IGNORECASE),
    re.compile(r"ddr\d[\s-](\d{3,4})\b", re.IGNORECASE),
)


def round_to_canonical_memory_size(size_gb: float) -> float:
    """Round a RAM size to the nearest canonical module size.

    Any positive value under 4 GB becomes 4; zero, negatives and non-finite
    values give 0. Ties go to the smaller size.
    """
    if not math.isfinite(size_gb) or size_gb <= 0:
        return 0
    if size_gb < MIN_COMMERCIAL_RAM_GB:
        return MIN_COMMERCIAL_RAM_GB
    return min(CANONICAL_MEMORY_SIZES, key=lambda size: abs(size_gb - size))


def format_gb(value: float) -> str:
    """Render a GB figure without a trailing ".0" for whole numbers."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def _detect_type(cleaned: str) -> MemoryType:
    for pattern, memory_type in _TYPE_PATTERNS:
        if pattern.search(cleaned):
            return memory_type
    return MemoryType.DDR


def _detect_speed(cleaned: str) -> int | None:
    for pattern in _SPEED_PATTERNS:
        match = pattern.search(cleaned)
        if match:
            return int(match.group(1))
    return None


def classify_memory(text: Any) -> ClassifiedMemory:
    """Classify a free-text RAM description.

    Non-text or empty input yields capacity 0, type Unknown and the label
    "Unknown"; nothing in this path raises for odd input.
    """
    if not isinstance(text, str) or not text.strip():
        return ClassifiedMemory(
            original_text=text if isinstance(text, str) else "",
            capacity_gb=0,
            memory_type=MemoryType.UNKNOWN,
            normalized_label=UNKNOWN_LABEL,
            status=ClassificationStatus.ABSENT,
        )

    original = text.strip()
    cleaned = collapse_whitespace(strip_annotations(text)).lower()

    reading = parse_capacity(cleaned, CapacityDomain.MEMORY)
    capacity_gb = round_to_canonical_memory_size(reading.value_gb)
    memory_type = _detect_type(cleaned)
    speed = _detect_speed(cleaned)

    if capacity_gb <= 0:
        return ClassifiedMemory(
            original_text=original,
            capacity_gb=0,
            memory_type=memory_type,
            normalized_label=UNKNOWN_LABEL,
            clock_speed_mhz=speed,
            status=ClassificationStatus.DEGRADED,
        )

    parts = [f"{format_gb(capacity_gb)} GB"]
    if memory_type is not MemoryType.DDR:
        parts.append(memory_type.value)
    if speed:
        parts.append(f"{speed} MHz")

    return ClassifiedMemory(
        original_text=original,
        capacity_gb=capacity_gb,
        memory_type=memory_type,
        normalized_label=" ".join(parts),
        clock_speed_mhz=speed,
    )
