from __future__ import annotations

import math
import re
from typing import Any

from ..models.hardware import UNKNOWN_LABEL, ClassificationStatus, ClassifiedStorage, DeviceType
from .capacity import GB_PER_TB, CapacityDomain, parse_capacity
from .memory import format_gb
from .text import collapse_whitespace, strip_annotations

"""Storage classifier.

Device type is detected from keywords independently of capacity parsing.
Capacities are snapped to commercial disk sizes through a tiered range table
with a device-type aware nearest-neighbour fallback.
"""

__all__ = [
    "COMMERCIAL_STORAGE_SIZES",
    "classify_storage",
    "display_capacity",
    "format_storage_size",
    "round_to_commercial_storage",
]

COMMERCIAL_STORAGE_SIZES: tuple[int, ...] = (
    16, 32, 60, 64, 120, 128, 240, 250, 256, 320, 480, 500, 512, 640, 750, 1000,
    1024, 2000, 2048, 3000, 4000,
)
SSD_SIZES: tuple[int, ...] = (120, 128, 240, 250, 256, 480, 500, 512, 1000, 1024, 2000)
HDD_SIZES: tuple[int, ...] = (250, 320, 500, 640, 750, 1000, 2000, 3000, 4000)

# (lower bound, upper bound, lower inclusive, commercial size)
STORAGE_TIERS: tuple[tuple[float, float, bool, int], ...] = (
    (0, 20, False, 16),  # (0, 20]
    (20, 50, False, 32),
    (50, 80, True, 64),
    (80, 130, True, 120),
    (130, 220, True, 128),
    (220, 280, True, 250),
    (280, 400, True, 320),
    (400, 490, True, 480),
    (490, 600, True, 500),
    (600, 800, True, 750),
)

TB_THRESHOLD_GB = 900
NEAR_WHOLE_TB = 0.2
ONE_TB_UPPER_GB = 1126
PREFERRED_SIZE_TOLERANCE = 0.15
HDD_PREFERENCE_FROM_GB = 200
DISPLAY_TB_FROM_GB = 1000
# tenths of a TB: existing reports show 3000 GB as "2.9 TB"
TB_DISPLAY_DIVISOR = 102.4

_SSD_KEYWORDS = re.compile(r"\bssd\b|estado\s*solido|solid\s*state|\bnvme\b|\bm\.2\b", re.IGNORECASE)
_HDD_KEYWORDS = re.compile(r"\bhdd\b|disco\s*duro|hard\s*drive|mechanical", re.IGNORECASE)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _tier_for(size_gb: float) -> int | None:
    for lower, upper, lower_inclusive, size in STORAGE_TIERS:
        above = size_gb >= lower if lower_inclusive else size_gb > lower
        if lower == 0 and above and size_gb <= upper:
            return size
        if above and size_gb < upper:
            return size
    return None


def round_to_commercial_storage(size_gb: float) -> float:
    """Snap a capacity in GB to a commercial storage size.

    Values of 900 GB and above are expressed as whole TB on a 1000 GB basis
    (1024 GB -> 1000). Anything not covered by a range tier falls back to the
    first preferred size within 15%, then to the nearest commercial size.
    """
    if not size_gb or not math.isfinite(size_gb) or size_gb <= 0:
        return 0

    if size_gb >= TB_THRESHOLD_GB:
        size_tb = size_gb / GB_PER_TB
        whole_tb = _round_half_up(size_tb)
        if abs(whole_tb - size_tb) < NEAR_WHOLE_TB:
            return whole_tb * 1000
        if size_gb < ONE_TB_UPPER_GB:
            return 1000
        return whole_tb * 1000

    tier = _tier_for(size_gb)
    if tier is not None:
        return tier

    preferred = HDD_SIZES if size_gb >= HDD_PREFERENCE_FROM_GB else SSD_SIZES
    for size in preferred:
        if abs(size_gb - size) / size < PREFERRED_SIZE_TOLERANCE:
            return size

    return min(COMMERCIAL_STORAGE_SIZES, key=lambda size: abs(size_gb - size))


def display_capacity(capacity_gb: float) -> tuple[float, str]:
    """Return (value, unit) for showing a commercial capacity.

    Sizes from 1000 GB are shown in TB on a 1024 GB basis, rounded half up to
    one decimal: 1000 -> 1.0, 2000 -> 2.0, 3000 -> 2.9, 4000 -> 3.9.
    """
    if capacity_gb >= DISPLAY_TB_FROM_GB:
        return _round_half_up(capacity_gb / TB_DISPLAY_DIVISOR) / 10, "TB"
    return capacity_gb, "GB"


def format_storage_size(capacity_gb: float) -> str:
    """Human readable size used in labels and failure reasons ("1.0 TB", "500 GB")."""
    value, unit = display_capacity(capacity_gb)
    if unit == "TB":
        return f"{value:.1f} TB"
    return f"{format_gb(value)} GB"


def _detect_device_type(cleaned: str) -> DeviceType:
    if _SSD_KEYWORDS.search(cleaned):
        return DeviceType.SSD
    if _HDD_KEYWORDS.search(cleaned):
        return DeviceType.HDD
    return DeviceType.UNKNOWN


def classify_storage(text: Any) -> ClassifiedStorage:
    """Classify a free-text storage description ("1 TB", "500 SSD", "256GB NVMe")."""
    if not isinstance(text, str) or not text.strip():
        return ClassifiedStorage(
            original_text=text if isinstance(text, str) else "",
            capacity_gb=0,
            device_type=DeviceType.UNKNOWN,
            display_capacity=0,
            display_unit="GB",
            normalized_label=UNKNOWN_LABEL,
            status=ClassificationStatus.ABSENT,
        )

    original = text.strip()
    cleaned = collapse_whitespace(strip_annotations(text)).lower()
    device_type = _detect_device_type(cleaned)

    reading = parse_capacity(cleaned, CapacityDomain.STORAGE)
    capacity_gb = round_to_commercial_storage(reading.value_gb)
    shown, unit = display_capacity(capacity_gb)

    if capacity_gb <= 0:
        label = UNKNOWN_LABEL if device_type is DeviceType.UNKNOWN else f"{UNKNOWN_LABEL} {device_type.value}"
        return ClassifiedStorage(
            original_text=original,
            capacity_gb=0,
            device_type=device_type,
            display_capacity=0,
            display_unit="GB",
            normalized_label=label,
            status=ClassificationStatus.DEGRADED,
        )

    label = format_storage_size(capacity_gb)
    if device_type is not DeviceType.UNKNOWN:
        label += f" {device_type.value}"

    return ClassifiedStorage(
        original_text=original,
        capacity_gb=capacity_gb,
        device_type=device_type,
        display_capacity=shown,
        display_unit=unit,
        normalized_label=label,
    )
