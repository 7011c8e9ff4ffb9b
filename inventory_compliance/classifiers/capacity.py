from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum

from .text import parse_decimal

"""Unit/capacity parser shared by the memory and storage classifiers.

An ordered cascade of regular expressions is tried against the cleaned text;
the first match wins:

1. exact     - the target unit itself ("8.0 GB", "16GB", "16 gigabytes")
2. converted - another unit requiring conversion (MB, TB)
3. repaired  - known typos ("16gGB", "1 TR")
4. bare      - a number with no unit, resolved by domain heuristics

No match yields 0 GB, and so does a value too large to be finite ("9" * 400).
The cascade never raises on arbitrary text.
"""

__all__ = [
    "CapacityDomain",
    "CapacityReading",
    "Stage",
    "parse_capacity",
]

_NUMBER = r"(\d+(?:[.,]\d+)?)"

KB_PER_GB = 1024 * 1024
MB_PER_GB = 1024
GB_PER_TB = 1024

# Bare RAM values up to this many are taken as GB, up to MEMORY_MB_LIMIT as MB
MEMORY_GB_LIMIT = 64
MEMORY_MB_LIMIT = 65536


class CapacityDomain(Enum):
    MEMORY = "memory"
    STORAGE = "storage"


class Stage(Enum):
    EXACT = "exact"
    CONVERTED = "converted"
    REPAIRED = "repaired"
    BARE = "bare"
    NONE = "none"


@dataclass(frozen=True)
class CapacityPattern:
    regex: re.Pattern[str]
    factor: float  # multiplier turning the captured value into GB
    stage: Stage
    unit: str
    kit: bool = False  # "2x8GB": first group is a module count


@dataclass(frozen=True)
class CapacityReading:
    value_gb: float
    stage: Stage
    unit: str | None = None

    @property
    def matched(self) -> bool:
        return self.stage is not Stage.NONE


def _p(pattern: str, factor: float, stage: Stage, unit: str, *, kit: bool = False) -> CapacityPattern:
    return CapacityPattern(re.compile(pattern, re.IGNORECASE), factor, stage, unit, kit)


_GB_UNIT = r"\s*(?:gb|gigabytes?|gigas|g\b)"
_MB_UNIT = r"\s*(?:mb|megabytes?|m\b)"
_TB_UNIT = r"\s*(?:tb|terabytes?|t\b)"

_KIT_GB = _p(r"(\d+)\s*x\s*" + _NUMBER + _GB_UNIT, 1, Stage.EXACT, "GB", kit=True)
_GB = _p(_NUMBER + _GB_UNIT, 1, Stage.EXACT, "GB")
_MB = _p(_NUMBER + _MB_UNIT, 1 / MB_PER_GB, Stage.CONVERTED, "MB")
_TB = _p(_NUMBER + _TB_UNIT, GB_PER_TB, Stage.CONVERTED, "TB")
_DOUBLED_G = _p(r"(\d+)g+" + _GB_UNIT, 1, Stage.REPAIRED, "GB")

MEMORY_CASCADE: tuple[CapacityPattern, ...] = (_KIT_GB, _GB, _MB, _TB, _DOUBLED_G)
STORAGE_CASCADE: tuple[CapacityPattern, ...] = (_TB, _GB, _DOUBLED_G)

# Typos rewritten before the storage cascade runs
_STORAGE_REPAIRS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\b(\d+)\s*tr\b", re.IGNORECASE), r"\1 tb"),
)

_BARE = re.compile(r"^" + _NUMBER + r"$")
_BARE_WITH_TYPE = re.compile(r"^" + _NUMBER + r"\s*(ssd|hdd|nvme|m\.2)$", re.IGNORECASE)


def _memory_bare_value(value: float) -> float:
    # Spreadsheet exports often report RAM in raw MB ("16384") without a unit
    if value <= MEMORY_GB_LIMIT:
        return value
    if value <= MEMORY_MB_LIMIT:
        return value / MB_PER_GB
    return value / KB_PER_GB


def _run_cascade(text: str, cascade: tuple[CapacityPattern, ...], repaired: bool) -> CapacityReading | None:
    for pattern in cascade:
        match = pattern.regex.search(text)
        if not match:
            continue
        if pattern.kit:
            value = parse_decimal(match.group(1)) * parse_decimal(match.group(2))
        else:
            value = parse_decimal(match.group(1)) * pattern.factor
        stage = Stage.REPAIRED if repaired else pattern.stage
        return CapacityReading(value_gb=value, stage=stage, unit=pattern.unit)
    return None


def _repair_storage_units(text: str) -> str:
    for regex, replacement in _STORAGE_REPAIRS:
        text = regex.sub(replacement, text)
    return text


def parse_capacity(text: str, domain: CapacityDomain) -> CapacityReading:
    """Extract a capacity in GB from cleaned free text.

    Args:
        text: Cleaned cell text (annotations removed, whitespace collapsed)
        domain: Decides the cascade order and the bare-number heuristic

    Returns:
        CapacityReading; value_gb is 0 and stage NONE when nothing matched
    """
    reading = _parse(text.strip(), domain)
    if not math.isfinite(reading.value_gb):
        return CapacityReading(value_gb=0.0, stage=Stage.NONE)
    return reading


def _parse(text: str, domain: CapacityDomain) -> CapacityReading:
    if domain is CapacityDomain.STORAGE:
        repaired_text = _repair_storage_units(text)
        reading = _run_cascade(repaired_text, STORAGE_CASCADE, repaired=repaired_text != text)
        if reading is not None:
            return reading
        typed = _BARE_WITH_TYPE.match(repaired_text)
        if typed:
            return CapacityReading(value_gb=parse_decimal(typed.group(1)), stage=Stage.BARE)
        bare = _BARE.match(repaired_text)
        if bare:
            return CapacityReading(value_gb=parse_decimal(bare.group(1)), stage=Stage.BARE)
        return CapacityReading(value_gb=0.0, stage=Stage.NONE)

    reading = _run_cascade(text, MEMORY_CASCADE, repaired=False)
    if reading is not None:
        return reading
    bare = _BARE.match(text)
    if bare:
        return CapacityReading(value_gb=_memory_bare_value(parse_decimal(bare.group(1))), stage=Stage.BARE)
    return CapacityReading(value_gb=0.0, stage=Stage.NONE)
