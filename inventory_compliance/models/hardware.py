from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""Classified hardware component models.

Each classifier turns one spreadsheet cell into one of the frozen dataclasses
below. The `status` field replaces sentinel values: callers can tell apart a
missing cell (ABSENT), text that could not be recognised (DEGRADED), an
absorbed processing failure (ERROR) and a regular classification (OK).
"""

__all__ = [
    "Brand",
    "ClassificationStatus",
    "ClassifiedProcessor",
    "ClassifiedMemory",
    "ClassifiedStorage",
    "DeviceType",
    "MemoryType",
    "UNKNOWN_LABEL",
]

UNKNOWN_LABEL = "Unknown"


class ClassificationStatus(Enum):
    """Outcome of a classification attempt.

    - OK: text recognised (brand/family or capacity extracted)
    - DEGRADED: text present but nothing recognised
    - ABSENT: empty cell or non-text value
    - ERROR: an unexpected exception was absorbed at row level
    """
    OK = "ok"
    DEGRADED = "degraded"
    ABSENT = "absent"
    ERROR = "error"


class Brand(Enum):
    INTEL = "Intel"
    AMD = "AMD"
    QUALCOMM = "Qualcomm"
    APPLE = "Apple"
    ARM = "ARM"
    SAMSUNG = "Samsung"
    OTHER = "Other"
    UNKNOWN = "Unknown"  # empty / non-text input only


class MemoryType(Enum):
    DDR2 = "DDR2"
    DDR3 = "DDR3"
    DDR4 = "DDR4"
    DDR5 = "DDR5"
    DDR = "DDR"  # generation not specified
    UNKNOWN = "Unknown"


class DeviceType(Enum):
    SSD = "SSD"
    HDD = "HDD"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class ClassifiedProcessor:
    """Structured view of a processor description.

    Invariant: brand OTHER implies family "Unknown".
    """
    original_text: str
    brand: Brand
    family: str  # "Core i5", "Ryzen 7", "Xeon", "Unknown", ...
    normalized_label: str
    model_number: str | None = None
    generation: str | None = None  # "10th Gen", "v3", "Gen 2"
    extra_info: str | None = None  # "Pro", "Threadripper", "4 cores", ...
    architecture_suffix: str | None = None  # decoded meaning, e.g. "Unlocked"
    clock_speed_ghz: float | None = None
    status: ClassificationStatus = ClassificationStatus.OK

    @property
    def speed_label(self) -> str | None:
        if self.clock_speed_ghz is None:
            return None
        return f"{self.clock_speed_ghz} GHz"


@dataclass(frozen=True)
class ClassifiedMemory:
    original_text: str
    capacity_gb: float  # canonical size, 0 when unknown
    memory_type: MemoryType
    normalized_label: str
    clock_speed_mhz: int | None = None
    status: ClassificationStatus = ClassificationStatus.OK


@dataclass(frozen=True)
class ClassifiedStorage:
    """Storage device description.

    Invariant: display_unit == "TB" iff capacity_gb >= 1000.
    """
    original_text: str
    capacity_gb: float  # commercial size, 0 when unknown
    device_type: DeviceType
    display_capacity: float
    display_unit: str  # "GB" | "TB"
    normalized_label: str
    status: ClassificationStatus = ClassificationStatus.OK
