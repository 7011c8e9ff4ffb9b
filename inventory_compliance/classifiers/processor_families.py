from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Mapping

from ..models.hardware import Brand

"""Brand detection and per-brand family grammars for processor descriptions.

Both are plain data: an ordered (pattern, Brand) table, and for each brand an
ordered tuple of grammar functions. A grammar receives the cleaned text (and a
version-preserving variant) and returns a FamilyMatch, or None when it does
not apply. The first grammar that matches wins; otherwise the brand's fallback
family is used.
"""

__all__ = [
    "AMD_SUFFIXES",
    "BRAND_PATTERNS",
    "FALLBACK_FAMILIES",
    "FAMILY_GRAMMARS",
    "FAMILY_INFERENCE_PATTERNS",
    "FamilyMatch",
    "INTEL_SUFFIXES",
    "ordinal",
]

_I = re.IGNORECASE

BRAND_PATTERNS: tuple[tuple[re.Pattern[str], Brand], ...] = (
    (re.compile(r"\b(?:intel|intell|inten)\b", _I), Brand.INTEL),
    (re.compile(r"\b(?:amd|advanced\s*micro\s*devices)\b", _I), Brand.AMD),
    (re.compile(r"\b(?:qualcomm|snapdragon|snap\s*dragon)\b", _I), Brand.QUALCOMM),
    # Narrow on purpose: a bare "A10" is an AMD APU far more often than an iPhone chip
    (re.compile(r"\b(?:apple|m[1-4]|a\d{1,2}\s*bionic)\b", _I), Brand.APPLE),
    (re.compile(r"\b(?:arm|mediatek|mt\d+|cortex)\b", _I), Brand.ARM),
    (re.compile(r"\b(?:samsung|exynos)\b", _I), Brand.SAMSUNG),
)

# Used when no manufacturer name is present
FAMILY_INFERENCE_PATTERNS: tuple[tuple[re.Pattern[str], Brand], ...] = (
    (re.compile(r"\b(?:core\s*)?i[3579](?:[\s-]+\d{3,5}[a-z]*\d?)?\b", _I), Brand.INTEL),
    (re.compile(r"\b(?:pentium|celeron|xeon|atom)\b", _I), Brand.INTEL),
    (re.compile(r"\b(?:ryzen|phenom|athlon|threadripper|epyc)\b", _I), Brand.AMD),
)

INTEL_SUFFIXES: Mapping[str, str] = {
    "K": "Unlocked",
    "F": "No integrated graphics",
    "KF": "Unlocked, no integrated graphics",
    "T": "Low power",
    "U": "Ultra low power (mobile)",
    "H": "High performance (mobile)",
    "S": "Special edition",
    "X": "Extreme",
    "G": "Integrated graphics",
}

AMD_SUFFIXES: Mapping[str, str] = {
    "X": "High performance",
    "XT": "Enhanced performance",
    "G": "Integrated graphics",
    "U": "Ultra low power",
    "H": "High performance (mobile)",
    "S": "Low power",
}


def ordinal(number: int) -> str:
    """1 -> "1st", 2 -> "2nd", 11 -> "11th", 23 -> "23rd"."""
    if 10 <= number % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")
    return f"{number}{suffix}"


@dataclass(frozen=True)
class FamilyMatch:
    family: str
    model_number: str | None = None
    # Generation stated by the family itself ("v4", "Gen 2"); wins over everything else
    generation: str | None = None
    # Generation derived from the model number; explicit "Nth Gen" text wins over it
    inferred_generation: str | None = None
    extra_info: str | None = None
    suffix_meanings: Mapping[str, str] | None = None


Grammar = Callable[[str, str], "FamilyMatch | None"]


# ---------------------------------------------------------------------------
# Intel
# ---------------------------------------------------------------------------

_CORE = re.compile(r"\b(?:core\s*)?i([3579])\b", _I)
_CORE_MODEL = re.compile(r"\bi[3579][\s-]+(\d{3,5}(?:[a-z]+\d?)?)\b", _I)


def _intel_core_generation(model_number: str) -> str | None:
    digits = re.match(r"\d+", model_number)
    if not digits:
        return None
    value = digits.group(0)
    if len(value) == 5 or (len(value) == 4 and value.startswith("1")):
        return f"{ordinal(int(value[:2]))} Gen"
    if len(value) == 4:
        return f"{ordinal(int(value[0]))} Gen"
    return f"{ordinal(1)} Gen"


def _intel_core(cleaned: str, versioned: str) -> FamilyMatch | None:
    family = _CORE.search(cleaned)
    if not family:
        return None
    model = _CORE_MODEL.search(cleaned)
    model_number = model.group(1).upper() if model else None
    return FamilyMatch(
        family=f"Core i{family.group(1)}",
        model_number=model_number,
        inferred_generation=_intel_core_generation(model_number) if model_number else None,
        suffix_meanings=INTEL_SUFFIXES,
    )


_CELERON_MODEL = re.compile(r"\bceleron\s+([a-z]?-?\d{3,5}[a-z]*)\b", _I)
_PENTIUM_TIER = re.compile(r"\bpentium\s+(gold|silver)\b", _I)
_PENTIUM_MODEL = re.compile(r"\bpentium\s+(?:gold\s+|silver\s+)?([a-z]?-?\d{3,5}[a-z]*)\b", _I)
_ATOM_MODEL = re.compile(r"\batom\s+((?:x\d-)?[a-z]?\d{3,4}[a-z]*)\b", _I)


def _intel_celeron(cleaned: str, versioned: str) -> FamilyMatch | None:
    if not re.search(r"\bceleron\b", cleaned, _I):
        return None
    model = _CELERON_MODEL.search(cleaned)
    return FamilyMatch(family="Celeron", model_number=model.group(1).upper() if model else None)


def _intel_pentium(cleaned: str, versioned: str) -> FamilyMatch | None:
    if not re.search(r"\bpentium\b", cleaned, _I):
        return None
    tier = _PENTIUM_TIER.search(cleaned)
    model = _PENTIUM_MODEL.search(cleaned)
    return FamilyMatch(
        family="Pentium",
        model_number=model.group(1).upper() if model else None,
        extra_info=tier.group(1).capitalize() if tier else None,
    )


def _intel_atom(cleaned: str, versioned: str) -> FamilyMatch | None:
    if not re.search(r"\batom\b", cleaned, _I):
        return None
    model = _ATOM_MODEL.search(cleaned)
    return FamilyMatch(family="Atom", model_number=model.group(1).upper() if model else None)


_XEON_SERIES = re.compile(r"\bxeon\s+(e\d)\s*-?\s*(\d{4})([a-z]*?)(?:\s*(v\d+))?\b", _I)
_XEON_SCALABLE = re.compile(r"\bxeon\s+(gold|silver|bronze|platinum)(?:\s+(\d{4}[a-z]*))?\b", _I)
_XEON_ENTRY = re.compile(r"\bxeon\s+e-?(\d{4}[a-z]*)\b", _I)
_XEON_OTHER = re.compile(r"\bxeon\s+((?:w-)?[a-z]?\d{4}[a-z]*)\b", _I)


def _intel_xeon(cleaned: str, versioned: str) -> FamilyMatch | None:
    if not re.search(r"\bxeon\b", versioned, _I):
        return None

    series = _XEON_SERIES.search(versioned)
    if series:
        version = series.group(4).lower() if series.group(4) else None
        model_number = f"{series.group(1).upper()}-{series.group(2)}{series.group(3).upper()}{version or ''}"
        return FamilyMatch(family="Xeon", model_number=model_number, generation=version)

    scalable = _XEON_SCALABLE.search(versioned)
    if scalable:
        parts = [scalable.group(1).capitalize()]
        if scalable.group(2):
            parts.append(scalable.group(2).upper())
        return FamilyMatch(family="Xeon", model_number=" ".join(parts))

    entry = _XEON_ENTRY.search(versioned)
    if entry:
        return FamilyMatch(family="Xeon", model_number=f"E-{entry.group(1).upper()}")

    other = _XEON_OTHER.search(versioned)
    return FamilyMatch(family="Xeon", model_number=other.group(1).upper() if other else None)


# ---------------------------------------------------------------------------
# AMD
# ---------------------------------------------------------------------------

RYZEN_GENERATIONS: Mapping[str, str] = {str(n): f"{ordinal(n)} Gen" for n in range(1, 10)}

_THREADRIPPER_MODEL = re.compile(r"\bthreadripper\s*(?:pro\s*)?(\d{4}[a-z]*)\b", _I)
_RYZEN = re.compile(r"\bryzen\s*([3579])\b", _I)
_RYZEN_MODELS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\bryzen\s*\d\s*(?:pro\s*)?(\d{4}[a-z]*)\b", _I),
    re.compile(r"\bryzen\s*(?:pro\s*)?(\d{4}[a-z]*)\b", _I),
)


def _ryzen_generation(model_number: str | None) -> str | None:
    if not model_number:
        return None
    return RYZEN_GENERATIONS.get(model_number[0])


def _amd_threadripper(cleaned: str, versioned: str) -> FamilyMatch | None:
    if not re.search(r"\bthreadripper\b", cleaned, _I):
        return None
    model = _THREADRIPPER_MODEL.search(cleaned)
    model_number = model.group(1).upper() if model else None
    return FamilyMatch(
        family="Ryzen Threadripper",
        model_number=model_number,
        inferred_generation=_ryzen_generation(model_number),
        extra_info="Pro" if re.search(r"\bpro\b", cleaned, _I) else None,
        suffix_meanings=AMD_SUFFIXES,
    )


def _amd_ryzen(cleaned: str, versioned: str) -> FamilyMatch | None:
    if not re.search(r"\bryzen", cleaned, _I):
        return None
    tier = _RYZEN.search(cleaned)
    model_number = None
    for pattern in _RYZEN_MODELS:
        match = pattern.search(cleaned)
        if match:
            model_number = match.group(1).upper()
            break
    return FamilyMatch(
        family=f"Ryzen {tier.group(1)}" if tier else "Ryzen",
        model_number=model_number,
        inferred_generation=_ryzen_generation(model_number),
        extra_info="Pro" if re.search(r"\bpro\b", cleaned, _I) else None,
        suffix_meanings=AMD_SUFFIXES,
    )


_CORE_COUNT = re.compile(r"\bx(\d{1,2})\b", _I)


def _core_count(cleaned: str) -> str | None:
    match = _CORE_COUNT.search(cleaned)
    return f"{match.group(1)} cores" if match else None


def _amd_phenom(cleaned: str, versioned: str) -> FamilyMatch | None:
    if not re.search(r"\bphenom\b", cleaned, _I):
        return None
    family = "Phenom II" if re.search(r"\bphenom\s*(?:ii|2)\b", cleaned, _I) else "Phenom"
    model = re.search(r"\bphenom(?:\s*(?:ii|2))?(?:\s*x\d+)?\s*(\d{3,4}[a-z]*)\b", cleaned, _I)
    return FamilyMatch(
        family=family,
        model_number=model.group(1).upper() if model else None,
        extra_info=_core_count(cleaned),
    )


def _amd_athlon(cleaned: str, versioned: str) -> FamilyMatch | None:
    if not re.search(r"\bathlon\b", cleaned, _I):
        return None
    family = "Athlon"
    if re.search(r"\bathlon\s*(?:ii|2)\b", cleaned, _I):
        family += " II"
    if re.search(r"\bathlon\s*(?:ii\s*)?64\b", cleaned, _I):
        family += " 64"
    model = re.search(r"\bathlon(?:\s*ii)?(?:\s*64)?(?:\s*x\d+)?\s*(\d{3,4}[a-z+]*)", cleaned, _I)
    return FamilyMatch(
        family=family,
        model_number=model.group(1).upper() if model else None,
        extra_info=_core_count(cleaned),
    )


_A_SERIES = re.compile(r"\ba(\d{1,2})(?:-|\s+(?=\d{4})|\s+series\b)", _I)
_A_SERIES_MODEL = re.compile(r"\ba\d{1,2}(?:-|\s+)(\d{4}[a-z]*)\b", _I)


def _amd_a_series(cleaned: str, versioned: str) -> FamilyMatch | None:
    series = _A_SERIES.search(cleaned)
    if not series:
        return None
    model = _A_SERIES_MODEL.search(cleaned)
    return FamilyMatch(family=f"A{series.group(1)}", model_number=model.group(1).upper() if model else None)


FX_CORE_SERIES: Mapping[str, str] = {
    "4": "Quad-Core",
    "6": "Six-Core",
    "8": "Eight-Core",
    "9": "Eight-Core+",
}


def _amd_fx(cleaned: str, versioned: str) -> FamilyMatch | None:
    if not re.search(r"\bfx\b", cleaned, _I):
        return None
    model = re.search(r"\bfx[\s-]*(\d{4}[a-z]*)", cleaned, _I)
    model_number = model.group(1).upper() if model else None
    return FamilyMatch(
        family="FX",
        model_number=model_number,
        extra_info=FX_CORE_SERIES.get(model_number[0]) if model_number else None,
    )


def _amd_epyc(cleaned: str, versioned: str) -> FamilyMatch | None:
    if not re.search(r"\bepyc\b", cleaned, _I):
        return None
    model = re.search(r"\bepyc\s+(\d{4,}[a-z]*)\b", cleaned, _I)
    return FamilyMatch(family="EPYC", model_number=model.group(1).upper() if model else None)


# ---------------------------------------------------------------------------
# Mobile / SoC vendors
# ---------------------------------------------------------------------------

_SNAPDRAGON_GEN = re.compile(r"\bsnap\s*dragon\s+(\d+)\s*gen\s*(\d+)", _I)
_SNAPDRAGON = re.compile(r"\bsnap\s*dragon\s+(\d+[a-z]*)", _I)
_VARIANT = re.compile(r"\b(plus|ultra|pro|lite)\b", _I)


def _qualcomm_snapdragon(cleaned: str, versioned: str) -> FamilyMatch | None:
    variant = _VARIANT.search(cleaned)
    extra = variant.group(1).capitalize() if variant else None
    with_gen = _SNAPDRAGON_GEN.search(cleaned)
    if with_gen:
        return FamilyMatch(
            family="Snapdragon",
            model_number=with_gen.group(1),
            generation=f"Gen {with_gen.group(2)}",
            extra_info=extra,
        )
    plain = _SNAPDRAGON.search(cleaned)
    return FamilyMatch(
        family="Snapdragon",
        model_number=plain.group(1).upper() if plain else None,
        extra_info=extra,
    )


def _apple_m_series(cleaned: str, versioned: str) -> FamilyMatch | None:
    chip = re.search(r"\bm([1-4])\b", cleaned, _I)
    if not chip:
        return None
    family = f"M{chip.group(1)}"
    tier = re.search(r"\b(pro|max|ultra)\b", cleaned, _I)
    if tier:
        family += f" {tier.group(1).capitalize()}"
    return FamilyMatch(family=family)


def _apple_a_series(cleaned: str, versioned: str) -> FamilyMatch | None:
    chip = re.search(r"\ba(\d{1,2})\b", cleaned, _I)
    if not chip:
        return None
    family = f"A{chip.group(1)}"
    if re.search(r"\bbionic\b", cleaned, _I):
        family += " Bionic"
    return FamilyMatch(family=family)


def _arm_cortex(cleaned: str, versioned: str) -> FamilyMatch | None:
    core = re.search(r"\bcortex[\s-]([a-z]\d+)\b", cleaned, _I) or re.search(r"\b([a-z]\d+)\s*cortex\b", cleaned, _I)
    if not core:
        return None
    return FamilyMatch(family=f"Cortex-{core.group(1).upper()}")


def _arm_mediatek(cleaned: str, versioned: str) -> FamilyMatch | None:
    part = re.search(r"\b(mt\d+[a-z]*)\b", cleaned, _I)
    if part:
        return FamilyMatch(family="MediaTek", model_number=part.group(1).upper())
    named = re.search(r"\bmediatek[\s-]+(\w+)", cleaned, _I)
    if named:
        return FamilyMatch(family="MediaTek", model_number=named.group(1).capitalize())
    if re.search(r"\bmediatek\b", cleaned, _I):
        return FamilyMatch(family="MediaTek")
    return None


def _samsung_exynos(cleaned: str, versioned: str) -> FamilyMatch | None:
    chip = re.search(r"\bexynos[\s-]?(\d+)", cleaned, _I)
    if not chip:
        return None
    return FamilyMatch(family="Exynos", model_number=chip.group(1))


FAMILY_GRAMMARS: Mapping[Brand, tuple[Grammar, ...]] = {
    Brand.INTEL: (_intel_core, _intel_celeron, _intel_pentium, _intel_atom, _intel_xeon),
    Brand.AMD: (
        _amd_threadripper,
        _amd_ryzen,
        _amd_phenom,
        _amd_athlon,
        _amd_a_series,
        _amd_fx,
        _amd_epyc,
    ),
    Brand.QUALCOMM: (_qualcomm_snapdragon,),
    Brand.APPLE: (_apple_m_series, _apple_a_series),
    Brand.ARM: (_arm_cortex, _arm_mediatek),
    Brand.SAMSUNG: (_samsung_exynos,),
}

FALLBACK_FAMILIES: Mapping[Brand, str] = {
    Brand.INTEL: "Other Intel",
    Brand.AMD: "Other AMD",
    Brand.QUALCOMM: "Snapdragon",
    Brand.APPLE: "Apple Silicon",
    Brand.ARM: "Generic ARM",
    Brand.SAMSUNG: "Exynos",
}
