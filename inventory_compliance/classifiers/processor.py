from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

from ..models.hardware import UNKNOWN_LABEL, Brand, ClassificationStatus, ClassifiedProcessor
from ..models.rule_set import RuleSet
from ..models.verdict import ComplianceVerdict
from ..services.compliance import evaluate_processor
from .processor_families import (
    BRAND_PATTERNS,
    FALLBACK_FAMILIES,
    FAMILY_GRAMMARS,
    FAMILY_INFERENCE_PATTERNS,
    FamilyMatch,
    ordinal,
)
from .text import collapse_whitespace, parse_decimal, strip_annotations

"""Processor classifier.

Pipeline: cleanup -> brand detection -> family grammar -> generation ->
clock speed -> suffix decoding -> label. The classified processor is then
evaluated against the RuleSet passed in by the caller.
"""

__all__ = [
    "ProcessorResult",
    "classify_processor",
    "describe_processor",
]

logger = logging.getLogger(__name__)

_I = re.IGNORECASE

_TRADEMARKS = re.compile(r"[®™©]")
_FILLER = re.compile(
    r"\b(?:processor|procesador|cpu|cores?|with|con|de|dual|quad|n[uú]cleos)\b",
    _I,
)
_STANDALONE_VERSION = re.compile(r"\bv\d+\b", _I)

_EXPLICIT_GENERATION: tuple[re.Pattern[str], ...] = (
    re.compile(r"\b(\d{1,2})\s*(?:st|nd|rd|th|º|°|ª|va|ma|da|ra|na)\.?\s*gen(?:eration|eración|eracion)?\b", _I),
    re.compile(r"\bgen(?:eration|eración|eracion)?[\s:-]*(\d{1,2})\b", _I),
)

_SPEED_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"(\d+[.,]\d+)\s*(?:ghz|gh\b)", _I),
    re.compile(r"@\s*(\d+[.,]\d+)"),
    re.compile(r"(\d+[.,]\d+)\s*hz", _I),
)
_DECIMAL_TOKEN = re.compile(r"\b(\d+[.,]\d+)\b")
MIN_PLAUSIBLE_GHZ = 1.0
MAX_PLAUSIBLE_GHZ = 5.5

_SUFFIX = re.compile(r"\d([A-Z]+)\d?$")


@dataclass(frozen=True)
class ProcessorResult:
    classified: ClassifiedProcessor
    verdict: ComplianceVerdict


def _clean(text: str) -> tuple[str, str]:
    """Return (cleaned, versioned) forms of a processor description.

    The versioned form keeps "v3" style tokens, which Xeon model numbers need.
    """
    versioned = _TRADEMARKS.sub(" ", strip_annotations(text))
    versioned = collapse_whitespace(_FILLER.sub(" ", versioned))
    cleaned = collapse_whitespace(_STANDALONE_VERSION.sub(" ", versioned))
    return cleaned, versioned


def _detect_brand(cleaned: str) -> Brand:
    for pattern, brand in BRAND_PATTERNS:
        if pattern.search(cleaned):
            return brand
    for pattern, brand in FAMILY_INFERENCE_PATTERNS:
        if pattern.search(cleaned):
            return brand
    return Brand.OTHER


def _match_family(brand: Brand, cleaned: str, versioned: str) -> FamilyMatch | None:
    for grammar in FAMILY_GRAMMARS.get(brand, ()):
        match = grammar(cleaned, versioned)
        if match is not None:
            return match
    fallback = FALLBACK_FAMILIES.get(brand)
    return FamilyMatch(family=fallback) if fallback else None


def _explicit_generation(cleaned: str) -> str | None:
    for pattern in _EXPLICIT_GENERATION:
        match = pattern.search(cleaned)
        if match:
            return f"{ordinal(int(match.group(1)))} Gen"
    return None


def _clock_speed(cleaned: str, family_recognised: bool) -> float | None:
    for pattern in _SPEED_PATTERNS:
        match = pattern.search(cleaned)
        if match:
            return parse_decimal(match.group(1))

    if not family_recognised:
        return None
    candidates = [
        value
        for value in (parse_decimal(token) for token in _DECIMAL_TOKEN.findall(cleaned))
        if MIN_PLAUSIBLE_GHZ <= value <= MAX_PLAUSIBLE_GHZ
    ]
    return max(candidates) if candidates else None


def _decode_suffix(family: FamilyMatch) -> str | None:
    if not family.model_number or family.suffix_meanings is None:
        return None
    match = _SUFFIX.search(family.model_number)
    if not match:
        return None
    suffix = match.group(1)
    return family.suffix_meanings.get(suffix, f"Suffix {suffix}")


def _label(
    brand: Brand,
    family: str,
    model_number: str | None,
    extra_info: str | None,
    generation: str | None,
    speed: float | None,
    suffix: str | None,
) -> str:
    if brand is Brand.OTHER:
        return UNKNOWN_LABEL
    # Xeon model numbers already carry their version ("E5-2680v4")
    if generation and model_number and model_number.lower().endswith(generation.lower()):
        generation = None
    parts = [brand.value, family]
    for part in (model_number, extra_info, generation):
        if part:
            parts.append(part)
    if speed is not None:
        parts.append(f"@ {speed} GHz")
    if suffix:
        parts.append(f"({suffix})")
    return " ".join(parts)


def describe_processor(text: Any) -> ClassifiedProcessor:
    """Classify a processor description without evaluating it.

    Empty or non-text input returns brand Unknown with status ABSENT;
    text whose brand cannot be identified returns brand Other with status
    DEGRADED. Never raises for odd input.
    """
    if not isinstance(text, str) or not text.strip():
        return ClassifiedProcessor(
            original_text=text if isinstance(text, str) else "",
            brand=Brand.UNKNOWN,
            family=UNKNOWN_LABEL,
            normalized_label=UNKNOWN_LABEL,
            status=ClassificationStatus.ABSENT,
        )

    original = text.strip()
    cleaned, versioned = _clean(text)
    brand = _detect_brand(cleaned)
    match = _match_family(brand, cleaned, versioned)

    if brand is Brand.OTHER or match is None:
        logger.debug(f"Unrecognised processor text: {original!r}")
        return ClassifiedProcessor(
            original_text=original,
            brand=Brand.OTHER,
            family=UNKNOWN_LABEL,
            normalized_label=UNKNOWN_LABEL,
            clock_speed_ghz=_clock_speed(cleaned, family_recognised=False),
            status=ClassificationStatus.DEGRADED,
        )

    generation = match.generation or _explicit_generation(cleaned) or match.inferred_generation
    speed = _clock_speed(cleaned, family_recognised=True)
    suffix = _decode_suffix(match)

    return ClassifiedProcessor(
        original_text=original,
        brand=brand,
        family=match.family,
        normalized_label=_label(brand, match.family, match.model_number, match.extra_info, generation, speed, suffix),
        model_number=match.model_number,
        generation=generation,
        extra_info=match.extra_info,
        architecture_suffix=suffix,
        clock_speed_ghz=speed,
    )


def classify_processor(text: Any, rules: RuleSet) -> ProcessorResult:
    """Classify a processor description and evaluate it against `rules`.

    Args:
        text: Raw cell text, e.g. "Intel(R) Core(TM) i5-8500 @ 3.00GHz"
        rules: Policy to evaluate against (see config.rules.default_rule_set)

    Returns:
        ProcessorResult with the classified processor and its verdict
    """
    classified = describe_processor(text)
    return ProcessorResult(classified=classified, verdict=evaluate_processor(classified, rules))
