from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema.exceptions import ValidationError

from ..models.rule_set import FamilyRule, OtherProcessorRule, RamRule, RuleSet, SpeedTier, StorageRule
from .loader import ConfigError

"""RuleSet (de)serialization.

The persisted document uses the camelCase layout of the validation rules
editor exports:

    {
      "intelCore": {"i5": {"minGeneration": 8, "minSpeed": 3.0, "name": "Intel Core i5"}, ...},
      "amdRyzen": {"ryzen5": {...}, ...},
      "otherProcessors": {"intelXeon": {"enabled": true, ...}, ...},
      "ram": {"minCapacity": 8},
      "storage": {"minCapacity": 256, "preferSSD": true}
    }

Optional keys `speedByGeneration` (list of {minGeneration, minSpeed}) and
`modernOnly` (Xeon) express the default policy as data. Missing top-level
sections and missing ram/storage keys are filled from the default policy.
"""

__all__ = [
    "DEFAULT_RULES",
    "RULES_SCHEMA_PATH",
    "default_rule_set",
    "dump_rule_set",
    "load_rule_set",
    "rule_set_from_dict",
    "rule_set_to_dict",
]

logger = logging.getLogger(__name__)

RULES_SCHEMA_PATH = Path(__file__).parent / "schemas" / "rules_schema.json"

DEFAULT_RULES: dict[str, Any] = {
    "intelCore": {
        "i5": {"minGeneration": 8, "minSpeed": 3.0, "name": "Intel Core i5"},
        "i7": {"minGeneration": 7, "minSpeed": 0, "name": "Intel Core i7"},
        "i9": {"minGeneration": 0, "minSpeed": 0, "name": "Intel Core i9"},
    },
    "amdRyzen": {
        "ryzen5": {
            "minGeneration": 0,
            "minSpeed": 3.7,
            "name": "AMD Ryzen 5",
            "speedByGeneration": [{"minGeneration": 3, "minSpeed": 3.5}],
        },
        "ryzen7": {"minGeneration": 0, "minSpeed": 0, "name": "AMD Ryzen 7"},
        "ryzen9": {"minGeneration": 0, "minSpeed": 0, "name": "AMD Ryzen 9"},
        "threadripper": {"minGeneration": 0, "minSpeed": 0, "name": "AMD Ryzen Threadripper"},
    },
    "otherProcessors": {
        "intelXeon": {
            "enabled": True,
            "minGeneration": 0,
            "minSpeed": 0,
            "name": "Intel Xeon (E5 v3+, E7 v3+, Gold/Silver/Bronze series)",
            "modernOnly": True,
        },
        "amdEpyc": {"enabled": True, "minGeneration": 0, "minSpeed": 0, "name": "AMD EPYC"},
        "intelCeleron": {"enabled": False, "minGeneration": 0, "minSpeed": 0, "name": "Intel Celeron"},
        "intelPentium": {"enabled": False, "minGeneration": 0, "minSpeed": 0, "name": "Intel Pentium"},
        "amdAthlon": {"enabled": False, "minGeneration": 0, "minSpeed": 0, "name": "AMD Athlon"},
    },
    "ram": {"minCapacity": 8, "name": "Memoria RAM"},
    "storage": {"minCapacity": 256, "preferSSD": True, "name": "Almacenamiento"},
}


def _speed_tiers(raw: list[dict[str, Any]] | None) -> tuple[SpeedTier, ...]:
    return tuple(
        SpeedTier(min_generation=int(tier["minGeneration"]), min_speed_ghz=float(tier["minSpeed"]))
        for tier in raw or ()
    )


def _family_rule(raw: dict[str, Any]) -> FamilyRule:
    return FamilyRule(
        min_generation=int(raw.get("minGeneration", 0)),
        min_speed_ghz=float(raw.get("minSpeed", 0)),
        name=raw.get("name", ""),
        speed_by_generation=_speed_tiers(raw.get("speedByGeneration")),
    )


def _other_rule(raw: dict[str, Any]) -> OtherProcessorRule:
    return OtherProcessorRule(
        min_generation=int(raw.get("minGeneration", 0)),
        min_speed_ghz=float(raw.get("minSpeed", 0)),
        name=raw.get("name", ""),
        speed_by_generation=_speed_tiers(raw.get("speedByGeneration")),
        enabled=bool(raw.get("enabled", False)),
        modern_only=bool(raw.get("modernOnly", False)),
    )


def _merge_with_defaults(data: dict[str, Any]) -> dict[str, Any]:
    # Sections replace the defaults wholesale; ram/storage are merged key by key
    merged = {**DEFAULT_RULES, **data}
    merged["ram"] = {**DEFAULT_RULES["ram"], **(data.get("ram") or {})}
    merged["storage"] = {**DEFAULT_RULES["storage"], **(data.get("storage") or {})}
    return merged


def _validate_rules(data: Any) -> None:
    try:
        schema = json.loads(RULES_SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid rules schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"rules validation failed: {e.message}") from e


def rule_set_from_dict(data: dict[str, Any]) -> RuleSet:
    """Build a RuleSet from a camelCase rules document.

    Raises:
        ConfigError: The document does not match the rules schema
    """
    _validate_rules(data)
    merged = _merge_with_defaults(data)
    ram = merged["ram"]
    storage = merged["storage"]
    return RuleSet(
        intel_core={key: _family_rule(raw) for key, raw in merged["intelCore"].items()},
        amd_ryzen={key: _family_rule(raw) for key, raw in merged["amdRyzen"].items()},
        other_processors={key: _other_rule(raw) for key, raw in merged["otherProcessors"].items()},
        ram=RamRule(min_capacity_gb=float(ram["minCapacity"]), name=ram.get("name", "")),
        storage=StorageRule(
            min_capacity_gb=float(storage["minCapacity"]),
            prefer_ssd=bool(storage["preferSSD"]),
            name=storage.get("name", ""),
        ),
    )


def _number(value: float) -> float | int:
    return int(value) if float(value).is_integer() else value


def _family_rule_to_dict(rule: FamilyRule) -> dict[str, Any]:
    data: dict[str, Any] = {
        "minGeneration": rule.min_generation,
        "minSpeed": _number(rule.min_speed_ghz),
        "name": rule.name,
    }
    if rule.speed_by_generation:
        data["speedByGeneration"] = [
            {"minGeneration": tier.min_generation, "minSpeed": _number(tier.min_speed_ghz)}
            for tier in rule.speed_by_generation
        ]
    return data


def _other_rule_to_dict(rule: OtherProcessorRule) -> dict[str, Any]:
    data = {"enabled": rule.enabled, **_family_rule_to_dict(rule)}
    if rule.modern_only:
        data["modernOnly"] = True
    return data


def rule_set_to_dict(rules: RuleSet) -> dict[str, Any]:
    """Inverse of rule_set_from_dict."""
    return {
        "intelCore": {key: _family_rule_to_dict(rule) for key, rule in rules.intel_core.items()},
        "amdRyzen": {key: _family_rule_to_dict(rule) for key, rule in rules.amd_ryzen.items()},
        "otherProcessors": {key: _other_rule_to_dict(rule) for key, rule in rules.other_processors.items()},
        "ram": {"minCapacity": _number(rules.ram.min_capacity_gb), "name": rules.ram.name},
        "storage": {
            "minCapacity": _number(rules.storage.min_capacity_gb),
            "preferSSD": rules.storage.prefer_ssd,
            "name": rules.storage.name,
        },
    }


def default_rule_set() -> RuleSet:
    """The embedded default policy."""
    return rule_set_from_dict(DEFAULT_RULES)


def load_rule_set(path: Path) -> RuleSet:
    if not path.exists():
        raise ConfigError(f"rules file not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid rules json: {e}") from e
    rules = rule_set_from_dict(data)
    logger.debug("Loaded rule set from %s", path)
    return rules


def dump_rule_set(rules: RuleSet, path: Path) -> None:
    """Write `rules` as an indented JSON document (the rules editor export format)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(rule_set_to_dict(rules), indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
