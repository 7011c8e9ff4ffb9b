from __future__ import annotations

from dataclasses import dataclass, field

"""RuleSet domain model: the minimum-specification policy.

A RuleSet is built once by the caller (default policy or a user supplied JSON
document, see inventory_compliance.config.rules) and passed explicitly into
every evaluation. Nothing in the package mutates it.

Thresholds of 0 mean "no constraint".
"""

__all__ = [
    "FamilyRule",
    "OtherProcessorRule",
    "RamRule",
    "RuleSet",
    "SpeedTier",
    "StorageRule",
]


@dataclass(frozen=True)
class SpeedTier:
    """Alternative speed threshold applying from `min_generation` onwards."""
    min_generation: int
    min_speed_ghz: float


@dataclass(frozen=True)
class FamilyRule:
    """Thresholds for a mainstream family (Intel Core i5/i7/i9, Ryzen 5/7/9)."""
    min_generation: int = 0
    min_speed_ghz: float = 0.0
    name: str = ""
    speed_by_generation: tuple[SpeedTier, ...] = ()

    def required_speed(self, generation: int) -> float:
        """Speed threshold for a processor of the given generation number.

        The highest tier whose generation is reached wins; without a matching
        tier the base threshold applies.
        """
        required = self.min_speed_ghz
        best: int | None = None
        for tier in self.speed_by_generation:
            if generation >= tier.min_generation and (best is None or tier.min_generation > best):
                best = tier.min_generation
                required = tier.min_speed_ghz
        return required


@dataclass(frozen=True)
class OtherProcessorRule(FamilyRule):
    """Rule for server / entry level families that can be switched off."""
    enabled: bool = False
    modern_only: bool = False  # Xeon: E5/E7 v3+, E-2xxx, Gold/Silver/Bronze/Platinum


@dataclass(frozen=True)
class RamRule:
    min_capacity_gb: float = 8
    name: str = "Memoria RAM"


@dataclass(frozen=True)
class StorageRule:
    min_capacity_gb: float = 256
    prefer_ssd: bool = True
    name: str = "Almacenamiento"


@dataclass(frozen=True)
class RuleSet:
    """Complete validation policy.

    Keys mirror the persisted JSON document:
    intel_core: "i5" | "i7" | "i9"
    amd_ryzen: "ryzen5" | "ryzen7" | "ryzen9" | "threadripper"
    other_processors: "intelXeon" | "amdEpyc" | "intelCeleron" | "intelPentium" | "amdAthlon"
    """
    intel_core: dict[str, FamilyRule] = field(default_factory=dict)
    amd_ryzen: dict[str, FamilyRule] = field(default_factory=dict)
    other_processors: dict[str, OtherProcessorRule] = field(default_factory=dict)
    ram: RamRule = field(default_factory=RamRule)
    storage: StorageRule = field(default_factory=StorageRule)
