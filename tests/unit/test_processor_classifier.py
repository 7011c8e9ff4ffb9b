from __future__ import annotations

import pytest

from inventory_compliance.classifiers.processor import classify_processor, describe_processor
from inventory_compliance.classifiers.processor_families import ordinal
from inventory_compliance.models.hardware import Brand, ClassificationStatus


class TestIntelCore:
    def test_full_description_passes_default_rules(self, rules):
        result = classify_processor("Intel(R) Core(TM) i5-8500 @ 3.00GHz", rules)
        cpu = result.classified
        assert cpu.brand is Brand.INTEL
        assert cpu.family == "Core i5"
        assert cpu.model_number == "8500"
        assert cpu.generation == "8th Gen"
        assert cpu.clock_speed_ghz == 3.0
        assert cpu.normalized_label == "Intel Core i5 8500 8th Gen @ 3.0 GHz"
        assert result.verdict.passes
        assert result.verdict.reason == ""

    def test_five_digit_model_and_suffix(self):
        cpu = describe_processor("Intel Core i7-10700K 3.8 GHz")
        assert cpu.model_number == "10700K"
        assert cpu.generation == "10th Gen"
        assert cpu.architecture_suffix == "Unlocked"
        assert cpu.normalized_label == "Intel Core i7 10700K 10th Gen @ 3.8 GHz (Unlocked)"

    @pytest.mark.parametrize(
        "text,generation",
        [
            ("Intel Core i5-4590", "4th Gen"),
            ("Intel Core i7-1165G7", "11th Gen"),
            ("Intel Core i3-12100", "12th Gen"),
            ("Intel Core i5 650", "1st Gen"),
        ],
    )
    def test_generation_from_model_number(self, text: str, generation: str):
        assert describe_processor(text).generation == generation

    def test_brand_inferred_from_family(self):
        cpu = describe_processor("i3-7100")
        assert cpu.brand is Brand.INTEL
        assert cpu.family == "Core i3"

    def test_explicit_generation_wins_over_model_number(self):
        assert describe_processor("Intel Core i5-8500 9th Gen").generation == "9th Gen"

    def test_spanish_generation_text(self):
        cpu = describe_processor("Procesador Intel Core i7 de 8va generación 2.5 GHz")
        assert cpu.family == "Core i7"
        assert cpu.generation == "8th Gen"
        assert cpu.clock_speed_ghz == 2.5

    def test_unknown_suffix_is_named(self):
        assert describe_processor("Intel Core i5-8350Q").architecture_suffix == "Suffix Q"


class TestClockSpeed:
    @pytest.mark.parametrize(
        "text,speed",
        [
            ("Intel Core i5-8500 3.00GHz", 3.0),
            ("Intel Core i5-8500 3,2 GHz", 3.2),
            ("Intel Core i5-8500 3.2GH", 3.2),
            ("Intel Core i5-8500 @ 2.4", 2.4),
            ("Intel Core i5-9400 2.90", 2.9),
        ],
    )
    def test_speed_patterns(self, text: str, speed: float):
        assert describe_processor(text).clock_speed_ghz == speed

    def test_implausible_bare_decimal_is_ignored(self):
        assert describe_processor("Intel Core i5-8500 8.5").clock_speed_ghz is None

    def test_memory_size_is_not_read_as_clock(self, rules):
        result = classify_processor("Intel Core i5-8250U 8.0GB RAM 1.6GHz", rules)
        assert result.classified.clock_speed_ghz == 1.6
        assert not result.verdict.passes
        assert result.verdict.reason.startswith("Insufficient speed: 1.6 GHz")

    def test_bare_g_is_not_a_clock_unit(self):
        assert describe_processor("Intel Core i5-8500 8.0 G RAM").clock_speed_ghz is None

    def test_missing_speed(self):
        cpu = describe_processor("AMD Ryzen 5 2600")
        assert cpu.clock_speed_ghz is None
        assert cpu.speed_label is None


class TestAmd:
    def test_ryzen_without_speed_fails_on_speed(self, rules):
        result = classify_processor("AMD Ryzen 5 2600", rules)
        cpu = result.classified
        assert cpu.family == "Ryzen 5"
        assert cpu.model_number == "2600"
        assert cpu.generation == "2nd Gen"
        assert cpu.normalized_label == "AMD Ryzen 5 2600 2nd Gen"
        assert not result.verdict.passes
        assert result.verdict.reason == "Insufficient speed: Unknown GHz (requires 3.7 GHz or higher)"

    def test_ryzen_suffix_and_pro(self):
        cpu = describe_processor("AMD Ryzen 7 PRO 5850U")
        assert cpu.family == "Ryzen 7"
        assert cpu.model_number == "5850U"
        assert cpu.extra_info == "Pro"
        assert cpu.generation == "5th Gen"
        assert cpu.architecture_suffix == "Ultra low power"

    def test_threadripper(self):
        cpu = describe_processor("AMD Ryzen Threadripper 3970X")
        assert cpu.family == "Ryzen Threadripper"
        assert cpu.model_number == "3970X"
        assert cpu.generation == "3rd Gen"

    @pytest.mark.parametrize(
        "text,family",
        [
            ("AMD Phenom II X4 955", "Phenom II"),
            ("AMD Athlon 64 X2 4000+", "Athlon 64"),
            ("AMD A10-7850K", "A10"),
            ("AMD FX-8350", "FX"),
            ("AMD EPYC 7302", "EPYC"),
            ("AMD Sempron 145", "Other AMD"),
        ],
    )
    def test_legacy_families(self, text: str, family: str):
        cpu = describe_processor(text)
        assert cpu.brand is Brand.AMD
        assert cpu.family == family

    def test_fx_core_series(self):
        assert describe_processor("AMD FX-8350").extra_info == "Eight-Core"

    def test_phenom_core_count(self):
        assert describe_processor("AMD Phenom II X4 955").extra_info == "4 cores"


class TestXeon:
    def test_versioned_model(self):
        cpu = describe_processor("Intel Xeon E5-2680 v4 @ 2.40GHz")
        assert cpu.family == "Xeon"
        assert cpu.model_number == "E5-2680v4"
        assert cpu.generation == "v4"
        assert cpu.clock_speed_ghz == 2.4
        assert cpu.normalized_label == "Intel Xeon E5-2680v4 @ 2.4 GHz"

    def test_scalable_and_entry(self):
        assert describe_processor("Intel Xeon Gold 6130").model_number == "Gold 6130"
        assert describe_processor("Intel Xeon E-2236").model_number == "E-2236"

    def test_modern_xeon_passes(self, rules):
        assert classify_processor("Intel Xeon E5-2680 v4 @ 2.40GHz", rules).verdict.passes

    def test_old_xeon_fails(self, rules):
        verdict = classify_processor("Intel Xeon E5-2670 @ 2.60GHz", rules).verdict
        assert not verdict.passes
        assert verdict.reason.startswith("Requires a Xeon E5 v3 or later")


class TestOtherBrands:
    def test_snapdragon_generation(self):
        cpu = describe_processor("Qualcomm Snapdragon 8 Gen 2")
        assert cpu.brand is Brand.QUALCOMM
        assert cpu.family == "Snapdragon"
        assert cpu.model_number == "8"
        assert cpu.generation == "Gen 2"
        assert cpu.normalized_label == "Qualcomm Snapdragon 8 Gen 2"

    def test_apple_m_series(self):
        cpu = describe_processor("Apple M1 Pro")
        assert cpu.brand is Brand.APPLE
        assert cpu.family == "M1 Pro"

    def test_exynos(self):
        cpu = describe_processor("Samsung Exynos 2100")
        assert cpu.family == "Exynos"
        assert cpu.model_number == "2100"

    def test_unsupported_brand_fails_brand_check(self, rules):
        verdict = classify_processor("Qualcomm Snapdragon 8 Gen 2", rules).verdict
        assert verdict.reason == "Does not meet brand/model requirements: Qualcomm Snapdragon"


class TestUnrecognised:
    @pytest.mark.parametrize("value", [None, "", "   ", 42])
    def test_missing_input(self, value, rules):
        result = classify_processor(value, rules)
        assert result.classified.brand is Brand.UNKNOWN
        assert result.classified.status is ClassificationStatus.ABSENT
        assert result.verdict.reason == "Invalid processor data"

    def test_unrecognised_text_keeps_other_brand_and_unknown_family(self, rules):
        result = classify_processor("Procesador genérico 2.4 GHz", rules)
        cpu = result.classified
        assert cpu.brand is Brand.OTHER
        assert cpu.family == "Unknown"
        assert cpu.normalized_label == "Unknown"
        assert cpu.clock_speed_ghz == 2.4
        assert cpu.status is ClassificationStatus.DEGRADED
        assert not result.verdict.passes


@pytest.mark.parametrize(
    "text",
    [
        "Intel(R) Core(TM) i5-8500 @ 3.00GHz",
        "Intel Core i7-10700K 3.8 GHz",
        "AMD Ryzen 5 2600",
        "AMD Ryzen Threadripper 3970X",
        "Intel Xeon E5-2680 v4 @ 2.40GHz",
        "Intel Xeon Gold 6130",
    ],
)
def test_reclassifying_label_is_idempotent(text: str):
    first = describe_processor(text)
    second = describe_processor(first.normalized_label)
    assert second.normalized_label == first.normalized_label
    assert second.generation == first.generation


def test_classification_is_deterministic(rules):
    text = "Intel Core i5-8250U 1.6 GHz"
    assert classify_processor(text, rules) == classify_processor(text, rules)


@pytest.mark.parametrize("n,expected", [(1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"), (11, "11th"), (12, "12th"), (13, "13th"), (21, "21st"), (22, "22nd")])
def test_ordinal(n: int, expected: str):
    assert ordinal(n) == expected
