"""
Tests for the clinical flag rules in `vitalcheck/services/flags.py`.
"""

from __future__ import annotations

from typing import Any

import pytest
from hypothesis import given
from hypothesis import strategies as st

from vitalcheck.domain.models import ClinicalFlag, MeasurementInput, ordered_flags
from vitalcheck.services.flags import FLAG_RULES, describe_flags, generate_flags

BASELINE: dict[str, Any] = {
    "temperature": 37.0,
    "systolic_bp": 120,
    "diastolic_bp": 80,
    "heart_rate": 72,
    "respiratory_rate": 16,
    "oxygen_saturation": 98,
}


def _measurement(**overrides: Any) -> MeasurementInput:
    return MeasurementInput(**{**BASELINE, **overrides})


class TestGenerateFlags:
    def test_normal_measurement_raises_nothing(self) -> None:
        assert generate_flags(_measurement()) == frozenset()

    def test_high_fever(self) -> None:
        assert generate_flags(_measurement(temperature=39.0)) == {ClinicalFlag.HIGH_FEVER}

    def test_hypertension_and_tachycardia_together(self) -> None:
        flags = generate_flags(_measurement(systolic_bp=150, diastolic_bp=95, heart_rate=110))
        assert flags == {ClinicalFlag.HYPERTENSION, ClinicalFlag.TACHYCARDIA}

    def test_hypoxia(self) -> None:
        assert generate_flags(_measurement(oxygen_saturation=90)) == {ClinicalFlag.HYPOXIA}

    @pytest.mark.parametrize(
        ("field", "quiet", "firing", "flag"),
        [
            ("temperature", 38.5, 38.6, ClinicalFlag.HIGH_FEVER),
            ("temperature", 36.0, 35.9, ClinicalFlag.LOW_TEMPERATURE),
            ("systolic_bp", 140, 141, ClinicalFlag.HYPERTENSION),
            ("systolic_bp", 90, 89, ClinicalFlag.HYPOTENSION),
            ("heart_rate", 100, 101, ClinicalFlag.TACHYCARDIA),
            ("heart_rate", 60, 59, ClinicalFlag.BRADYCARDIA),
            ("oxygen_saturation", 95, 94, ClinicalFlag.HYPOXIA),
            ("respiratory_rate", 20, 21, ClinicalFlag.TACHYPNEA),
            ("respiratory_rate", 12, 11, ClinicalFlag.BRADYPNEA),
        ],
    )
    def test_thresholds_are_strict(
        self, field: str, quiet: float, firing: float, flag: ClinicalFlag
    ) -> None:
        assert flag not in generate_flags(_measurement(**{field: quiet}))
        assert generate_flags(_measurement(**{field: firing})) == {flag}

    def test_rules_are_independent(self) -> None:
        flags = generate_flags(
            _measurement(
                temperature=39.5,
                systolic_bp=85,
                heart_rate=130,
                respiratory_rate=28,
                oxygen_saturation=88,
            )
        )

        assert flags == {
            ClinicalFlag.HIGH_FEVER,
            ClinicalFlag.HYPOTENSION,
            ClinicalFlag.TACHYCARDIA,
            ClinicalFlag.TACHYPNEA,
            ClinicalFlag.HYPOXIA,
        }

    def test_missing_field_fires_no_rule(self) -> None:
        assert generate_flags(MeasurementInput(heart_rate=130)) == {ClinicalFlag.TACHYCARDIA}
        assert generate_flags(MeasurementInput()) == frozenset()

    def test_fahrenheit_is_converted_before_rules(self) -> None:
        flags = generate_flags(_measurement(temperature=102.2, temperature_unit="F"))
        assert flags == {ClinicalFlag.HIGH_FEVER}

    def test_fahrenheit_just_above_fever_threshold_fires(self) -> None:
        # 101.304 F is 38.5022 C
        flags = generate_flags(_measurement(temperature=101.304, temperature_unit="F"))
        assert flags == {ClinicalFlag.HIGH_FEVER}

    def test_fahrenheit_just_below_low_threshold_fires(self) -> None:
        # 96.795 F is 35.9972 C
        flags = generate_flags(_measurement(temperature=96.795, temperature_unit="F"))
        assert flags == {ClinicalFlag.LOW_TEMPERATURE}

    def test_diastolic_pressure_has_no_rule(self) -> None:
        assert generate_flags(_measurement(diastolic_bp=130)) == frozenset()

    @given(
        temperature=st.floats(min_value=35.0, max_value=42.0),
        heart_rate=st.integers(min_value=40, max_value=200),
        respiratory_rate=st.integers(min_value=4, max_value=40),
    )
    def test_generate_flags_is_pure(
        self, temperature: float, heart_rate: int, respiratory_rate: int
    ) -> None:
        measurement = _measurement(
            temperature=temperature, heart_rate=heart_rate, respiratory_rate=respiratory_rate
        )
        assert generate_flags(measurement) == generate_flags(measurement)


class TestFlagRules:
    def test_one_rule_per_flag(self) -> None:
        assert [rule.flag for rule in FLAG_RULES] == list(ClinicalFlag)

    def test_ordered_flags_follows_rule_table(self) -> None:
        flags = {ClinicalFlag.HYPOXIA, ClinicalFlag.HIGH_FEVER, ClinicalFlag.TACHYCARDIA}
        assert ordered_flags(flags) == [
            ClinicalFlag.HIGH_FEVER,
            ClinicalFlag.TACHYCARDIA,
            ClinicalFlag.HYPOXIA,
        ]


class TestDescribeFlags:
    def test_messages_name_value_and_threshold(self) -> None:
        measurement = _measurement(temperature=39.0, systolic_bp=150, oxygen_saturation=90)

        messages = describe_flags(measurement, generate_flags(measurement))

        assert messages == [
            "High fever: temperature 39.0 °C (> 38.5)",
            "Hypertension: systolic BP 150 mmHg (> 140)",
            "Hypoxia: oxygen saturation 90% (< 95)",
        ]

    def test_no_flags_no_messages(self) -> None:
        assert describe_flags(_measurement(), frozenset()) == []

    def test_respiratory_message(self) -> None:
        measurement = _measurement(respiratory_rate=8)
        assert describe_flags(measurement, {ClinicalFlag.BRADYPNEA}) == [
            "Bradypnea: respiratory rate 8 /min (< 12)"
        ]
