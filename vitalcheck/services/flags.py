"""
Threshold rules that raise clinical flags from a validated measurement set.

Rules are independent: every rule is evaluated and all that fire are
collected, so one measurement set can raise several flags at once. A rule whose
field is missing simply does not fire.
"""

import operator
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from vitalcheck.domain.models import ClinicalFlag, MeasurementInput, ordered_flags
from vitalcheck.services.validator import PLAUSIBLE_RANGES, reading


@dataclass(frozen=True)
class ThresholdRule:
    """Raise ``flag`` when ``field`` compares strictly against ``threshold``."""

    flag: ClinicalFlag
    field: str
    symbol: str
    threshold: float
    label: str

    @property
    def compare(self) -> Callable[[float, float], bool]:
        return operator.gt if self.symbol == ">" else operator.lt

    def fires(self, measurement: MeasurementInput) -> bool:
        value = reading(measurement, self.field)
        return value is not None and self.compare(value, self.threshold)


FLAG_RULES: tuple[ThresholdRule, ...] = (
    ThresholdRule(ClinicalFlag.HIGH_FEVER, "temperature", ">", 38.5, "High fever"),
    ThresholdRule(ClinicalFlag.LOW_TEMPERATURE, "temperature", "<", 36.0, "Low temperature"),
    ThresholdRule(ClinicalFlag.HYPERTENSION, "systolic_bp", ">", 140, "Hypertension"),
    ThresholdRule(ClinicalFlag.HYPOTENSION, "systolic_bp", "<", 90, "Hypotension"),
    ThresholdRule(ClinicalFlag.TACHYCARDIA, "heart_rate", ">", 100, "Tachycardia"),
    ThresholdRule(ClinicalFlag.BRADYCARDIA, "heart_rate", "<", 60, "Bradycardia"),
    ThresholdRule(ClinicalFlag.HYPOXIA, "oxygen_saturation", "<", 95, "Hypoxia"),
    ThresholdRule(ClinicalFlag.TACHYPNEA, "respiratory_rate", ">", 20, "Tachypnea"),
    ThresholdRule(ClinicalFlag.BRADYPNEA, "respiratory_rate", "<", 12, "Bradypnea"),
)

_RULE_FOR_FLAG = {rule.flag: rule for rule in FLAG_RULES}

_UNITS = {
    **{field: bounds.unit for field, bounds in PLAUSIBLE_RANGES.items()},
    "respiratory_rate": "/min",
}


def generate_flags(measurement: MeasurementInput) -> frozenset[ClinicalFlag]:
    """
    Evaluate every rule against ``measurement``.

    Only call this after ``validate`` returned no errors; on partial input it
    still returns whatever the present fields trigger.
    """
    return frozenset(rule.flag for rule in FLAG_RULES if rule.fires(measurement))


def _format_value(field: str, value: float) -> str:
    text = f"{value:.1f}" if field == "temperature" else f"{value:g}"
    unit = _UNITS.get(field, "")
    if unit == "%":
        return f"{text}%"
    return f"{text} {unit}".rstrip()


def describe_flags(measurement: MeasurementInput, flags: Iterable[ClinicalFlag]) -> list[str]:
    """
    Human-readable message per flag, e.g. ``"Hypoxia: oxygen saturation 90% (< 95)"``.
    """
    messages = []
    for flag in ordered_flags(flags):
        rule = _RULE_FOR_FLAG[flag]
        value = reading(measurement, rule.field)
        field_name = rule.field.replace("_", " ").replace(" bp", " BP")
        if value is None:
            messages.append(f"{rule.label}: {field_name} ({rule.symbol} {rule.threshold:g})")
            continue
        messages.append(
            f"{rule.label}: {field_name} {_format_value(rule.field, value)} "
            f"({rule.symbol} {rule.threshold:g})"
        )
    return messages
