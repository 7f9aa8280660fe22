"""
Plausibility checks for a submitted set of vital signs.

``validate`` is a pure function: it never raises and never logs. It returns a
mapping of field name to ``FieldError`` with every problem found, so the caller
can show all of them in one pass. An empty mapping means the input is valid.

Bounds are inclusive. Diastolic pressure and respiratory rate carry no
plausibility bound and are accepted as entered.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import AliasChoices
from pydantic import ValidationError as PydanticValidationError

from vitalcheck.domain.errors import FieldError, ValidationResult
from vitalcheck.domain.models import NUMERIC_FIELDS, MeasurementInput

REQUIRED_FIELDS: tuple[str, ...] = (
    "temperature",
    "systolic_bp",
    "diastolic_bp",
    "heart_rate",
    "respiratory_rate",
    "oxygen_saturation",
)


@dataclass(frozen=True)
class PlausibleRange:
    """Inclusive physiological range for one measurement."""

    minimum: float
    maximum: float
    unit: str = ""

    def contains(self, value: float) -> bool:
        return self.minimum <= value <= self.maximum


PLAUSIBLE_RANGES: dict[str, PlausibleRange] = {
    "temperature": PlausibleRange(35.0, 42.0, "°C"),
    "systolic_bp": PlausibleRange(70, 250, "mmHg"),
    "heart_rate": PlausibleRange(40, 200, "bpm"),
    "oxygen_saturation": PlausibleRange(70, 100, "%"),
    "pain_score": PlausibleRange(0, 10),
}


def reading(measurement: MeasurementInput, field: str) -> float | None:
    """Value of ``field`` as the rules see it (temperature always in Celsius)."""
    if field == "temperature":
        return measurement.temperature_celsius
    return getattr(measurement, field)


def validate(measurement: MeasurementInput) -> ValidationResult:
    """Check completeness and plausibility of ``measurement``."""
    errors: ValidationResult = {}

    for field in REQUIRED_FIELDS:
        if reading(measurement, field) is None:
            errors[field] = FieldError.REQUIRED

    for field, bounds in PLAUSIBLE_RANGES.items():
        value = reading(measurement, field)
        if value is not None and not bounds.contains(value):
            errors[field] = FieldError.OUT_OF_RANGE

    return errors


def _form_keys() -> dict[str, str]:
    keys: dict[str, str] = {}
    for name, info in MeasurementInput.model_fields.items():
        keys[name] = name
        if isinstance(info.validation_alias, AliasChoices):
            for choice in info.validation_alias.choices:
                if isinstance(choice, str):
                    keys[choice] = name
    return keys


_FIELD_FOR_KEY = _form_keys()


def parse_form(form: Mapping[str, Any]) -> tuple[MeasurementInput, ValidationResult]:
    """
    Build a ``MeasurementInput`` from raw form values and validate it.

    Keys may be snake_case field names or the camelCase names a web form
    sends. Values that cannot be parsed are dropped from the measurement and
    reported as ``not_a_number`` (numeric fields) or ``invalid_choice``
    (consciousness, temperature unit), merged with the regular checks.
    Unknown keys are ignored.

    Returns:
        The parsed measurement and the combined error mapping.
    """
    data: dict[str, Any] = {}
    for key, value in form.items():
        name = _FIELD_FOR_KEY.get(key)
        if name is not None:
            data[name] = value

    form_errors: ValidationResult = {}
    while True:
        try:
            measurement = MeasurementInput.model_validate(data)
            break
        except PydanticValidationError as exc:
            locations = [str(err["loc"][0]) for err in exc.errors() if err["loc"]]
            rejected = {_FIELD_FOR_KEY[loc] for loc in locations if loc in _FIELD_FOR_KEY}
            # Anything not attributable to a submitted field is a programming error
            if not rejected or len(rejected) < len(set(locations)) or not rejected.issubset(data):
                raise
            for name in rejected:
                form_errors[name] = (
                    FieldError.NOT_A_NUMBER if name in NUMERIC_FIELDS else FieldError.INVALID_CHOICE
                )
                del data[name]

    errors = validate(measurement)
    errors.update(form_errors)
    return measurement, errors
