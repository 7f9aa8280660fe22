"""
Field-level validation errors.

The validator never raises: it returns a mapping of field name to error code so
a caller can surface every problem in one pass. ``VitalsValidationError`` only
exists to carry that mapping through a ``Result``.
"""

from enum import Enum


class FieldError(str, Enum):
    """Per-field error codes."""

    REQUIRED = "required"  # RequiredFieldMissing
    OUT_OF_RANGE = "out_of_range"  # OutOfPlausibleRange

    # Raised only while parsing raw form input
    NOT_A_NUMBER = "not_a_number"
    INVALID_CHOICE = "invalid_choice"


ValidationResult = dict[str, FieldError]


class VitalsValidationError(Exception):
    """A measurement set was rejected; ``errors`` holds every failing field."""

    def __init__(self, errors: ValidationResult) -> None:
        self.errors: ValidationResult = dict(errors)
        fields = ", ".join(f"{name}={code.value}" for name, code in sorted(self.errors.items()))
        super().__init__(f"Invalid vital signs: {fields}")

    @property
    def fields(self) -> list[str]:
        return sorted(self.errors)
