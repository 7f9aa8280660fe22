"""Vital-sign validation and alerting for bedside nursing observations.

The three core operations are pure functions: ``validate`` reports field-level
errors, ``generate_flags`` raises clinical flags and ``classify`` reduces a flag
set to one overall severity. ``VitalsAssessor`` chains them into a ``VitalRecord``.
"""

from vitalcheck.domain.errors import FieldError, ValidationResult, VitalsValidationError
from vitalcheck.domain.models import (
    ClinicalFlag,
    Consciousness,
    MeasurementInput,
    RecordMetadata,
    Severity,
    TemperatureUnit,
    VitalRecord,
    VitalsSummary,
    ordered_flags,
)
from vitalcheck.services.assessment import Result, VitalsAssessor, filter_records, summarize
from vitalcheck.services.flags import describe_flags, generate_flags
from vitalcheck.services.severity import DEFAULT_CRITICAL_FLAGS, classify
from vitalcheck.services.validator import parse_form, validate

__all__ = [
    "ClinicalFlag",
    "Consciousness",
    "DEFAULT_CRITICAL_FLAGS",
    "FieldError",
    "MeasurementInput",
    "RecordMetadata",
    "Result",
    "Severity",
    "TemperatureUnit",
    "ValidationResult",
    "VitalRecord",
    "VitalsAssessor",
    "VitalsSummary",
    "VitalsValidationError",
    "classify",
    "describe_flags",
    "filter_records",
    "generate_flags",
    "ordered_flags",
    "parse_form",
    "summarize",
    "validate",
]
