"""
End-to-end assessment of one vital-sign submission.

Pipeline: validate -> generate flags -> classify -> VitalRecord.

Key patterns:
- Explicit Result type: a rejected submission is expected business logic,
  not an exceptional condition, so nothing here raises for bad input
- The rule functions stay pure; only this layer logs
- Records are immutable; a correction produces a new record
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import structlog

from vitalcheck.config import RulesConfig, get_config
from vitalcheck.domain.errors import ValidationResult, VitalsValidationError
from vitalcheck.domain.models import (
    MeasurementInput,
    RecordMetadata,
    Severity,
    VitalRecord,
    VitalsSummary,
    ordered_flags,
)
from vitalcheck.services.flags import describe_flags, generate_flags
from vitalcheck.services.severity import classify
from vitalcheck.services.validator import parse_form, validate

logger = structlog.get_logger(__name__)

ValueT = TypeVar("ValueT")
ErrorT = TypeVar("ErrorT", bound=BaseException)


@dataclass(frozen=True)
class Result(Generic[ValueT, ErrorT]):
    """Outcome of one assessment: the record, or the error that rejected it."""

    value: ValueT | None = None
    error: ErrorT | None = None

    def __post_init__(self) -> None:
        if (self.value is None) == (self.error is None):
            raise ValueError("Result needs exactly one of value or error")

    @classmethod
    def ok(cls, value: ValueT) -> "Result[ValueT, ErrorT]":
        return cls(value=value)

    @classmethod
    def err(cls, error: ErrorT) -> "Result[ValueT, ErrorT]":
        return cls(error=error)

    def is_ok(self) -> bool:
        return self.error is None

    def is_err(self) -> bool:
        return self.error is not None

    def unwrap(self) -> ValueT:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    def unwrap_err(self) -> ErrorT:
        if self.error is None:
            raise ValueError("unwrap_err() on an accepted result")
        return self.error


AssessmentResult = Result[VitalRecord, VitalsValidationError]


class VitalsAssessor:
    """
    Turns submissions into ``VitalRecord``s.

    Holds only immutable rule configuration, so one instance can be shared
    across threads and requests.
    """

    def __init__(self, config: RulesConfig | None = None) -> None:
        self.config = config or get_config().rules
        self.logger = logger.bind(component="vitals_assessor")

    def assess(self, measurement: MeasurementInput, metadata: RecordMetadata) -> AssessmentResult:
        """Validate ``measurement`` and, if valid, derive its flags and severity."""
        return self._finish(measurement, metadata, validate(measurement))

    def assess_form(self, form: Mapping[str, Any], metadata: RecordMetadata) -> AssessmentResult:
        """Same as ``assess`` for raw form values (strings, camelCase keys)."""
        measurement, errors = parse_form(form)
        return self._finish(measurement, metadata, errors)

    def reassess(self, record: VitalRecord, corrected: MeasurementInput) -> AssessmentResult:
        """
        Re-run the pipeline on a corrected measurement.

        The returned record keeps the original metadata and starts unverified;
        ``record`` itself is left untouched.
        """
        result = self.assess(corrected, record.metadata)
        if result.is_ok():
            self.logger.info(
                "vital_record_reassessed",
                record_id=record.record_id,
                previous_severity=record.severity.value,
                severity=result.unwrap().severity.value,
            )
        return result

    def _finish(
        self, measurement: MeasurementInput, metadata: RecordMetadata, errors: ValidationResult
    ) -> AssessmentResult:
        if errors:
            self.logger.warning(
                "vitals_validation_failed",
                record_id=metadata.record_id,
                subject_id=metadata.subject_id,
                errors={field: code.value for field, code in sorted(errors.items())},
            )
            return Result.err(VitalsValidationError(errors))

        flags = generate_flags(measurement)
        severity = classify(flags, self.config.critical_flags)
        record = VitalRecord(
            metadata=metadata,
            measurement=measurement,
            flags=flags,
            severity=severity,
            alerts=tuple(describe_flags(measurement, flags)),
        )

        self.logger.info(
            "vital_record_assessed",
            record_id=metadata.record_id,
            subject_id=metadata.subject_id,
            severity=severity.value,
            flags=[flag.value for flag in ordered_flags(flags)],
        )
        return Result.ok(record)


def filter_records(
    records: Iterable[VitalRecord],
    severity: Severity | None = None,
    search: str | None = None,
) -> list[VitalRecord]:
    """
    Records matching ``severity`` (any when None) and ``search``.

    The search is a case-insensitive substring match over subject name,
    subject id and location.
    """
    needle = (search or "").strip().lower()
    matches = []
    for record in records:
        if severity is not None and record.severity is not severity:
            continue
        if needle:
            meta = record.metadata
            haystack = [meta.subject_name or "", meta.subject_id, meta.location or ""]
            if not any(needle in text.lower() for text in haystack):
                continue
        matches.append(record)
    return matches


def summarize(records: Iterable[VitalRecord]) -> VitalsSummary:
    """Count records per severity and list the critical ones."""
    counts = {severity: 0 for severity in Severity}
    critical_ids = []
    for record in records:
        counts[record.severity] += 1
        if record.severity is Severity.CRITICAL:
            critical_ids.append(record.record_id)

    return VitalsSummary(
        total=sum(counts.values()),
        normal=counts[Severity.NORMAL],
        warning=counts[Severity.WARNING],
        critical=counts[Severity.CRITICAL],
        critical_record_ids=critical_ids,
    )
