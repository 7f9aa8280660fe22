"""
Domain models for bedside vital-sign observations.

These models represent the core clinical concepts and are framework-agnostic.
They use Pydantic for coercion at the boundary and are frozen once built: a
corrected submission is always a new instance.
"""

from collections.abc import Iterable
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    computed_field,
    field_serializer,
    field_validator,
)


class ClinicalFlag(str, Enum):
    """Named clinical conditions. Declaration order is the rule-table order."""

    HIGH_FEVER = "high_fever"
    LOW_TEMPERATURE = "low_temperature"
    HYPERTENSION = "hypertension"
    HYPOTENSION = "hypotension"
    TACHYCARDIA = "tachycardia"
    BRADYCARDIA = "bradycardia"
    HYPOXIA = "hypoxia"
    TACHYPNEA = "tachypnea"
    BRADYPNEA = "bradypnea"


def ordered_flags(flags: Iterable[ClinicalFlag]) -> list[ClinicalFlag]:
    """Return ``flags`` in rule-table order, dropping duplicates."""
    present = set(flags)
    return [flag for flag in ClinicalFlag if flag in present]


class Severity(str, Enum):
    """Overall status of one observation set."""

    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {Severity.NORMAL: 0, Severity.WARNING: 1, Severity.CRITICAL: 2}


class Consciousness(str, Enum):
    """Level of consciousness as charted by the nurse."""

    ALERT = "alert"
    DROWSY = "drowsy"
    CONFUSED = "confused"
    UNCONSCIOUS = "unconscious"


class TemperatureUnit(str, Enum):
    CELSIUS = "C"
    FAHRENHEIT = "F"


NUMERIC_FIELDS: tuple[str, ...] = (
    "temperature",
    "systolic_bp",
    "diastolic_bp",
    "heart_rate",
    "respiratory_rate",
    "oxygen_saturation",
    "pain_score",
    "blood_glucose",
)


class MeasurementInput(BaseModel):
    """
    One set of vital signs as submitted from a bedside form.

    Every measurement is optional here; completeness and plausibility are the
    validator's job. Form values may arrive as strings ("37.5", "98%", "") and
    are coerced on construction, with blanks treated as absent.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", allow_inf_nan=False)

    temperature: float | None = Field(
        None,
        validation_alias=AliasChoices("temperature", "temperatureCelsius"),
        description="Body temperature in ``temperature_unit``",
    )
    temperature_unit: TemperatureUnit = Field(
        TemperatureUnit.CELSIUS,
        validation_alias=AliasChoices("temperature_unit", "temperatureUnit"),
    )
    systolic_bp: float | None = Field(
        None, validation_alias=AliasChoices("systolic_bp", "systolicBP"), description="mmHg"
    )
    diastolic_bp: float | None = Field(
        None, validation_alias=AliasChoices("diastolic_bp", "diastolicBP"), description="mmHg"
    )
    heart_rate: float | None = Field(
        None, validation_alias=AliasChoices("heart_rate", "heartRate"), description="bpm"
    )
    respiratory_rate: float | None = Field(
        None,
        validation_alias=AliasChoices("respiratory_rate", "respiratoryRate"),
        description="breaths per minute",
    )
    oxygen_saturation: float | None = Field(
        None,
        validation_alias=AliasChoices("oxygen_saturation", "oxygenSaturation"),
        description="SpO2 percent",
    )
    pain_score: float | None = Field(
        None,
        validation_alias=AliasChoices("pain_score", "painScore", "pain"),
        description="0-10 scale",
    )
    blood_glucose: float | None = Field(
        None, validation_alias=AliasChoices("blood_glucose", "bloodGlucose"), description="mg/dL"
    )
    consciousness: Consciousness = Consciousness.ALERT
    device_used: str | None = Field(
        None, validation_alias=AliasChoices("device_used", "deviceUsed")
    )
    notes: str | None = None

    @field_validator(*NUMERIC_FIELDS, mode="before")
    @classmethod
    def blank_as_missing(cls, v: Any) -> Any:
        # bool is an int subclass and would otherwise pass as 0 or 1
        if isinstance(v, bool):
            raise ValueError("expected a number, not a boolean")
        if isinstance(v, str):
            v = v.strip().rstrip("%").strip()
            if not v:
                return None
        return v

    @field_validator("temperature_unit", "consciousness", mode="before")
    @classmethod
    def normalize_choice(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return cls.model_fields[info.field_name].default
        if isinstance(v, str):
            v = v.strip()
            return v.upper() if info.field_name == "temperature_unit" else v.lower()
        return v

    @field_validator("device_used", "notes", mode="before")
    @classmethod
    def text_or_none(cls, v: Any) -> Any:
        if v is None:
            return None
        text = str(v).strip()
        return text or None

    @computed_field(return_type=float | None)
    @property
    def temperature_celsius(self) -> float | None:
        """Unrounded Celsius temperature; every clinical rule reads this."""
        if self.temperature is None:
            return None
        if self.temperature_unit is TemperatureUnit.FAHRENHEIT:
            return (self.temperature - 32.0) * 5.0 / 9.0
        return self.temperature


class RecordMetadata(BaseModel):
    """Identity of an observation, supplied by the caller and never computed here."""

    model_config = ConfigDict(frozen=True)

    record_id: str = Field(min_length=1)
    subject_id: str = Field(min_length=1, description="Patient reference")
    recorder_id: str = Field(min_length=1, description="Nurse or device reference")
    recorded_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    subject_name: str | None = None
    location: str | None = Field(None, description="Room and bed, e.g. 201A")


class VitalRecord(BaseModel):
    """A validated measurement with its derived flags and severity."""

    model_config = ConfigDict(frozen=True)

    metadata: RecordMetadata
    measurement: MeasurementInput
    flags: frozenset[ClinicalFlag] = Field(default_factory=frozenset)
    severity: Severity
    alerts: tuple[str, ...] = Field(default_factory=tuple, description="One message per flag")
    verified: bool = False

    @field_serializer("flags")
    def serialize_flags(self, flags: frozenset[ClinicalFlag]) -> list[str]:
        return [flag.value for flag in ordered_flags(flags)]

    @property
    def record_id(self) -> str:
        return self.metadata.record_id

    @computed_field(return_type=bool)
    def requires_immediate_attention(self) -> bool:
        return self.severity is Severity.CRITICAL


class VitalsSummary(BaseModel):
    """Ward-level counts of records per severity."""

    total: int = Field(ge=0)
    normal: int = Field(ge=0)
    warning: int = Field(ge=0)
    critical: int = Field(ge=0)
    critical_record_ids: list[str] = Field(default_factory=list)

    def count(self, severity: Severity) -> int:
        return getattr(self, severity.value)
