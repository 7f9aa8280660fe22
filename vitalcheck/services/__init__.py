"""
Clinical rule services.

The validator, flag generator and severity classifier are pure functions with
no I/O; ``vitalcheck.services.assessment`` chains them and owns logging.
"""

from .flags import FLAG_RULES, ThresholdRule, describe_flags, generate_flags
from .severity import DEFAULT_CRITICAL_FLAGS, classify
from .validator import PLAUSIBLE_RANGES, REQUIRED_FIELDS, PlausibleRange, parse_form, validate

__all__ = [
    "DEFAULT_CRITICAL_FLAGS",
    "FLAG_RULES",
    "PLAUSIBLE_RANGES",
    "REQUIRED_FIELDS",
    "PlausibleRange",
    "ThresholdRule",
    "classify",
    "describe_flags",
    "generate_flags",
    "parse_form",
    "validate",
]
