"""
Reduce a flag set to one overall severity.

Precedence, first match wins:
1. any flag in the critical subset -> CRITICAL
2. any flag at all -> WARNING
3. otherwise -> NORMAL

There is no history: each call computes the status fresh from its flags.
"""

from collections.abc import Iterable

from vitalcheck.domain.models import ClinicalFlag, Severity

# Placeholder business rule pending clinical sign-off; overridable via RulesConfig
DEFAULT_CRITICAL_FLAGS: frozenset[ClinicalFlag] = frozenset(
    {ClinicalFlag.HIGH_FEVER, ClinicalFlag.HYPOTENSION, ClinicalFlag.HYPOXIA}
)


def classify(
    flags: Iterable[ClinicalFlag],
    critical_flags: Iterable[ClinicalFlag] = DEFAULT_CRITICAL_FLAGS,
) -> Severity:
    """Classify ``flags``. Never raises for well-typed input."""
    present = frozenset(flags)
    if present & frozenset(critical_flags):
        return Severity.CRITICAL
    if present:
        return Severity.WARNING
    return Severity.NORMAL
