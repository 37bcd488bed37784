"""Advisory validators for blood pressure and other measurements.

Nothing here blocks data entry.  ``is_normal_blood_pressure`` classifies a
dictated reading; :class:`RangeValidator` checks form values against the
plausibility ranges in ``v1/const/vital_ranges.yaml`` and returns a report.
"""

from __future__ import annotations

import logging

from smartflow_rules.constants import (
    BP_DIASTOLIC_MAX,
    BP_DIASTOLIC_MIN,
    BP_SYSTOLIC_MAX,
    BP_SYSTOLIC_MIN,
)
from smartflow_rules.models.schema import VitalRange
from smartflow_rules.models.validation import (
    Anthropometry,
    ValidationIssue,
    ValidationReport,
    VitalSigns,
)
from smartflow_rules.ruleset import RulesetStore

logger = logging.getLogger(__name__)


def parse_blood_pressure(reading: str) -> tuple[int, int] | None:
    """Split ``"SYS/DIA"`` into two integers, or None if malformed."""
    parts = reading.split("/")
    if len(parts) != 2:
        return None
    try:
        return int(parts[0].strip()), int(parts[1].strip())
    except ValueError:
        return None


def is_normal_blood_pressure(reading: str) -> bool:
    """True iff systolic and diastolic both fall in the normal ranges.

    Malformed readings are reported as not normal.
    """
    parsed = parse_blood_pressure(reading)
    if parsed is None:
        return False
    systolic, diastolic = parsed
    return (
        BP_SYSTOLIC_MIN <= systolic <= BP_SYSTOLIC_MAX
        and BP_DIASTOLIC_MIN <= diastolic <= BP_DIASTOLIC_MAX
    )


class RangeValidator:
    """Checks vitals and anthropometry against loaded ranges."""

    def __init__(self, store: RulesetStore) -> None:
        self._vital_ranges = store.vital_ranges
        self._anthropometry_ranges = store.anthropometry_ranges

    def validate_vital_signs(self, vitals: VitalSigns) -> ValidationReport:
        issues = self._check(vitals.model_dump(), self._vital_ranges, "vitalSigns")
        if vitals.systolic and vitals.diastolic and vitals.systolic <= vitals.diastolic:
            issues.append(
                ValidationIssue(
                    field="blood_pressure",
                    message="La presión sistólica debe ser mayor que la diastólica",
                    section="vitalSigns",
                )
            )
        return ValidationReport(issues=issues)

    def validate_anthropometry(self, measures: Anthropometry) -> ValidationReport:
        issues = self._check(measures.model_dump(), self._anthropometry_ranges, "anthropometry")
        return ValidationReport(issues=issues)

    @staticmethod
    def _check(
        values: dict, ranges: list[VitalRange], section: str
    ) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        for rng in ranges:
            value = values.get(rng.field)
            # unset fields (None or 0) are not checked
            if not value:
                continue
            if not rng.contains(value):
                unit = f" {rng.unit}" if rng.unit else ""
                issues.append(
                    ValidationIssue(
                        field=rng.field,
                        message=f"{rng.label} debe estar entre {rng.min:g} y {rng.max:g}{unit}",
                        section=section,
                    )
                )
        if issues:
            logger.debug("%s: %d out-of-range values", section, len(issues))
        return issues
