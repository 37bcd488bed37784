"""Models for advisory range validation of vitals and anthropometry.

Validation never blocks data entry; it returns a report the form can show.
Unset measurements (``None`` or ``0``) are skipped.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, computed_field
from pydantic.alias_generators import to_camel


class _FormModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class VitalSigns(_FormModel):
    systolic: Optional[float] = None
    diastolic: Optional[float] = None
    heart_rate: Optional[float] = None
    respiratory_rate: Optional[float] = None
    temperature: Optional[float] = None
    oxygen_saturation: Optional[float] = None
    pain_scale: Optional[float] = None


class Anthropometry(_FormModel):
    weight: Optional[float] = None
    height: Optional[float] = None
    bmi: Optional[float] = None
    waist_circumference: Optional[float] = None
    hip_circumference: Optional[float] = None


class ValidationIssue(BaseModel):
    field: str
    message: str
    section: Optional[str] = None


class ValidationReport(BaseModel):
    issues: List[ValidationIssue] = []

    @computed_field
    @property
    def is_valid(self) -> bool:
        return not self.issues
