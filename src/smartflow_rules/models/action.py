"""Smart action models — suggested changes to the in-progress form.

Each action targets one form field or section and carries a payload typed
for that target:

  - SymptomsAutoFill / MedicationsAutoFill: pre-populate a list field
  - GeriatricSuggestion: recommend a geriatric assessment section
  - PainAssessmentSuggestion: recommend a pain scale, with location if known
  - BloodPressureValidation: flag whether a dictated reading is normal

The discriminated ``SmartAction`` union uses the ``target`` field as its
discriminator so Pydantic can deserialise API payloads directly into the
correct type.
"""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from smartflow_rules.constants import ACTION_CONFIDENCE, PAIN_SCALE

from .enums import ActionType


# --- Payloads ---

class SymptomsPayload(BaseModel):
    symptoms: List[str]


class MedicationsPayload(BaseModel):
    medications: List[str]


class GeriatricPayload(BaseModel):
    recommended: bool = True
    priority: Literal["high", "medium", "low"] = "high"


class PainAssessmentPayload(BaseModel):
    """Pain scale marker plus the body location found in the transcript."""

    scale: str = PAIN_SCALE
    location: Optional[str] = None


class BloodPressurePayload(BaseModel):
    """Raw ``SYS/DIA`` reading and its advisory normality flag."""

    value: str
    is_normal: bool


# --- Actions ---

class SymptomsAutoFill(BaseModel):
    """Fill the symptoms field with extracted keywords."""

    type: Literal[ActionType.AUTO_FILL] = ActionType.AUTO_FILL
    target: Literal["symptoms"] = "symptoms"
    data: SymptomsPayload
    confidence: float = Field(default=ACTION_CONFIDENCE["symptoms"], ge=0.0, le=1.0)


class MedicationsAutoFill(BaseModel):
    """Fill the medications field with extracted drug names."""

    type: Literal[ActionType.AUTO_FILL] = ActionType.AUTO_FILL
    target: Literal["medications"] = "medications"
    data: MedicationsPayload
    confidence: float = Field(default=ACTION_CONFIDENCE["medications"], ge=0.0, le=1.0)


class GeriatricSuggestion(BaseModel):
    """Recommend the geriatric assessment section for older patients."""

    type: Literal[ActionType.SUGGEST] = ActionType.SUGGEST
    target: Literal["geriatric_assessment"] = "geriatric_assessment"
    data: GeriatricPayload = GeriatricPayload()
    confidence: float = Field(
        default=ACTION_CONFIDENCE["geriatric_assessment"], ge=0.0, le=1.0
    )


class PainAssessmentSuggestion(BaseModel):
    """Recommend a pain assessment when pain is mentioned."""

    type: Literal[ActionType.SUGGEST] = ActionType.SUGGEST
    target: Literal["pain_assessment"] = "pain_assessment"
    data: PainAssessmentPayload
    confidence: float = Field(default=ACTION_CONFIDENCE["pain_assessment"], ge=0.0, le=1.0)


class BloodPressureValidation(BaseModel):
    """Ask the clinician to confirm a dictated blood-pressure reading."""

    type: Literal[ActionType.VALIDATE] = ActionType.VALIDATE
    target: Literal["blood_pressure"] = "blood_pressure"
    data: BloodPressurePayload
    confidence: float = Field(default=ACTION_CONFIDENCE["blood_pressure"], ge=0.0, le=1.0)


# Discriminated union — Pydantic picks the right type based on the "target" field.
SmartAction = Annotated[
    Union[
        SymptomsAutoFill,
        MedicationsAutoFill,
        GeriatricSuggestion,
        PainAssessmentSuggestion,
        BloodPressureValidation,
    ],
    Field(discriminator="target"),
]
