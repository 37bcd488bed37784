"""Smart action rules — turn extracted data into form suggestions.

Each rule is evaluated independently and may add one action.  Output order
is fixed: symptoms, medications, geriatric assessment, pain assessment,
blood pressure.  Confidence values are constants, so the same text always
yields the same actions.
"""

from __future__ import annotations

from smartflow_rules.constants import GERIATRIC_AGE_THRESHOLD
from smartflow_rules.models.action import (
    BloodPressurePayload,
    BloodPressureValidation,
    GeriatricSuggestion,
    MedicationsAutoFill,
    MedicationsPayload,
    PainAssessmentPayload,
    PainAssessmentSuggestion,
    SmartAction,
    SymptomsAutoFill,
    SymptomsPayload,
)
from smartflow_rules.models.context import PatientContext
from smartflow_rules.models.extraction import ExtractedData
from smartflow_rules.validators import is_normal_blood_pressure


def build_actions(context: PatientContext, extracted: ExtractedData) -> list[SmartAction]:
    actions: list[SmartAction] = []

    if extracted.symptoms:
        actions.append(SymptomsAutoFill(data=SymptomsPayload(symptoms=extracted.symptoms)))

    if extracted.medications:
        actions.append(
            MedicationsAutoFill(data=MedicationsPayload(medications=extracted.medications))
        )

    if context.age > GERIATRIC_AGE_THRESHOLD:
        actions.append(GeriatricSuggestion())

    if any("dolor" in s.lower() for s in extracted.symptoms):
        actions.append(
            PainAssessmentSuggestion(
                data=PainAssessmentPayload(location=extracted.pain_location)
            )
        )

    if extracted.blood_pressure:
        actions.append(
            BloodPressureValidation(
                data=BloodPressurePayload(
                    value=extracted.blood_pressure,
                    is_normal=is_normal_blood_pressure(extracted.blood_pressure),
                )
            )
        )

    return actions
