"""Validation endpoints — advisory range checks for form measurements."""

from fastapi import APIRouter, Depends

from smartflow_rules.models.validation import Anthropometry, ValidationReport, VitalSigns
from smartflow_rules.pipeline import SmartFlowPipeline

from smartflow_server.dependencies import get_pipeline

router = APIRouter(prefix="/validation", tags=["validation"])


@router.post("/vital-signs")
def validate_vital_signs(
    body: VitalSigns,
    pipeline: SmartFlowPipeline = Depends(get_pipeline),
) -> ValidationReport:
    return pipeline.validator.validate_vital_signs(body)


@router.post("/anthropometry")
def validate_anthropometry(
    body: Anthropometry,
    pipeline: SmartFlowPipeline = Depends(get_pipeline),
) -> ValidationReport:
    return pipeline.validator.validate_anthropometry(body)
