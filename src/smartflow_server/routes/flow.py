"""Flow endpoints — route classification and wizard navigation.

Both endpoints are stateless: the client sends the current context on
every call and receives a freshly computed decision.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from smartflow_rules.models.context import PatientContext
from smartflow_rules.models.flow import FlowDecision, NavigationState
from smartflow_rules.pipeline import SmartFlowPipeline

from smartflow_server.dependencies import get_pipeline

router = APIRouter(prefix="/flow", tags=["flow"])


class NavigationRequest(BaseModel):
    context: PatientContext
    current_step: str


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.post("/decision")
def classify(
    context: PatientContext,
    pipeline: SmartFlowPipeline = Depends(get_pipeline),
) -> FlowDecision:
    """Pick the consultation route for a patient context."""
    return pipeline.start(context).decision


@router.post("/navigation")
def navigate(
    body: NavigationRequest,
    pipeline: SmartFlowPipeline = Depends(get_pipeline),
) -> NavigationState:
    """Next step, skip flag and remaining minutes for ``current_step``."""
    return pipeline.start(body.context).state(body.current_step)
