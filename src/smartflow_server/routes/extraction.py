"""Transcript endpoints — extraction, smart actions, and recordings.

``/recordings`` forwards base64 audio to the configured transcription
backend and returns the same payload as ``/actions``.  It answers 503 when
no backend URL is configured and 502 when the backend fails.
"""

from fastapi import APIRouter, Depends
from pydantic import Base64Bytes, BaseModel

from smartflow_rules.models.context import PatientContext
from smartflow_rules.models.extraction import ExtractedData, TranscriptAnalysis
from smartflow_rules.pipeline import SmartFlowPipeline

from smartflow_server.dependencies import get_pipeline

router = APIRouter(tags=["extraction"])


class ExtractionRequest(BaseModel):
    transcript: str = ""
    analysis: str = ""


class ActionsRequest(ExtractionRequest):
    context: PatientContext


class RecordingRequest(BaseModel):
    context: PatientContext
    audio: Base64Bytes
    filename: str = "recording.webm"


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.post("/extraction")
def extract(
    body: ExtractionRequest,
    pipeline: SmartFlowPipeline = Depends(get_pipeline),
) -> ExtractedData:
    """Read symptoms, medications, duration and vitals out of the text."""
    return pipeline.extractor.extract(body.transcript, body.analysis)


@router.post("/actions")
def analyze(
    body: ActionsRequest,
    pipeline: SmartFlowPipeline = Depends(get_pipeline),
) -> TranscriptAnalysis:
    """Refresh the decision and derive smart actions for a transcript."""
    return pipeline.analyze_transcript(body.context, body.transcript, body.analysis)


@router.post("/recordings")
async def process_recording(
    body: RecordingRequest,
    pipeline: SmartFlowPipeline = Depends(get_pipeline),
) -> TranscriptAnalysis:
    """Transcribe a recording and analyse the result."""
    return await pipeline.process_recording(body.context, body.audio, body.filename)
