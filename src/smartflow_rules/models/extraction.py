"""Extraction models — structured data read from transcript text.

``ExtractedData`` is recomputed every time new transcript text arrives and
is never persisted by the SDK.  All fields are optional in spirit: empty
lists and ``None`` mean "nothing recognised".
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .action import SmartAction
from .enums import TextSeverity
from .flow import FlowDecision


class ExtractedData(BaseModel):
    """Fields recognised in a transcript and its analysis text.

    ``symptoms`` has set semantics: each vocabulary entry appears at most
    once, in vocabulary order.  ``medications`` keeps every occurrence in
    order of appearance.

    API responses and form merges use camelCase keys (``painLocation``,
    ``bloodPressure``) to match the web client; either spelling is accepted
    on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    symptoms: List[str] = []
    medications: List[str] = []
    duration: Optional[str] = None
    pain_location: Optional[str] = None
    blood_pressure: Optional[str] = None
    # Advisory only: a reading of intensity words, not a clinical judgement
    severity: Optional[TextSeverity] = None

    @property
    def is_empty(self) -> bool:
        return not (
            self.symptoms
            or self.medications
            or self.duration
            or self.pain_location
            or self.blood_pressure
        )


class TranscriptionResult(BaseModel):
    """Response of the recording/transcription backend."""

    transcription: str = ""
    analysis: str = ""


class TranscriptAnalysis(BaseModel):
    """Everything the pipeline derives from one transcript."""

    decision: FlowDecision
    extracted: ExtractedData
    actions: List[SmartAction]
