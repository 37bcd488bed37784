"""SmartFlowPipeline — ties the classifier, extractor and transcription together.

The pipeline holds no per-consultation state.  Each call takes the current
``PatientContext`` and returns fresh values:

    start()               context ──► FlowNavigator
    analyze_transcript()  context + text ──► TranscriptAnalysis
    process_recording()   context + audio ──► backend ──► TranscriptAnalysis

When a transcript arrives the decision is recomputed with
``has_transcription`` set, and a new decision replaces the old one.

Usage::

    store = RulesetStore()
    store.load()
    pipeline = SmartFlowPipeline(store, backend=HttpTranscriptionBackend(url))

    navigator = pipeline.start(context)
    result = await pipeline.process_recording(context, audio_bytes)
    form = pipeline.merge_extracted(form, result.extracted)
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from smartflow_rules.actions import build_actions
from smartflow_rules.classifier import FlowClassifier
from smartflow_rules.extractor import TextExtractor
from smartflow_rules.interfaces import TranscriptionBackend
from smartflow_rules.models.context import PatientContext
from smartflow_rules.models.extraction import ExtractedData, TranscriptAnalysis
from smartflow_rules.navigator import FlowNavigator
from smartflow_rules.ruleset import RulesetStore
from smartflow_rules.validators import RangeValidator

logger = logging.getLogger(__name__)


class SmartFlowPipeline:
    """Entry point for hosts driving a consultation.

    Args:
        store: a loaded :class:`RulesetStore`
        backend: optional transcription backend; without one,
            :meth:`process_recording` is unavailable
    """

    def __init__(
        self,
        store: RulesetStore,
        backend: TranscriptionBackend | None = None,
    ) -> None:
        self._store = store
        self._backend = backend
        self.classifier = FlowClassifier(store)
        self.extractor = TextExtractor(store)
        self.validator = RangeValidator(store)

    # ==================================================================
    # Routing
    # ==================================================================

    def start(
        self, context: PatientContext, *, now: datetime | None = None
    ) -> FlowNavigator:
        """Classify the context and return a navigator over the decision."""
        navigator = FlowNavigator.from_context(self.classifier, context, now=now)
        logger.info(
            "Consultation routed: route=%s, estimated_time=%d, steps=%d",
            navigator.decision.route.value,
            navigator.decision.estimated_time,
            len(navigator.decision.required_steps),
        )
        return navigator

    # ==================================================================
    # Transcript handling
    # ==================================================================

    def analyze_transcript(
        self,
        context: PatientContext,
        transcript: str,
        analysis_text: str = "",
        *,
        now: datetime | None = None,
    ) -> TranscriptAnalysis:
        """Extract fields and actions from text and refresh the decision."""
        updated = context.model_copy(update={"has_transcription": True})
        decision = self.classifier.classify(updated, now=now)
        extracted = self.extractor.extract(transcript, analysis_text)
        actions = build_actions(updated, extracted)
        return TranscriptAnalysis(decision=decision, extracted=extracted, actions=actions)

    async def process_recording(
        self,
        context: PatientContext,
        audio: bytes,
        filename: str = "recording.webm",
        *,
        now: datetime | None = None,
    ) -> TranscriptAnalysis:
        """Send audio to the backend, then analyse the returned text.

        Raises:
            ValueError: if the pipeline was built without a backend.
            TranscriptionError: if the backend call fails.
        """
        if self._backend is None:
            raise ValueError("No transcription backend configured")

        result = await self._backend.transcribe(audio, filename)
        return self.analyze_transcript(
            context, result.transcription, result.analysis, now=now,
        )

    # ==================================================================
    # Form merge
    # ==================================================================

    @staticmethod
    def merge_extracted(form_data: dict[str, Any], extracted: ExtractedData) -> dict[str, Any]:
        """Overlay non-empty extracted fields onto a copy of ``form_data``.

        Keys are written in camelCase (``painLocation``, ``bloodPressure``),
        the spelling the client form uses.
        """
        merged = dict(form_data)
        for key, value in extracted.model_dump(mode="json", by_alias=True).items():
            if value:
                merged[key] = value
        return merged
