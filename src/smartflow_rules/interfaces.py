"""Abstract interfaces for the collaborators around the Smart Flow core.

These ABCs define the contract that external implementations must fulfil.
The SDK ships one concrete implementation (the HTTP transcription client
in :mod:`smartflow_rules.transcription`); the rest live with the host
application.

Typical integration flow::

    pipeline = SmartFlowPipeline(store, backend=HttpTranscriptionBackend(url))
    navigator = pipeline.start(context)
    # ... wizard runs navigator.decision.required_steps ...

    # Recording finished
    result = await pipeline.process_recording(context, audio_bytes)
    # result.extracted / result.actions pre-populate the form

    # Optional deeper analysis by the host's generative-AI service
    analyzer: AnalysisService = MyAnalysisService(...)
    report = await analyzer.analyze(text, result.decision.ai_analysis_level)
"""

from abc import ABC, abstractmethod

from smartflow_rules.models.enums import AIAnalysisLevel
from smartflow_rules.models.extraction import TranscriptionResult


class TranscriptionBackend(ABC):
    """Interface for the recording-to-transcription service.

    Implementations upload the audio and return the transcript together
    with the backend's own free-text analysis.  Both strings feed the
    text extractor.
    """

    @abstractmethod
    async def transcribe(self, audio: bytes, filename: str) -> TranscriptionResult:
        """Transcribe one recording.

        Parameters
        ----------
        audio:
            Raw audio bytes as captured by the client.
        filename:
            Name reported to the backend (the extension hints the codec).

        Returns
        -------
        TranscriptionResult
            ``transcription`` and ``analysis`` strings; either may be empty.
        """
        ...


class AnalysisService(ABC):
    """Interface for the generative-AI clinical analysis service.

    The SDK does not define the prompt or the response schema; it only
    passes :attr:`FlowDecision.ai_analysis_level` as a depth hint.
    """

    @abstractmethod
    async def analyze(self, text: str, level: AIAnalysisLevel) -> dict:
        """Analyse clinical free text at the requested depth."""
        ...


class SequenceCounter(ABC):
    """Issues increasing sequence numbers per key.

    Folio numbering depends on this instead of module-level state so the
    host can back it with its database.
    """

    @abstractmethod
    def next_value(self, key: str) -> int:
        """Return the next value for ``key``, starting at 1."""
        ...

    @abstractmethod
    def snapshot(self) -> dict[str, int]:
        """Return the last value issued for every key."""
        ...
