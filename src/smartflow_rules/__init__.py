"""smartflow_rules — rule-based consultation routing and transcript extraction.

Public API:
    FlowClassifier    — picks the consultation route for a PatientContext
    FlowNavigator     — next step / skip / time remaining over a decision
    TextExtractor     — reads symptoms, medications, vitals from transcripts
    SmartFlowPipeline — classifier + extractor + transcription in one object
    RulesetStore      — loads YAML tables into typed models with lookup helpers
    RangeValidator    — advisory range checks for vitals and anthropometry
    FolioGenerator    — record folios from an injected sequence counter

Collaborator interfaces:
    TranscriptionBackend — ABC for the recording-to-text service
    AnalysisService      — ABC for the generative-AI analysis service
    SequenceCounter      — ABC for persistent folio sequences

Helpers:
    build_actions            — smart actions from extracted data
    is_normal_blood_pressure — advisory "SYS/DIA" check
"""

from smartflow_rules.actions import build_actions
from smartflow_rules.classifier import FlowClassifier
from smartflow_rules.extractor import TextExtractor
from smartflow_rules.folio import Folio, FolioGenerator, FolioStats, InMemorySequenceCounter
from smartflow_rules.interfaces import AnalysisService, SequenceCounter, TranscriptionBackend
from smartflow_rules.models import (
    ExtractedData,
    FlowDecision,
    PatientContext,
    SmartAction,
    TranscriptAnalysis,
    TranscriptionResult,
)
from smartflow_rules.navigator import FlowNavigator
from smartflow_rules.pipeline import SmartFlowPipeline
from smartflow_rules.ruleset import RulesetStore
from smartflow_rules.transcription import HttpTranscriptionBackend, TranscriptionError
from smartflow_rules.validators import RangeValidator, is_normal_blood_pressure

__all__ = [
    # Engine & store
    "FlowClassifier",
    "FlowNavigator",
    "TextExtractor",
    "SmartFlowPipeline",
    "RulesetStore",
    "RangeValidator",
    # Folios
    "Folio",
    "FolioGenerator",
    "FolioStats",
    "InMemorySequenceCounter",
    # Interfaces
    "AnalysisService",
    "SequenceCounter",
    "TranscriptionBackend",
    "HttpTranscriptionBackend",
    "TranscriptionError",
    # Data models
    "ExtractedData",
    "FlowDecision",
    "PatientContext",
    "SmartAction",
    "TranscriptAnalysis",
    "TranscriptionResult",
    # Helpers
    "build_actions",
    "is_normal_blood_pressure",
]
