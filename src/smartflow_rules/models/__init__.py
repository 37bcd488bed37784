"""Public model re-exports for smartflow_rules.

Consumers should import from ``smartflow_rules.models`` rather than
reaching into sub-modules directly.
"""

# --- Enums ---
from smartflow_rules.models.enums import (
    ActionType,
    AIAnalysisLevel,
    AutoFillLevel,
    ClinicalSeverity,
    FormType,
    Priority,
    Route,
    TextSeverity,
)

# --- Context / flow ---
from smartflow_rules.models.context import PatientContext
from smartflow_rules.models.flow import (
    FlowDecision,
    NavigationState,
    Predicate,
    RouteProfile,
    RoutingRule,
    RoutingTable,
)

# --- Actions ---
from smartflow_rules.models.action import (
    BloodPressurePayload,
    BloodPressureValidation,
    GeriatricPayload,
    GeriatricSuggestion,
    MedicationsAutoFill,
    MedicationsPayload,
    PainAssessmentPayload,
    PainAssessmentSuggestion,
    SmartAction,
    SymptomsAutoFill,
    SymptomsPayload,
)

# --- Extraction ---
from smartflow_rules.models.extraction import (
    ExtractedData,
    TranscriptAnalysis,
    TranscriptionResult,
)

# --- Reference tables ---
from smartflow_rules.models.schema import (
    ExtractionCues,
    MedicationTerm,
    SymptomTerm,
    VitalRange,
)

# --- Validation ---
from smartflow_rules.models.validation import (
    Anthropometry,
    ValidationIssue,
    ValidationReport,
    VitalSigns,
)

__all__ = [
    # Enums
    "ActionType",
    "AIAnalysisLevel",
    "AutoFillLevel",
    "ClinicalSeverity",
    "FormType",
    "Priority",
    "Route",
    "TextSeverity",
    # Context / flow
    "PatientContext",
    "FlowDecision",
    "NavigationState",
    "Predicate",
    "RouteProfile",
    "RoutingRule",
    "RoutingTable",
    # Actions
    "BloodPressurePayload",
    "BloodPressureValidation",
    "GeriatricPayload",
    "GeriatricSuggestion",
    "MedicationsAutoFill",
    "MedicationsPayload",
    "PainAssessmentPayload",
    "PainAssessmentSuggestion",
    "SmartAction",
    "SymptomsAutoFill",
    "SymptomsPayload",
    # Extraction
    "ExtractedData",
    "TranscriptAnalysis",
    "TranscriptionResult",
    # Reference tables
    "ExtractionCues",
    "MedicationTerm",
    "SymptomTerm",
    "VitalRange",
    # Validation
    "Anthropometry",
    "ValidationIssue",
    "ValidationReport",
    "VitalSigns",
]
