"""Enumerations shared by the Smart Flow models.

``ClinicalSeverity`` (reported on the patient context) and ``TextSeverity``
(inferred from transcript wording) are deliberately separate types: the
second is an advisory reading of free text and uses ``severo`` where the
first uses ``grave``.
"""

import enum


class ClinicalSeverity(str, enum.Enum):
    """Severity recorded by the clinician on the patient context."""

    LEVE = "leve"
    MODERADO = "moderado"
    GRAVE = "grave"


class TextSeverity(str, enum.Enum):
    """Severity guessed from intensity words in a transcript."""

    LEVE = "leve"
    MODERADO = "moderado"
    SEVERO = "severo"


class Route(str, enum.Enum):
    """Consultation pathway chosen by the classifier."""

    EMERGENCY = "emergency"
    QUICK = "quick"
    EVOLUTION = "evolution"
    COMPLETE = "complete"


class Priority(str, enum.Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class AIAnalysisLevel(str, enum.Enum):
    """Depth hint passed to the external analysis service."""

    BASIC = "basic"
    DETAILED = "detailed"
    COMPREHENSIVE = "comprehensive"


class AutoFillLevel(str, enum.Enum):
    """How aggressively extracted data should pre-populate the form."""

    MINIMAL = "minimal"
    PARTIAL = "partial"
    COMPLETE = "complete"


class ActionType(str, enum.Enum):
    AUTO_FILL = "auto_fill"
    SUGGEST = "suggest"
    VALIDATE = "validate"
    OPTIMIZE = "optimize"


class FormType(str, enum.Enum):
    """Clinical record kinds that receive a folio."""

    ADULTO = "adulto"
    PEDIATRICO = "pediatrico"
    EVOLUCION = "evolucion"
