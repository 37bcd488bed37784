"""Smart Flow constants shared across the SDK.

These values are referenced by the classifier, extractor, and action
builder.  They complement the YAML tables under ``v1/``.

Several constants can be overridden via environment variables so that
deployments can adjust clinical thresholds without code changes.
"""

import os

# Every route's required step list starts here.  Enforced when route
# profiles are loaded.
START_STEP = "identification"

# Severity assumed for routing when the context carries none.
DEFAULT_ROUTING_SEVERITY = "leve"

# Seconds in one day — "days since last visit" is floor(elapsed / this).
SECONDS_PER_DAY = 86_400

# Patients strictly older than this age get a geriatric assessment suggestion.
# Overridable via GERIATRIC_AGE_THRESHOLD env var.
GERIATRIC_AGE_THRESHOLD = int(os.getenv("GERIATRIC_AGE_THRESHOLD", "65"))

# Inclusive blood-pressure ranges considered normal (mmHg).
# Overridable via BP_SYSTOLIC_MIN / BP_SYSTOLIC_MAX / BP_DIASTOLIC_MIN /
# BP_DIASTOLIC_MAX env vars.
BP_SYSTOLIC_MIN = int(os.getenv("BP_SYSTOLIC_MIN", "90"))
BP_SYSTOLIC_MAX = int(os.getenv("BP_SYSTOLIC_MAX", "140"))
BP_DIASTOLIC_MIN = int(os.getenv("BP_DIASTOLIC_MIN", "60"))
BP_DIASTOLIC_MAX = int(os.getenv("BP_DIASTOLIC_MAX", "90"))

# Fixed confidence per smart-action target.
ACTION_CONFIDENCE: dict[str, float] = {
    "symptoms": 0.85,
    "medications": 0.90,
    "geriatric_assessment": 0.95,
    "pain_assessment": 0.80,
    "blood_pressure": 0.88,
}

# Pain scale marker attached to pain assessment suggestions.
PAIN_SCALE = "1-10"

# Human-readable route names for API responses and logging.
ROUTE_NAMES: dict[str, str] = {
    "emergency": "Urgencia",
    "quick": "Consulta rápida",
    "evolution": "Nota de evolución",
    "complete": "Consulta completa",
}
