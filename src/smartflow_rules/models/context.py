"""Patient context — the classifier's only input.

The web client sends camelCase keys (``hasHistory``, ``lastVisit``,
``isEmergency`` ...).  Every field carries a camelCase alias and the model
accepts either spelling.  Instances are frozen: a changed context is a new
value, never an in-place update.

``emergency`` and ``is_emergency`` are both kept.  The client sets one or
the other depending on which screen built the context, and either one is
enough to route to an emergency consultation.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .enums import ClinicalSeverity


class PatientContext(BaseModel):
    """Snapshot of what is known about the patient when a consultation starts."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    age: int = Field(ge=0)
    gender: Optional[str] = None
    has_history: Optional[bool] = None
    # ISO date ("2026-10-01") or datetime ("2026-10-01T09:30:00Z")
    last_visit: Optional[str] = None
    symptoms: list[str] = []
    medications: Optional[list[str]] = None
    severity: Optional[ClinicalSeverity] = None
    emergency: Optional[bool] = None
    is_emergency: Optional[bool] = None
    is_follow_up: Optional[bool] = None
    has_transcription: Optional[bool] = None

    @property
    def has_prior_contact(self) -> bool:
        """True if the patient has history on file or this is a follow-up."""
        return bool(self.has_history or self.is_follow_up)

    @property
    def flagged_emergency(self) -> bool:
        return bool(self.emergency or self.is_emergency)
