"""Pydantic models for the reference tables in ``v1/const/``.

  - SymptomTerm: symptom keyword with optional spelling aliases
  - MedicationTerm: drug name with optional aliases
  - ExtractionCues: duration units, severity cues, blood-pressure cues,
    pain triggers and body locations used by the text extractor
  - VitalRange: plausibility range for one vital sign or body measure
"""

from typing import Dict, List

from pydantic import BaseModel, Field, field_validator


class SymptomTerm(BaseModel):
    """Symptom vocabulary entry from symptoms.yaml."""

    name: str
    aliases: List[str] = []

    @property
    def spellings(self) -> List[str]:
        """Lower-cased name followed by its aliases."""
        return [self.name.lower(), *(a.lower() for a in self.aliases)]


class MedicationTerm(BaseModel):
    """Medication vocabulary entry from medications.yaml."""

    name: str
    aliases: List[str] = []

    @property
    def spellings(self) -> List[str]:
        return [self.name.lower(), *(a.lower() for a in self.aliases)]


class ExtractionCues(BaseModel):
    """Cue tables from extraction.yaml."""

    duration_units: List[str] = Field(min_length=1)
    severity_cues: Dict[str, List[str]]
    blood_pressure_cues: List[str] = Field(min_length=1)
    pain_triggers: List[str] = Field(default=["dolor", "dolores"], min_length=1)
    # number of words after the trigger searched for a body location
    pain_window: int = 6
    body_locations: List[str] = []

    @field_validator("severity_cues")
    @classmethod
    def _known_levels(cls, v: Dict[str, List[str]]) -> Dict[str, List[str]]:
        unknown = set(v) - {"severo", "moderado"}
        if unknown:
            raise ValueError(f"unknown severity cue levels: {sorted(unknown)}")
        return v


class VitalRange(BaseModel):
    """Inclusive plausibility range from vital_ranges.yaml."""

    field: str
    label: str
    min: float
    max: float
    unit: str = ""

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max
