"""TextExtractor — reads structured fields out of transcript text.

Matching runs case-insensitively over the transcript joined with the
analysis text returned by the transcription backend:

  - symptoms: substring match of each vocabulary entry (or an alias);
    reported once each, in vocabulary order
  - medications: whole-word match; every occurrence, in text order,
    reported by canonical name
  - duration: first ``<number> <unit>`` phrase
  - severity: advisory reading of intensity words (severo > moderado > leve)
  - blood pressure: first ``SYS/DIA`` followed by mmHg / presión / tensión
  - pain location: first body location shortly after "dolor" or "dolores"

Every vocabulary and cue list comes from ``v1/const/``.  Empty or
unrecognisable text yields an empty :class:`ExtractedData`; nothing here
raises on input text.
"""

from __future__ import annotations

import logging
import re

from smartflow_rules.actions import build_actions
from smartflow_rules.models.action import SmartAction
from smartflow_rules.models.context import PatientContext
from smartflow_rules.models.enums import TextSeverity
from smartflow_rules.models.extraction import ExtractedData
from smartflow_rules.ruleset import RulesetStore

logger = logging.getLogger(__name__)

_WORD_RE = re.compile(r"\w+")


def _alternation(words: list[str]) -> str:
    """Regex alternation, longest first so "meses" wins over "mes"."""
    ordered = sorted({w.lower() for w in words}, key=len, reverse=True)
    return "|".join(re.escape(w) for w in ordered)


class TextExtractor:
    """Extracts :class:`ExtractedData` and smart actions from free text.

    Regexes are compiled once from the store's tables.

    Args:
        store: a loaded :class:`RulesetStore` instance
    """

    def __init__(self, store: RulesetStore) -> None:
        cues = store.cues
        self._symptoms = store.symptoms

        self._medication_names: dict[str, str] = {}
        for term in store.medications:
            for spelling in term.spellings:
                self._medication_names[spelling] = term.name
        self._medication_re = (
            re.compile(rf"\b({_alternation(list(self._medication_names))})\b", re.IGNORECASE)
            if self._medication_names else None
        )

        self._duration_re = re.compile(
            rf"(\d+)\s*({_alternation(cues.duration_units)})\b", re.IGNORECASE
        )
        self._bp_re = re.compile(
            rf"(\d{{2,3}}/\d{{2,3}})\s*(?:{_alternation(cues.blood_pressure_cues)})",
            re.IGNORECASE,
        )

        self._severe_cues = [c.lower() for c in cues.severity_cues.get("severo", [])]
        self._moderate_cues = [c.lower() for c in cues.severity_cues.get("moderado", [])]

        self._pain_re = re.compile(rf"\b(?:{_alternation(cues.pain_triggers)})\b")
        self._pain_window = cues.pain_window
        self._body_locations = {b.lower() for b in cues.body_locations}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def extract(self, transcript: str, analysis_text: str = "") -> ExtractedData:
        """Parse transcript plus analysis text into :class:`ExtractedData`."""
        text = f"{transcript or ''} {analysis_text or ''}".lower()
        if not text.strip():
            return ExtractedData()

        data = ExtractedData(
            symptoms=self._find_symptoms(text),
            medications=self._find_medications(text),
            duration=self._find_duration(text),
            pain_location=self._find_pain_location(text),
            blood_pressure=self._find_blood_pressure(text),
            severity=self._infer_severity(text),
        )
        logger.debug(
            "Extracted %d symptoms, %d medications, duration=%s, bp=%s",
            len(data.symptoms), len(data.medications), data.duration, data.blood_pressure,
        )
        return data

    def derive_actions(
        self,
        context: PatientContext,
        transcript: str,
        analysis_text: str = "",
    ) -> list[SmartAction]:
        """Extract from the text, then build the smart actions for it."""
        return build_actions(context, self.extract(transcript, analysis_text))

    # ------------------------------------------------------------------
    # Field extractors (text is already lower-cased)
    # ------------------------------------------------------------------

    def _find_symptoms(self, text: str) -> list[str]:
        found: list[str] = []
        for term in self._symptoms:
            if term.name not in found and any(s in text for s in term.spellings):
                found.append(term.name)
        return found

    def _find_medications(self, text: str) -> list[str]:
        if self._medication_re is None:
            return []
        return [
            self._medication_names[m.group(1).lower()]
            for m in self._medication_re.finditer(text)
        ]

    def _find_duration(self, text: str) -> str | None:
        match = self._duration_re.search(text)
        if match is None:
            return None
        return f"{match.group(1)} {match.group(2)}"

    def _find_blood_pressure(self, text: str) -> str | None:
        match = self._bp_re.search(text)
        return match.group(1) if match else None

    def _infer_severity(self, text: str) -> TextSeverity:
        if any(cue in text for cue in self._severe_cues):
            return TextSeverity.SEVERO
        if any(cue in text for cue in self._moderate_cues):
            return TextSeverity.MODERADO
        return TextSeverity.LEVE

    def _find_pain_location(self, text: str) -> str | None:
        """First body location within a few words after the pain trigger."""
        for match in self._pain_re.finditer(text):
            following = _WORD_RE.findall(text, match.end())[: self._pain_window]
            for word in following:
                if word in self._body_locations:
                    return word
        return None
