"""RulesetStore — loads all YAML tables from ``v1/`` into typed models.

This is the single source of truth for vocabularies and routing data at
runtime.  The store is loaded once at startup and is read-only afterwards,
so the classifier and extractor built on it can be shared freely.

Usage::

    store = RulesetStore()          # defaults to the bundled v1/ tables
    store.load()                    # parse all YAML files

    profile = store.get_profile("quick")
    names = store.symptom_names()
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from smartflow_rules.models.enums import Route
from smartflow_rules.models.flow import RouteProfile, RoutingRule, RoutingTable
from smartflow_rules.models.schema import (
    ExtractionCues,
    MedicationTerm,
    SymptomTerm,
    VitalRange,
)

logger = logging.getLogger(__name__)

# Tables bundled into the wheel by the hatch force-include in pyproject.toml
PACKAGE_RULESET_DIR = Path(__file__).resolve().parent / "v1"


# ---------------------------------------------------------------------------
# Utility helpers
# ---------------------------------------------------------------------------

def find_repo_root(start: Optional[Path] = None) -> Path:
    """Walk upwards from *start* to find the repo root (dir with pyproject.toml or .git).

    Falls back to cwd if no marker is found.
    """
    p = (start or Path(__file__).resolve()).parent
    for parent in [p, *p.parents]:
        if (parent / "pyproject.toml").exists() or (parent / ".git").exists():
            return parent
    return Path.cwd()


def default_ruleset_dir() -> Path:
    """Directory of the bundled YAML tables.

    Wheels ship the tables inside the package (``smartflow_rules/v1``); a
    source checkout keeps them in ``v1/`` at the repo root.
    """
    if PACKAGE_RULESET_DIR.is_dir():
        return PACKAGE_RULESET_DIR
    return find_repo_root() / "v1"


def load_yaml(path: Path | str) -> Any:
    """Load a single YAML file and return the parsed contents."""
    if isinstance(path, str):
        path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing YAML file: {path}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


# ---------------------------------------------------------------------------
# RulesetStore
# ---------------------------------------------------------------------------

class RulesetStore:
    """Loads all YAML from ``v1/`` and provides typed lookup.

    Attributes populated after :meth:`load`:

        symptoms          — list[SymptomTerm] in file order
        medications       — list[MedicationTerm] in file order
        cues              — ExtractionCues
        vital_ranges      — list[VitalRange]
        anthropometry_ranges — list[VitalRange]
        routing           — RoutingTable (profiles + ordered rules)
    """

    def __init__(self, ruleset_dir: str | Path | None = None) -> None:
        if ruleset_dir is None:
            ruleset_dir = default_ruleset_dir()
        self._base = Path(ruleset_dir)

        # Populated by load()
        self.symptoms: list[SymptomTerm] = []
        self.medications: list[MedicationTerm] = []
        self.cues: ExtractionCues | None = None
        self.vital_ranges: list[VitalRange] = []
        self.anthropometry_ranges: list[VitalRange] = []
        self.routing: RoutingTable | None = None

    @property
    def loaded(self) -> bool:
        return self.routing is not None and self.cues is not None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Parse all YAML files under the ruleset directory into typed models.

        Call this once at startup.  Raises ``FileNotFoundError`` if expected
        YAML files are missing and ``ValueError`` if a table is malformed.
        """
        self._load_vocabularies()
        self._load_ranges()
        self._load_routing()
        logger.info(
            "RulesetStore loaded: %d symptoms, %d medications, %d routes, %d routing rules",
            len(self.symptoms),
            len(self.medications),
            len(self.routing.profiles),
            len(self.routing.rules),
        )

    def _load_vocabularies(self) -> None:
        """Load v1/const vocabularies and extraction cues."""
        const_dir = self._base / "const"

        symptoms = [SymptomTerm(**raw) for raw in load_yaml(const_dir / "symptoms.yaml")]
        medications = [
            MedicationTerm(**raw) for raw in load_yaml(const_dir / "medications.yaml")
        ]
        self.symptoms = _unique_by_name(symptoms, "symptoms.yaml")
        self.medications = _unique_by_name(medications, "medications.yaml")
        self.cues = ExtractionCues(**load_yaml(const_dir / "extraction.yaml"))

    def _load_ranges(self) -> None:
        """Load v1/const/vital_ranges.yaml."""
        raw = load_yaml(self._base / "const" / "vital_ranges.yaml")
        self.vital_ranges = [VitalRange(**item) for item in raw.get("vital_signs", [])]
        self.anthropometry_ranges = [
            VitalRange(**item) for item in raw.get("anthropometry", [])
        ]

    def _load_routing(self) -> None:
        """Load v1/rules/routes.yaml and check the table is usable.

        Pydantic ``ValidationError`` is re-raised as ``ValueError`` with the
        file path so startup failures point at the offending table.
        """
        path = self._base / "rules" / "routes.yaml"
        raw = load_yaml(path)
        try:
            self.routing = RoutingTable(**raw)
        except ValidationError as exc:
            raise ValueError(f"Invalid routing table in {path}: {exc}") from exc

        missing = set(Route) - set(self.routing.profiles)
        if missing:
            raise ValueError(
                f"Routing table {path} lacks profiles for: "
                f"{sorted(r.value for r in missing)}"
            )

    # ------------------------------------------------------------------
    # Lookup helpers
    # ------------------------------------------------------------------

    @property
    def rules(self) -> list[RoutingRule]:
        return self.routing.rules

    def get_profile(self, route: Route | str) -> RouteProfile:
        """Return the profile for a route.

        Raises:
            KeyError: if the route is unknown.
        """
        try:
            route = Route(route)
        except ValueError:
            raise KeyError(route) from None
        return self.routing.profiles[route]

    def symptom_names(self) -> list[str]:
        return [s.name for s in self.symptoms]

    def medication_names(self) -> list[str]:
        return [m.name for m in self.medications]


def _unique_by_name(terms: list, source: str) -> list:
    """Drop repeated entries (same name), keeping the first; log each drop."""
    seen: set[str] = set()
    result = []
    for term in terms:
        key = term.name.lower()
        if key in seen:
            logger.warning("Duplicate entry '%s' in %s ignored", term.name, source)
            continue
        seen.add(key)
        result.append(term)
    return result
