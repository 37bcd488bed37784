"""FlowClassifier — picks the consultation route for a patient context.

The classifier is a pure function of its inputs: it flattens the
``PatientContext`` into named facts, runs the ordered rules from
``v1/rules/routes.yaml`` through :class:`FactEvaluator`, and copies the
matching route's profile into a :class:`FlowDecision`.

Default rule order (first match wins):

    emergency   explicit emergency flag, or severity == grave
    evolution   prior history / follow-up with a visit < 30 days ago
    quick       severity leve (or absent) and at most 2 symptoms
    complete    everything else

"Now" is injectable so that the day count since the last visit, and with it
the decision, is reproducible.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Any

from smartflow_rules.constants import DEFAULT_ROUTING_SEVERITY, SECONDS_PER_DAY
from smartflow_rules.evaluator import FactEvaluator
from smartflow_rules.models.context import PatientContext
from smartflow_rules.models.flow import FlowDecision
from smartflow_rules.ruleset import RulesetStore

logger = logging.getLogger(__name__)


def parse_visit_time(value: str | None) -> datetime | None:
    """Parse an ISO date or datetime string into an aware UTC datetime.

    Date-only values mean midnight.  Naive values are taken as UTC.
    Returns None for blank or unparseable input.
    """
    if value is None or not value.strip():
        return None
    text = value.strip()
    # fromisoformat() only accepts a trailing "Z" from Python 3.11 onwards
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.warning("Ignoring unparseable last_visit value: %r", value)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def days_since(value: str | None, now: datetime) -> int | None:
    """Whole days elapsed between ``value`` and ``now`` (floored).

    A visit in the future gives a negative count.
    """
    visit = parse_visit_time(value)
    if visit is None:
        return None
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return math.floor((now - visit).total_seconds() / SECONDS_PER_DAY)


class FlowClassifier:
    """Maps a :class:`PatientContext` to a :class:`FlowDecision`.

    Args:
        store: a loaded :class:`RulesetStore` instance
    """

    def __init__(self, store: RulesetStore) -> None:
        self._store = store
        self._evaluator = FactEvaluator()

    def classify(
        self, context: PatientContext, *, now: datetime | None = None
    ) -> FlowDecision:
        """Select the route for ``context``.

        Never raises for a valid context: the routing table always ends
        with an unconditional rule.
        """
        facts = self.build_facts(context, now=now)
        rule = self._evaluator.first_match(self._store.rules, facts)
        if rule is None:
            # RoutingTable validation guarantees an unconditional last rule
            raise RuntimeError("routing table produced no route")

        logger.debug("Context routed to %s by rule %s", rule.route.value, rule.id)
        return FlowDecision.from_profile(rule.route, self._store.get_profile(rule.route))

    @staticmethod
    def build_facts(
        context: PatientContext, *, now: datetime | None = None
    ) -> dict[str, Any]:
        """Flatten a context into the facts routing predicates refer to."""
        if now is None:
            now = datetime.now(timezone.utc)

        severity = (
            context.severity.value if context.severity is not None
            else DEFAULT_ROUTING_SEVERITY
        )
        return {
            "age": context.age,
            "gender": context.gender,
            "emergency": bool(context.emergency),
            "is_emergency": bool(context.is_emergency),
            "routing_severity": severity,
            "has_prior_contact": context.has_prior_contact,
            "days_since_last_visit": days_since(context.last_visit, now),
            "symptom_count": len(context.symptoms),
            "medication_count": len(context.medications or []),
            "has_transcription": bool(context.has_transcription),
        }
