"""FactEvaluator — resolves routing rules against patient facts.

The classifier flattens a ``PatientContext`` into a dict of named facts
(``routing_severity``, ``days_since_last_visit``, ``symptom_count`` ...) and
asks the evaluator which rule fires first.  Each rule's ``when`` predicates
are AND-ed; rules are tried in order and the first full match wins.

A predicate whose fact is missing or ``None`` never matches, so a rule that
depends on an absent value (e.g. no last visit on file) simply falls
through to the next one.
"""

from __future__ import annotations

import logging
from typing import Any

from smartflow_rules.models.flow import Predicate, RoutingRule

logger = logging.getLogger(__name__)


class FactEvaluator:
    """Evaluates ordered routing rules against a facts dict."""

    def first_match(
        self, rules: list[RoutingRule], facts: dict[str, Any]
    ) -> RoutingRule | None:
        """Return the first rule whose predicates all hold, or None."""
        for rule in rules:
            if all(self.eval_predicate(pred, facts) for pred in rule.when):
                return rule
        return None

    # ------------------------------------------------------------------
    # Predicate evaluation
    # ------------------------------------------------------------------

    def eval_predicate(self, pred: Predicate, facts: dict[str, Any]) -> bool:
        """Evaluate a single predicate against the facts dict.

        If the referenced fact is absent or None, the predicate evaluates
        to False (the rule won't match).
        """
        fact = facts.get(pred.fact)
        if fact is None:
            return False
        return self._compare(pred.op, fact, pred.value)

    @staticmethod
    def _compare(op: str, fact: Any, value: Any) -> bool:
        """Apply an operator to a fact and an expected value.

        Handles type coercion for numeric comparisons (values from YAML
        may be strings).
        """
        if op == "eq":
            return fact == value

        if op == "ne":
            return fact != value

        # --- Numeric comparisons ---
        if op in ("lt", "le", "gt", "ge", "between"):
            try:
                num = float(fact)
            except (TypeError, ValueError):
                return False

            if op == "lt":
                return num < float(value)
            if op == "le":
                return num <= float(value)
            if op == "gt":
                return num > float(value)
            if op == "ge":
                return num >= float(value)
            if op == "between":
                # value is expected to be [min, max]
                lo, hi = float(value[0]), float(value[1])
                return lo <= num <= hi

        # --- Membership ---
        if op == "in":
            return fact in value

        if op == "not_in":
            return fact not in value

        if op == "contains":
            if isinstance(fact, (list, tuple, set)):
                return value in fact
            return str(value) in str(fact)

        logger.warning("Unknown predicate operator: %s", op)
        return False
