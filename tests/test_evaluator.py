"""FactEvaluator unit tests — predicate operators and first-match rules.

Each operator has at least one positive and one negative case.

Operator reference (from evaluator._compare):
    eq, ne              — equality / inequality
    lt, le, gt, ge      — numeric comparisons (auto-coerces strings to float)
    between             — inclusive range check, value = [lo, hi]
    in, not_in          — fact membership in a value list
    contains            — substring (str) or element (list) membership
"""

import pytest

from smartflow_rules.evaluator import FactEvaluator
from smartflow_rules.models.enums import Route
from smartflow_rules.models.flow import Predicate, RoutingRule


@pytest.fixture
def evaluator():
    return FactEvaluator()


def _rule(rule_id, route, *preds):
    return RoutingRule(id=rule_id, route=route, when=list(preds))


# =====================================================================
# Predicate operators
# =====================================================================


class TestPredicateOperators:

    def test_eq(self, evaluator):
        pred = Predicate(fact="f", op="eq", value="grave")
        assert evaluator.eval_predicate(pred, {"f": "grave"}) is True
        assert evaluator.eval_predicate(pred, {"f": "leve"}) is False

    def test_eq_bool(self, evaluator):
        pred = Predicate(fact="emergency", op="eq", value=True)
        assert evaluator.eval_predicate(pred, {"emergency": True}) is True
        assert evaluator.eval_predicate(pred, {"emergency": False}) is False

    def test_ne(self, evaluator):
        pred = Predicate(fact="f", op="ne", value="leve")
        assert evaluator.eval_predicate(pred, {"f": "grave"}) is True
        assert evaluator.eval_predicate(pred, {"f": "leve"}) is False

    def test_lt(self, evaluator):
        pred = Predicate(fact="days", op="lt", value=30)
        assert evaluator.eval_predicate(pred, {"days": 29}) is True
        assert evaluator.eval_predicate(pred, {"days": 30}) is False

    def test_le(self, evaluator):
        pred = Predicate(fact="count", op="le", value=2)
        assert evaluator.eval_predicate(pred, {"count": 2}) is True
        assert evaluator.eval_predicate(pred, {"count": 3}) is False

    def test_gt(self, evaluator):
        pred = Predicate(fact="age", op="gt", value=65)
        assert evaluator.eval_predicate(pred, {"age": 66}) is True
        assert evaluator.eval_predicate(pred, {"age": 65}) is False

    def test_ge(self, evaluator):
        pred = Predicate(fact="age", op="ge", value=65)
        assert evaluator.eval_predicate(pred, {"age": 65}) is True
        assert evaluator.eval_predicate(pred, {"age": 64}) is False

    def test_numeric_coerces_strings(self, evaluator):
        pred = Predicate(fact="age", op="gt", value="18")
        assert evaluator.eval_predicate(pred, {"age": "40"}) is True

    def test_numeric_non_number_is_false(self, evaluator):
        pred = Predicate(fact="age", op="gt", value=18)
        assert evaluator.eval_predicate(pred, {"age": "forty"}) is False

    def test_between(self, evaluator):
        pred = Predicate(fact="age", op="between", value=[18, 65])
        assert evaluator.eval_predicate(pred, {"age": 18}) is True
        assert evaluator.eval_predicate(pred, {"age": 65}) is True
        assert evaluator.eval_predicate(pred, {"age": 66}) is False

    def test_in(self, evaluator):
        pred = Predicate(fact="sev", op="in", value=["leve", "moderado"])
        assert evaluator.eval_predicate(pred, {"sev": "leve"}) is True
        assert evaluator.eval_predicate(pred, {"sev": "grave"}) is False

    def test_not_in(self, evaluator):
        pred = Predicate(fact="sev", op="not_in", value=["grave"])
        assert evaluator.eval_predicate(pred, {"sev": "leve"}) is True
        assert evaluator.eval_predicate(pred, {"sev": "grave"}) is False

    def test_contains_list(self, evaluator):
        pred = Predicate(fact="symptoms", op="contains", value="tos")
        assert evaluator.eval_predicate(pred, {"symptoms": ["tos", "fiebre"]}) is True
        assert evaluator.eval_predicate(pred, {"symptoms": ["fiebre"]}) is False

    def test_contains_string(self, evaluator):
        pred = Predicate(fact="note", op="contains", value="dolor")
        assert evaluator.eval_predicate(pred, {"note": "dolor de cabeza"}) is True
        assert evaluator.eval_predicate(pred, {"note": "fiebre"}) is False

    def test_missing_fact_is_false(self, evaluator):
        pred = Predicate(fact="days", op="lt", value=30)
        assert evaluator.eval_predicate(pred, {}) is False

    def test_none_fact_is_false(self, evaluator):
        """Even ``ne`` fails on an absent fact."""
        pred = Predicate(fact="days", op="ne", value=30)
        assert evaluator.eval_predicate(pred, {"days": None}) is False

    def test_unknown_operator_rejected(self):
        with pytest.raises(ValueError):
            Predicate(fact="f", op="matches", value=".*")


# =====================================================================
# Rule resolution
# =====================================================================


class TestFirstMatch:

    def test_first_matching_rule_wins(self, evaluator):
        rules = [
            _rule("a", Route.EMERGENCY, Predicate(fact="x", op="eq", value=1)),
            _rule("b", Route.QUICK, Predicate(fact="x", op="ge", value=0)),
            _rule("c", Route.COMPLETE),
        ]
        assert evaluator.first_match(rules, {"x": 1}).id == "a"
        assert evaluator.first_match(rules, {"x": 5}).id == "b"

    def test_predicates_are_anded(self, evaluator):
        rules = [
            _rule(
                "recent",
                Route.EVOLUTION,
                Predicate(fact="prior", op="eq", value=True),
                Predicate(fact="days", op="lt", value=30),
            ),
            _rule("default", Route.COMPLETE),
        ]
        assert evaluator.first_match(rules, {"prior": True, "days": 3}).id == "recent"
        assert evaluator.first_match(rules, {"prior": True, "days": 40}).id == "default"
        assert evaluator.first_match(rules, {"prior": False, "days": 3}).id == "default"

    def test_empty_when_always_matches(self, evaluator):
        assert evaluator.first_match([_rule("d", Route.COMPLETE)], {}).id == "d"

    def test_no_match_returns_none(self, evaluator):
        rules = [_rule("a", Route.QUICK, Predicate(fact="x", op="eq", value=1))]
        assert evaluator.first_match(rules, {"x": 2}) is None
