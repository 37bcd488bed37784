"""Flow models — route profiles, routing rules, and the classifier's output.

These models mirror ``v1/rules/routes.yaml``:

  - RouteProfile: parameters returned for one route (time, steps, levels)
  - Predicate / RoutingRule: AND-ed conditions over context facts that
    select a route; rules are tried in file order and the first match wins
  - RoutingTable: profiles + rules, validated to be total

``FlowDecision`` is what callers receive.  It is frozen; recomputing for a
changed context yields a new decision.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, model_validator

from smartflow_rules.constants import START_STEP

from .enums import AIAnalysisLevel, AutoFillLevel, Priority, Route


class RouteProfile(BaseModel):
    """Parameters attached to a route.

    ``required_steps`` defines gating and navigation order and must begin
    with the identification step.
    """

    estimated_time: int
    priority: Priority
    required_steps: list[str]
    optional_steps: list[str] = []
    ai_analysis_level: AIAnalysisLevel
    auto_fill_level: AutoFillLevel

    @model_validator(mode="after")
    def _check_steps(self) -> RouteProfile:
        if not self.required_steps:
            raise ValueError("required_steps must not be empty")
        if self.required_steps[0] != START_STEP:
            raise ValueError(
                f"required_steps must start with '{START_STEP}', "
                f"got '{self.required_steps[0]}'"
            )
        if self.estimated_time <= 0:
            raise ValueError("estimated_time must be positive")
        return self


class Predicate(BaseModel):
    """A single condition over a named context fact.

    Operators:
      - eq, ne: equality / inequality
      - lt, le, gt, ge: numeric comparisons
      - between: value is [min, max] inclusive
      - in, not_in: membership of the fact in a value list
      - contains: element / substring membership of value in the fact
    """

    fact: str
    op: Literal["eq", "ne", "lt", "le", "gt", "ge", "between", "in", "not_in", "contains"]
    value: Any


class RoutingRule(BaseModel):
    """If ALL predicates in ``when`` hold, the context takes ``route``.

    An empty ``when`` always matches.
    """

    id: str
    route: Route
    when: list[Predicate] = []


class RoutingTable(BaseModel):
    """Route profiles plus the ordered rules that select among them."""

    profiles: dict[Route, RouteProfile]
    rules: list[RoutingRule]

    @model_validator(mode="after")
    def _check_total(self) -> RoutingTable:
        if not self.rules:
            raise ValueError("routing table has no rules")
        for rule in self.rules:
            if rule.route not in self.profiles:
                raise ValueError(f"rule '{rule.id}' targets unknown route '{rule.route.value}'")
        if self.rules[-1].when:
            raise ValueError(
                f"last routing rule '{self.rules[-1].id}' must be unconditional"
            )
        return self


class FlowDecision(BaseModel):
    """The consultation route picked for a patient context."""

    model_config = ConfigDict(frozen=True)

    route: Route
    estimated_time: int
    priority: Priority
    required_steps: tuple[str, ...]
    optional_steps: tuple[str, ...]
    ai_analysis_level: AIAnalysisLevel
    auto_fill_level: AutoFillLevel

    @classmethod
    def from_profile(cls, route: Route, profile: RouteProfile) -> FlowDecision:
        return cls(
            route=route,
            estimated_time=profile.estimated_time,
            priority=profile.priority,
            required_steps=tuple(profile.required_steps),
            optional_steps=tuple(profile.optional_steps),
            ai_analysis_level=profile.ai_analysis_level,
            auto_fill_level=profile.auto_fill_level,
        )


class NavigationState(BaseModel):
    """Where a wizard stands within a decision's required steps."""

    current_step: str
    next_step: str | None
    should_skip: bool
    estimated_time_remaining: int
    decision: FlowDecision
