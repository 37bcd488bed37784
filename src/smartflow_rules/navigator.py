"""FlowNavigator — step sequencing over a decision's required steps.

The consultation wizard asks the navigator which step follows the current
one, whether a section can be skipped, and how many minutes are likely left.
A navigator wraps one immutable :class:`FlowDecision`; when the context
changes the caller builds a new navigator from the new decision.
"""

from __future__ import annotations

import math
from datetime import datetime

from smartflow_rules.classifier import FlowClassifier
from smartflow_rules.models.context import PatientContext
from smartflow_rules.models.flow import FlowDecision, NavigationState


class FlowNavigator:
    """Answers step-order questions for a single decision."""

    def __init__(self, decision: FlowDecision) -> None:
        self._decision = decision

    @classmethod
    def from_context(
        cls,
        classifier: FlowClassifier,
        context: PatientContext,
        *,
        now: datetime | None = None,
    ) -> FlowNavigator:
        return cls(classifier.classify(context, now=now))

    @property
    def decision(self) -> FlowDecision:
        return self._decision

    @property
    def first_step(self) -> str:
        return self._decision.required_steps[0]

    def _index(self, step: str) -> int:
        try:
            return self._decision.required_steps.index(step)
        except ValueError:
            return -1

    def next_step(self, current_step: str) -> str | None:
        """Step after ``current_step``, or None if it is the last or unknown."""
        steps = self._decision.required_steps
        idx = self._index(current_step)
        if idx == -1 or idx == len(steps) - 1:
            return None
        return steps[idx + 1]

    def should_skip_step(self, step: str) -> bool:
        """True iff ``step`` is not one of the required steps."""
        return step not in self._decision.required_steps

    def estimated_time_remaining(self, current_step: str) -> int:
        """Minutes left after ``current_step``, rounded half up.

        Each required step is worth ``estimated_time / len(required_steps)``.
        An unknown step counts as not started: every step remains.
        """
        steps = self._decision.required_steps
        remaining = len(steps) - self._index(current_step) - 1
        per_step = self._decision.estimated_time / len(steps)
        return math.floor(remaining * per_step + 0.5)

    def state(self, current_step: str) -> NavigationState:
        return NavigationState(
            current_step=current_step,
            next_step=self.next_step(current_step),
            should_skip=self.should_skip_step(current_step),
            estimated_time_remaining=self.estimated_time_remaining(current_step),
            decision=self._decision,
        )
