"""FastAPI dependency injection — provides the pipeline and store.

Both are built once in the lifespan handler and stashed on ``app.state``.
"""

from fastapi import Request

from smartflow_rules.pipeline import SmartFlowPipeline
from smartflow_rules.ruleset import RulesetStore


def get_pipeline(request: Request) -> SmartFlowPipeline:
    """Return the pipeline singleton from ``app.state``."""
    return request.app.state.pipeline


def get_store(request: Request) -> RulesetStore:
    """Return the RulesetStore singleton from ``app.state``."""
    return request.app.state.store
