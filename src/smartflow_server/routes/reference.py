"""Reference data endpoints — vocabularies and route profiles.

These are read-only endpoints that expose the tables loaded from ``v1/``.
They don't require authentication since the data is public reference
information.
"""

from fastapi import APIRouter, Depends

from smartflow_rules.constants import ROUTE_NAMES
from smartflow_rules.ruleset import RulesetStore

from smartflow_server.dependencies import get_store

router = APIRouter(prefix="/reference", tags=["reference"])


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.get("/symptoms")
def list_symptoms(
    store: RulesetStore = Depends(get_store),
) -> list[dict]:
    """Return the symptom vocabulary with aliases."""
    return [{"name": s.name, "aliases": s.aliases} for s in store.symptoms]


@router.get("/medications")
def list_medications(
    store: RulesetStore = Depends(get_store),
) -> list[dict]:
    """Return the recognised medication names with aliases."""
    return [{"name": m.name, "aliases": m.aliases} for m in store.medications]


@router.get("/routes")
def list_routes(
    store: RulesetStore = Depends(get_store),
) -> list[dict]:
    """Return every route profile."""
    return [
        {"route": route.value, "name": ROUTE_NAMES.get(route.value, route.value),
         **profile.model_dump(mode="json")}
        for route, profile in store.routing.profiles.items()
    ]


@router.get("/routes/{route}")
def get_route(
    route: str,
    store: RulesetStore = Depends(get_store),
) -> dict:
    """Return one route profile; 404 for unknown routes."""
    profile = store.get_profile(route)
    return {"route": route, "name": ROUTE_NAMES.get(route, route), **profile.model_dump(mode="json")}
