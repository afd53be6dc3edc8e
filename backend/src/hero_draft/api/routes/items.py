"""REST endpoints for item recommendations."""

from typing import Annotated

from fastapi import APIRouter, Query, Request

from hero_draft.api.params import normalize_damage_type_param, normalize_role_param

router = APIRouter(prefix="/api/items", tags=["items"])


@router.get("/suggest")
def suggest_items(
    request: Request,
    role: Annotated[str, Query(min_length=1)],
    damage_type: Annotated[str, Query(min_length=1)],
    phase: str = "early",
):
    """Boots, penetration and core items plus a suggested build."""
    engine = request.app.state.engine
    suggestion = engine.suggest_build(
        normalize_role_param(role),
        normalize_damage_type_param(damage_type),
        phase,
    )
    return {"mode": "standard", "data": suggestion.to_dict()}


@router.get("/budget")
def budget_items(
    request: Request,
    damage_type: Annotated[str, Query(min_length=1)],
    max_price: Annotated[float, Query(gt=0)] = 1500,
    limit: Annotated[int, Query(ge=1, le=50)] = 5,
):
    """Cheap but effective items ranked by stat value per gold."""
    engine = request.app.state.engine
    normalized = normalize_damage_type_param(damage_type)
    items = engine.budget_items(normalized, max_price=max_price, limit=limit)
    return {
        "mode": "budget",
        "data": {
            "items": [item.to_dict() for item in items],
            "meta": {
                "damage_type": normalized,
                "max_price": max_price,
                "total_items": len(items),
            },
        },
    }
