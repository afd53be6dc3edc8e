"""REST endpoints for partner recommendations and draft simulation."""

from typing import Annotated

from fastapi import APIRouter, Query, Request

from hero_draft.services.partner_recommendation_service import DEFAULT_PARTNER_LIMIT

router = APIRouter(prefix="/api/draft", tags=["draft"])


@router.get("/partners")
def recommend_partners(
    request: Request,
    hero: Annotated[str, Query(min_length=1)],
    limit: Annotated[int, Query(ge=1, le=10)] = DEFAULT_PARTNER_LIMIT,
):
    """Best partner per compatible role for the selected hero."""
    engine = request.app.state.engine
    recommendations = engine.recommend_partners(hero, limit=limit)
    return {
        "selected_hero": hero,
        "recommendations": [rec.to_dict() for rec in recommendations],
    }


@router.get("/simulation")
def simulate_draft(
    request: Request,
    hero: Annotated[str, Query(min_length=1)],
    limit: Annotated[int, Query(ge=1, le=10)] = DEFAULT_PARTNER_LIMIT,
):
    """Selected hero, partners, reasons and a team balance check."""
    engine = request.app.state.engine
    return {"data": engine.simulate_draft(hero, limit=limit).to_dict()}


@router.get("/rules")
def get_rules(request: Request):
    """Rule index derived from the draft rule table."""
    engine = request.app.state.engine
    return {"data": engine.rules()}
