"""Recommendation services."""

from hero_draft.services.item_recommendation_service import ItemRecommendationService
from hero_draft.services.partner_recommendation_service import (
    PartnerRecommendationService,
    recommend_partners,
)
from hero_draft.services.recommendation_engine import (
    RecommendationEngine,
    create_engine,
)
from hero_draft.services.rule_index import RuleIndex, build_rule_index

__all__ = [
    "ItemRecommendationService",
    "PartnerRecommendationService",
    "recommend_partners",
    "RecommendationEngine",
    "create_engine",
    "RuleIndex",
    "build_rule_index",
]
