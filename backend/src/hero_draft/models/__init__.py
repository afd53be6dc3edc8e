"""Data models for the hero draft assistant."""

from hero_draft.models.catalog import DEFAULT_STAT_VALUE, HeroRecord, ItemRecord
from hero_draft.models.rules import (
    DraftRule,
    HeroPriorityRule,
    RoleCompatibilityRule,
    SynergyRule,
)
from hero_draft.models.recommendations import (
    BuildMeta,
    BuildSuggestion,
    DraftSimulation,
    PartnerReason,
    PartnerRecommendation,
    TeamValidation,
)

__all__ = [
    "DEFAULT_STAT_VALUE",
    "HeroRecord",
    "ItemRecord",
    "DraftRule",
    "HeroPriorityRule",
    "RoleCompatibilityRule",
    "SynergyRule",
    "BuildMeta",
    "BuildSuggestion",
    "DraftSimulation",
    "PartnerReason",
    "PartnerRecommendation",
    "TeamValidation",
]
