"""Recommendation result models."""

from dataclasses import dataclass, field
from typing import Optional

from hero_draft.models.catalog import HeroRecord, ItemRecord


@dataclass
class PartnerRecommendation:
    """A recommended teammate with its score breakdown."""

    hero: HeroRecord
    base_priority: int
    diversity_bonus: int  # 0 or DIVERSITY_BONUS
    synergy_bonus: int  # >= 0
    total_score: int

    @property
    def role(self) -> str:
        return self.hero.primary_role

    def to_dict(self) -> dict:
        return {
            "hero": self.hero.to_dict(),
            "role": self.role,
            "base_priority": self.base_priority,
            "diversity_bonus": self.diversity_bonus,
            "synergy_bonus": self.synergy_bonus,
            "total_score": self.total_score,
        }


@dataclass
class BuildMeta:
    """Request echo and aggregate figures for a build suggestion."""

    role: str
    damage_type: str
    phase: str = "early"
    total_price: float = 0.0


@dataclass
class BuildSuggestion:
    """Items grouped by build slot plus the combined suggested build."""

    boots: Optional[ItemRecord]
    penetration: list[ItemRecord]
    core: list[ItemRecord]
    suggested: list[ItemRecord]
    meta: BuildMeta

    def to_dict(self) -> dict:
        return {
            "boots": self.boots.to_dict() if self.boots else None,
            "penetration": [item.to_dict() for item in self.penetration],
            "core": [item.to_dict() for item in self.core],
            "suggested": [item.to_dict() for item in self.suggested],
            "meta": {
                "role": self.meta.role,
                "damage_type": self.meta.damage_type,
                "phase": self.meta.phase,
                "total_price": self.meta.total_price,
            },
        }


@dataclass
class TeamValidation:
    """Role spread of a drafted group of heroes."""

    is_balanced: bool
    role_distribution: dict[str, int] = field(default_factory=dict)


@dataclass
class PartnerReason:
    """Why a partner was suggested."""

    name: str
    role: str
    reason: str


@dataclass
class DraftSimulation:
    """A selected hero together with its recommended partners."""

    selected: HeroRecord
    partners: list[PartnerRecommendation]
    pick_reason: str
    partner_reasons: list[PartnerReason]
    validation: TeamValidation

    @property
    def draft_options(self) -> list[HeroRecord]:
        return [self.selected] + [rec.hero for rec in self.partners]

    def to_dict(self) -> dict:
        return {
            "selected_hero": self.selected.to_dict(),
            "recommended_partners": [rec.to_dict() for rec in self.partners],
            "draft": {
                "options": [hero.to_dict() for hero in self.draft_options],
                "roles": [
                    {"name": hero.name, "role": hero.role}
                    for hero in self.draft_options
                ],
            },
            "recommendations": {
                "pick_reason": self.pick_reason,
                "partner_roles": [
                    {"name": r.name, "role": r.role, "reason": r.reason}
                    for r in self.partner_reasons
                ],
            },
            "team_validation": {
                "is_balanced": self.validation.is_balanced,
                "role_distribution": self.validation.role_distribution,
            },
        }
