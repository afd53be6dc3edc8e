"""Teammate recommendations for a selected hero.

Candidates are scored with three additive terms:

- base priority: role-scoped priority from the rule table (default 5)
- diversity bonus: +2 when the candidate's damage type differs from the
  selected hero's, pushing toward mixed physical/magic teams
- synergy bonus: best matching synergy rule bonus for the pairing

One partner is picked per compatible role, in the order the rule table
lists those roles.
"""
from collections import Counter
from typing import Sequence

from hero_draft.errors import HeroNotFoundError
from hero_draft.models.catalog import HeroRecord
from hero_draft.models.recommendations import (
    DraftSimulation,
    PartnerReason,
    PartnerRecommendation,
    TeamValidation,
)
from hero_draft.models.rules import SynergyRule
from hero_draft.services.rule_index import RuleIndex

DIVERSITY_BONUS = 2
DEFAULT_PARTNER_LIMIT = 4
# A drafted group needs at least this many distinct primary roles to count as balanced
MIN_BALANCED_ROLES = 3

PARTNER_REASONS = {
    ("Marksman", "Tank"): "{partner} tanks in front to protect {selected} in the backline",
    ("Marksman", "Support"): "{partner} supports and heals {selected}",
    ("Marksman", "Mage"): "{partner} adds burst damage and crowd control",
    ("Mage", "Tank"): "{partner} initiates so {selected} can follow up with damage",
    ("Mage", "Support"): "{partner} sustains {selected}'s mana and health",
    ("Tank", "Marksman"): "{partner} deals sustained damage while {selected} absorbs it",
    ("Tank", "Fighter"): "{partner} adds damage and crowd-control combos with {selected}",
    ("Support", "Marksman"): "{partner} is a carry for {selected} to protect",
    ("Fighter", "Mage"): "{partner} brings a complementary damage type",
    ("Fighter", "Support"): "{partner} provides sustain and utility",
}
DEFAULT_PARTNER_REASON = "{partner} fits with {selected} for a balanced team composition"


def _side_matches(side: str, hero: HeroRecord) -> bool:
    return side == hero.name or side == hero.primary_role


def _rule_matches(rule: SynergyRule, selected: HeroRecord, candidate: HeroRecord) -> bool:
    forward = _side_matches(rule.selected_hero, selected) and _side_matches(rule.partner, candidate)
    reverse = _side_matches(rule.selected_hero, candidate) and _side_matches(rule.partner, selected)
    return forward or reverse


def synergy_bonus(selected: HeroRecord, candidate: HeroRecord, rule_index: RuleIndex) -> int:
    """Largest bonus among synergy rules matching the pairing, 0 if none.

    A rule side matches a hero by exact name or by the hero's primary role,
    and the rule is tried in both directions.
    """
    rules = rule_index.synergy_candidates(
        selected.name, selected.primary_role, candidate.name, candidate.primary_role
    )
    best = 0
    for rule in rules:
        if _rule_matches(rule, selected, candidate):
            best = max(best, rule.bonus)
    return best


def score_candidate(
    selected: HeroRecord,
    candidate: HeroRecord,
    role: str,
    rule_index: RuleIndex,
) -> PartnerRecommendation:
    """Score one candidate for the given compatible role."""
    base_priority = rule_index.priority_for(role, candidate.name)
    diversity = (
        DIVERSITY_BONUS
        if candidate.normalized_damage_type != selected.normalized_damage_type
        else 0
    )
    synergy = synergy_bonus(selected, candidate, rule_index)
    return PartnerRecommendation(
        hero=candidate,
        base_priority=base_priority,
        diversity_bonus=diversity,
        synergy_bonus=synergy,
        total_score=base_priority + diversity + synergy,
    )


def recommend_partners(
    selected_hero: HeroRecord,
    heroes: Sequence[HeroRecord],
    rule_index: RuleIndex,
    limit: int = DEFAULT_PARTNER_LIMIT,
) -> list[PartnerRecommendation]:
    """Best partner per compatible role, in compatibility-list order.

    Args:
        selected_hero: The hero already chosen
        heroes: Hero catalog; its order breaks score ties
        rule_index: Compatibility, priority and synergy rules
        limit: Maximum number of recommendations

    Returns:
        At most ``limit`` recommendations, no two sharing a primary role,
        never containing the selected hero. May be shorter than ``limit``.
    """
    recommendations: list[PartnerRecommendation] = []
    seen_roles: set[str] = set()

    for role in rule_index.compatible_roles(selected_hero.primary_role):
        if len(recommendations) >= limit:
            break
        if role in seen_roles:
            continue

        candidates = [
            hero for hero in heroes
            if hero.primary_role == role and hero.name != selected_hero.name
        ]
        if not candidates:
            continue

        scored = [score_candidate(selected_hero, hero, role, rule_index) for hero in candidates]
        # Stable sort: first catalog entry wins ties
        scored.sort(key=lambda rec: rec.total_score, reverse=True)
        recommendations.append(scored[0])
        seen_roles.add(role)

    return recommendations


class PartnerRecommendationService:
    """Partner recommendations and draft summaries over one hero catalog."""

    def __init__(self, heroes: Sequence[HeroRecord], rule_index: RuleIndex):
        self.heroes = heroes
        self.rule_index = rule_index
        self._by_name = {hero.name: hero for hero in heroes}

    def find_hero(self, name: str) -> HeroRecord:
        hero = self._by_name.get(name)
        if hero is None:
            raise HeroNotFoundError(name)
        return hero

    def heroes_by_role(self, role: str) -> list[HeroRecord]:
        """Heroes whose primary role is ``role``, catalog order."""
        return [hero for hero in self.heroes if hero.primary_role == role]

    def recommend_partners(self, hero_name: str, limit: int = DEFAULT_PARTNER_LIMIT) -> list[PartnerRecommendation]:
        selected = self.find_hero(hero_name)
        return recommend_partners(selected, self.heroes, self.rule_index, limit=limit)

    @staticmethod
    def partner_reason(selected: HeroRecord, partner: HeroRecord) -> str:
        template = PARTNER_REASONS.get(
            (selected.primary_role, partner.primary_role), DEFAULT_PARTNER_REASON
        )
        return template.format(partner=partner.name, selected=selected.name)

    @staticmethod
    def validate_team(heroes: Sequence[HeroRecord]) -> TeamValidation:
        """Count primary roles; balanced when enough distinct roles are covered."""
        distribution = Counter(hero.primary_role for hero in heroes)
        return TeamValidation(
            is_balanced=len(distribution) >= MIN_BALANCED_ROLES,
            role_distribution=dict(distribution),
        )

    def simulate_draft(self, hero_name: str, limit: int = DEFAULT_PARTNER_LIMIT) -> DraftSimulation:
        """Selected hero, recommended partners, reasons and a balance check."""
        selected = self.find_hero(hero_name)
        partners = recommend_partners(selected, self.heroes, self.rule_index, limit=limit)

        pick_reason = f"{selected.name} is a {selected.primary_role}"
        if selected.attack_reliance:
            pick_reason = f"{pick_reason} relying on {selected.attack_reliance}"

        reasons = [
            PartnerReason(
                name=rec.hero.name,
                role=rec.role,
                reason=self.partner_reason(selected, rec.hero),
            )
            for rec in partners
        ]
        options = [selected] + [rec.hero for rec in partners]

        return DraftSimulation(
            selected=selected,
            partners=partners,
            pick_reason=pick_reason,
            partner_reasons=reasons,
            validation=self.validate_team(options),
        )
