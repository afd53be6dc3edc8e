"""Lookup structures derived from the flat draft rule table."""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable

from hero_draft.models.rules import (
    DraftRule,
    HeroPriorityRule,
    RoleCompatibilityRule,
    SynergyRule,
)

# Priority for a hero with no hero_priority row in the requested role.
# Mid-scale on the 1-10 rule table range, so listed heroes can rank above
# or below unlisted ones.
DEFAULT_HERO_PRIORITY = 5


@dataclass
class RuleIndex:
    """Role compatibility, role-scoped priorities and synergy rules.

    Referenced hero and role names are not checked against the catalog;
    a rule naming something unknown never matches during scoring.

    The synergy lookup is built on construction and rebuilt when ``synergy``
    is reassigned or changes length. Replace rules by assigning a new list.
    """

    role_compatibility: dict[str, list[str]] = field(default_factory=dict)
    hero_priority: dict[str, dict[str, int]] = field(default_factory=dict)
    synergy: list[SynergyRule] = field(default_factory=list)
    # Rule positions in `synergy` keyed by every name/label either side mentions
    _synergy_by_key: dict[str, list[int]] = field(init=False, repr=False, compare=False)
    # The list and length `_synergy_by_key` was built from
    _indexed: tuple = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        self._reindex_synergy()

    def _reindex_synergy(self) -> None:
        by_key: dict[str, list[int]] = defaultdict(list)
        for position, rule in enumerate(self.synergy):
            for key in {rule.selected_hero, rule.partner}:
                by_key[key].append(position)
        self._synergy_by_key = dict(by_key)
        self._indexed = (self.synergy, len(self.synergy))

    def compatible_roles(self, role: str) -> list[str]:
        """Compatible roles for ``role`` in rule-table order."""
        return self.role_compatibility.get(role, [])

    def priority_for(self, role: str, hero_name: str) -> int:
        """Role-scoped priority, DEFAULT_HERO_PRIORITY when not listed."""
        return self.hero_priority.get(role, {}).get(hero_name, DEFAULT_HERO_PRIORITY)

    def synergy_candidates(self, *keys: str) -> list[SynergyRule]:
        """Synergy rules mentioning any of ``keys`` on either side, in table order."""
        indexed_list, indexed_len = self._indexed
        if indexed_list is not self.synergy or indexed_len != len(self.synergy):
            self._reindex_synergy()
        positions: set[int] = set()
        for key in keys:
            positions.update(self._synergy_by_key.get(key, ()))
        return [self.synergy[i] for i in sorted(positions)]

    def to_dict(self) -> dict:
        return {
            "role_compatibility": {role: list(roles) for role, roles in self.role_compatibility.items()},
            "hero_priority": {role: dict(heroes) for role, heroes in self.hero_priority.items()},
            "synergy": [
                {
                    "selected_hero": rule.selected_hero,
                    "partner": rule.partner,
                    "bonus": rule.bonus,
                    "partner_role": rule.partner_role,
                    "notes": rule.notes,
                }
                for rule in self.synergy
            ],
        }


def build_rule_index(rules: Iterable[DraftRule]) -> RuleIndex:
    """Build a RuleIndex in a single pass over decoded rules.

    Compatibility edges keep encounter order, which later decides the order
    in which partner roles are filled. A repeated (role, hero) priority
    overwrites the earlier one.
    """
    role_compatibility: dict[str, list[str]] = defaultdict(list)
    hero_priority: dict[str, dict[str, int]] = defaultdict(dict)
    synergy: list[SynergyRule] = []

    for rule in rules:
        if isinstance(rule, RoleCompatibilityRule):
            role_compatibility[rule.primary_role].append(rule.compatible_role)
        elif isinstance(rule, HeroPriorityRule):
            hero_priority[rule.role][rule.hero_name] = rule.priority
        elif isinstance(rule, SynergyRule):
            synergy.append(rule)

    return RuleIndex(
        role_compatibility=dict(role_compatibility),
        hero_priority=dict(hero_priority),
        synergy=synergy,
    )
