"""Draft rule variants decoded from the rule table.

The rule table stores three kinds of rows distinguished by a ``Rule Type``
column. Rows are decoded once at load time into one of the dataclasses
below so scoring code dispatches on the type instead of re-reading strings.
"""

from dataclasses import dataclass
from typing import Union

RULE_TYPE_ROLE_COMPATIBILITY = "role_compatibility"
RULE_TYPE_HERO_PRIORITY = "hero_priority"
RULE_TYPE_SYNERGY = "synergy"


@dataclass(frozen=True)
class RoleCompatibilityRule:
    """Heroes of ``primary_role`` pair well with ``compatible_role`` (directional)."""

    primary_role: str
    compatible_role: str


@dataclass(frozen=True)
class HeroPriorityRule:
    """Role-scoped pick priority for one hero."""

    role: str
    hero_name: str
    priority: int


@dataclass(frozen=True)
class SynergyRule:
    """Bonus for pairing a hero with a specific hero or a role.

    ``selected_hero`` and ``partner`` each hold a hero name or a role label.
    The rule is matched in both directions.
    """

    selected_hero: str
    partner: str
    bonus: int
    partner_role: str = ""  # Informational only
    notes: str = ""


DraftRule = Union[RoleCompatibilityRule, HeroPriorityRule, SynergyRule]
