"""Item recommendations by role, damage type and budget."""
from typing import Callable, Optional, Sequence

from hero_draft.models.catalog import ItemRecord
from hero_draft.models.recommendations import BuildMeta, BuildSuggestion
from hero_draft.utils.classification import (
    DamageType,
    is_magic_boot_name,
    is_physical_boot_name,
    mentions_magic_penetration,
)

BOOTS_CATEGORY = "movement"

ItemPredicate = Callable[[ItemRecord], bool]

# Role -> keep-if predicate for core items. Unknown roles keep everything.
ROLE_CORE_PREDICATES: dict[str, ItemPredicate] = {
    "Tank": lambda item: item.hp > 500 or item.armor > 40 or item.magic_resist > 40,
    "Fighter": lambda item: (item.attack > 0 or item.hp > 300) and item.price < 2500,
    "Assassin": lambda item: item.attack > 50 or item.armor_penetration > 10,
    "Mage": lambda item: item.magic_power > 50,
    "Marksman": lambda item: item.attack > 40 or item.crit_chance > 0.15 or item.attack_speed > 0.05,
    "Support": lambda item: item.hp > 300 or item.cooldown_reduction > 0.05 or item.hp_regen > 0,
}


def is_boots(item: ItemRecord) -> bool:
    return item.category.lower() == BOOTS_CATEGORY


def _by_price(items: Sequence[ItemRecord]) -> list[ItemRecord]:
    return sorted(items, key=lambda item: item.price)


def budget_keep(item: ItemRecord, damage_type: str) -> bool:
    """Whether an item is worth considering for a budget build."""
    if damage_type == DamageType.PHYSICAL:
        return item.attack > 20 or item.attack_speed > 0 or item.armor_penetration > 0
    if damage_type == DamageType.MAGIC:
        return item.magic_power > 30 or item.cooldown_reduction > 0
    return item.hp > 300


def value_score(item: ItemRecord, damage_type: str) -> float:
    """Stat value used for cost-effectiveness ranking."""
    if damage_type == DamageType.PHYSICAL:
        return item.attack + item.attack_speed * 100 + item.armor_penetration * 10
    if damage_type == DamageType.MAGIC:
        return item.magic_power + item.cooldown_reduction * 100
    return item.hp


class ItemRecommendationService:
    """Ranks catalog items for build slots.

    Every method is a pure function of the item catalog and its arguments.
    ``damage_type`` is expected lowercase ("physical" / "magic"); other values
    fall through to the documented fallback branches.
    """

    def __init__(self, items: Sequence[ItemRecord]):
        self.items = items

    def items_by_category(self, category: str) -> list[ItemRecord]:
        """Items in ``category`` (case-insensitive), catalog order."""
        wanted = category.lower()
        return [item for item in self.items if item.category.lower() == wanted]

    def boots(self, damage_type: str) -> list[ItemRecord]:
        """Boots suited to the damage type.

        NOTE: the physical and magic branches keep catalog order and are NOT
        sorted by price. Only the fallback branch sorts. Downstream picks the
        first element, so sorting here would change which boots get suggested.
        """
        boots = [item for item in self.items if is_boots(item)]

        if damage_type == DamageType.MAGIC:
            return [b for b in boots if b.magic_power > 0 or is_magic_boot_name(b.name)]
        if damage_type == DamageType.PHYSICAL:
            return [
                b for b in boots
                if b.attack > 0 or b.attack_speed > 0 or is_physical_boot_name(b.name)
            ]

        return _by_price(boots)

    def penetration_items(self, damage_type: str, limit: int = 3) -> list[ItemRecord]:
        """Penetration items, cheapest first."""
        if damage_type == DamageType.PHYSICAL:
            candidates = [item for item in self.items if item.armor_penetration > 0]
        elif damage_type == DamageType.MAGIC:
            candidates = [
                item for item in self.items
                if item.magic_power > 0 and mentions_magic_penetration(item.description)
            ]
        else:
            return []
        return _by_price(candidates)[:limit]

    def core_items(self, role: str, damage_type: str, limit: int = 3) -> list[ItemRecord]:
        """Non-boot items matching the role profile, cheapest first.

        ``damage_type`` is accepted for call symmetry; role alone decides the
        profile. Only the exact category ``movement`` is excluded here.
        """
        keep = ROLE_CORE_PREDICATES.get(role, lambda item: True)
        candidates = [
            item for item in self.items
            if keep(item) and item.category != BOOTS_CATEGORY
        ]
        return _by_price(candidates)[:limit]

    def suggest_build(self, role: str, damage_type: str, phase: str = "early") -> BuildSuggestion:
        """Boots, penetration and core picks plus a combined suggested build.

        The suggested build is, in slot order: first boots, first penetration
        item, first two core items. Empty slots are left out.
        """
        boots = self.boots(damage_type)
        first_boots: Optional[ItemRecord] = boots[0] if boots else None
        penetration = self.penetration_items(damage_type, limit=2)
        core = self.core_items(role, damage_type, limit=3)

        slots = [first_boots, *penetration[:1], *core[:2]]
        suggested = [item for item in slots if item is not None]

        return BuildSuggestion(
            boots=first_boots,
            penetration=penetration,
            core=core,
            suggested=suggested,
            meta=BuildMeta(
                role=role,
                damage_type=damage_type,
                phase=phase,
                total_price=sum(item.price for item in suggested),
            ),
        )

    def budget_items(self, damage_type: str, max_price: float = 1500, limit: int = 5) -> list[ItemRecord]:
        """Cheap but effective items ranked by stat value per gold.

        Free items (price 0) are never returned. Ties keep catalog order.
        """
        candidates = [
            item for item in self.items
            if 0 < item.price <= max_price and budget_keep(item, damage_type)
        ]
        ranked = sorted(
            candidates,
            key=lambda item: value_score(item, damage_type) / item.price,
            reverse=True,
        )
        return ranked[:limit]
