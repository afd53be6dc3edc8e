"""Hero and item catalog records."""

from dataclasses import asdict, dataclass

from hero_draft.utils.classification import DamageType, normalize_damage_type, primary_role

# Missing or non-numeric stat cells load as this value
DEFAULT_STAT_VALUE = 0.0


@dataclass(frozen=True)
class HeroRecord:
    """A hero as loaded from the hero table."""

    name: str
    role: str  # Slash-delimited, primary role first: "Marksman/Assassin"
    damage_type: str  # Free text, e.g. "physical_attack_speed"
    attack_reliance: str = ""
    note: str = ""

    @property
    def primary_role(self) -> str:
        return primary_role(self.role)

    @property
    def normalized_damage_type(self) -> DamageType:
        return normalize_damage_type(self.damage_type)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ItemRecord:
    """An item as loaded from the item table."""

    name: str
    category: str  # "movement" marks boots
    price: float = DEFAULT_STAT_VALUE  # 0 means free and is skipped by budget scoring
    attack: float = DEFAULT_STAT_VALUE
    attack_speed: float = DEFAULT_STAT_VALUE
    crit_chance: float = DEFAULT_STAT_VALUE
    armor_penetration: float = DEFAULT_STAT_VALUE
    spell_vamp: float = DEFAULT_STAT_VALUE
    magic_power: float = DEFAULT_STAT_VALUE
    hp: float = DEFAULT_STAT_VALUE
    armor: float = DEFAULT_STAT_VALUE
    magic_resist: float = DEFAULT_STAT_VALUE
    movement_speed: float = DEFAULT_STAT_VALUE
    cooldown_reduction: float = DEFAULT_STAT_VALUE
    mana_regen: float = DEFAULT_STAT_VALUE
    hp_regen: float = DEFAULT_STAT_VALUE
    description: str = ""

    def to_dict(self) -> dict:
        return asdict(self)
