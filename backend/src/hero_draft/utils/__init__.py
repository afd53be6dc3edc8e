"""Utility modules for hero_draft."""

from hero_draft.utils.classification import (
    DamageType,
    is_magic_boot_name,
    is_physical_boot_name,
    mentions_magic_penetration,
    normalize_damage_type,
    primary_role,
)

__all__ = [
    "DamageType",
    "is_magic_boot_name",
    "is_physical_boot_name",
    "mentions_magic_penetration",
    "normalize_damage_type",
    "primary_role",
]
