"""Centralized text classification for heroes and items.

Catalog rows carry free-text labels (damage type strings, item names and
descriptions). Every substring heuristic that turns those labels into
scoring decisions lives here so a future move to structured tags only has
to touch this module. Matching semantics are kept exactly as the catalog
data expects them; do not loosen or tighten them without re-checking the
recommendation outputs.
"""

from enum import Enum
from typing import Optional


class DamageType(str, Enum):
    """Normalized damage orientation of a hero or item."""

    PHYSICAL = "physical"
    MAGIC = "magic"
    MIXED = "mixed"
    UNKNOWN = "unknown"


ROLE_SEPARATOR = "/"

MAGIC_BOOT_MARKERS = ("arcane",)
PHYSICAL_BOOT_MARKERS = ("warrior", "rapid")
MAGIC_PENETRATION_MARKERS = ("penetration", "magic damage")


def primary_role(role: Optional[str]) -> str:
    """Return the first segment of a role string ("" when there is none)."""
    if not role:
        return ""
    return role.split(ROLE_SEPARATOR)[0].strip()


def normalize_damage_type(damage_type: Optional[str]) -> DamageType:
    """Classify a free-text damage label.

    Containing both "physical" and "magic" means mixed, otherwise the first
    of physical/magic found wins, otherwise unknown.

    Examples:
        >>> normalize_damage_type("physical_attack_speed")
        <DamageType.PHYSICAL: 'physical'>
        >>> normalize_damage_type("Magic/Physical")
        <DamageType.MIXED: 'mixed'>
    """
    if not damage_type:
        return DamageType.UNKNOWN

    lowered = damage_type.lower()
    has_physical = "physical" in lowered
    has_magic = "magic" in lowered

    if has_physical and has_magic:
        return DamageType.MIXED
    if has_physical:
        return DamageType.PHYSICAL
    if has_magic:
        return DamageType.MAGIC
    return DamageType.UNKNOWN


def _contains_any(text: str, markers: tuple[str, ...]) -> bool:
    lowered = text.lower()
    return any(marker in lowered for marker in markers)


def is_magic_boot_name(name: str) -> bool:
    """Name-based hint that a boot item suits magic heroes."""
    return _contains_any(name, MAGIC_BOOT_MARKERS)


def is_physical_boot_name(name: str) -> bool:
    """Name-based hint that a boot item suits physical heroes."""
    return _contains_any(name, PHYSICAL_BOOT_MARKERS)


def mentions_magic_penetration(description: str) -> bool:
    """Description-based hint that a magic item penetrates or deals magic damage."""
    return _contains_any(description, MAGIC_PENETRATION_MARKERS)
