"""Shared fixtures: small catalogs written to tmp_path as CSV files."""
import csv
from pathlib import Path

import pytest

HERO_COLUMNS = ["Hero Name", "Role", "Damage Type", "Attack Reliance", "Note"]
ITEM_COLUMNS = [
    "Item Name", "Category", "Price", "Attack", "Attack Speed", "Crit Chance",
    "Armor Penetration", "Spell Vamp", "Magic Power", "HP", "Armor",
    "Magic Resist", "Movement Speed", "Cooldown Reduction", "Mana Regen",
    "HP Regen", "Description",
]
RULE_COLUMNS = ["Rule Type", "Primary Role", "Compatible Role", "Hero Name", "Priority", "Notes"]

DEFAULT_HEROES = [
    {"Hero Name": "Miya", "Role": "Marksman", "Damage Type": "physical_attack_speed"},
    {"Hero Name": "Eudora", "Role": "Mage", "Damage Type": "magic_burst"},
    {"Hero Name": "Tigreal", "Role": "Tank", "Damage Type": "physical"},
    {"Hero Name": "Angela", "Role": "Support", "Damage Type": "magic"},
]
DEFAULT_ITEMS = [
    {"Item Name": "Boots", "Category": "movement", "Price": "500"},
    {"Item Name": "Arcane Boots", "Category": "movement", "Price": "800", "Magic Power": "50"},
    {"Item Name": "Malefic Roar", "Category": "attack", "Price": "2060", "Attack": "60", "Armor Penetration": "35"},
]
DEFAULT_RULES = [
    {"Rule Type": "role_compatibility", "Primary Role": "Marksman", "Compatible Role": "Mage"},
    {"Rule Type": "hero_priority", "Primary Role": "Mage", "Hero Name": "Eudora", "Priority": "8"},
]


def write_csv(path: Path, columns: list[str], rows: list[dict]) -> Path:
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=columns, restval="", extrasaction="ignore")
        writer.writeheader()
        writer.writerows(rows)
    return path


@pytest.fixture
def write_catalog(tmp_path):
    """Factory writing heroes.csv, items.csv and draft-rules.csv into a fresh dir."""

    def _write(heroes=None, items=None, rules=None) -> Path:
        csv_dir = tmp_path / "csv"
        csv_dir.mkdir(exist_ok=True)
        write_csv(csv_dir / "heroes.csv", HERO_COLUMNS, DEFAULT_HEROES if heroes is None else heroes)
        write_csv(csv_dir / "items.csv", ITEM_COLUMNS, DEFAULT_ITEMS if items is None else items)
        write_csv(csv_dir / "draft-rules.csv", RULE_COLUMNS, DEFAULT_RULES if rules is None else rules)
        return csv_dir

    return _write
