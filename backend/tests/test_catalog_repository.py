"""Tests for catalog loading, coercion and caching."""
import logging

import duckdb
import pytest

from hero_draft.errors import MalformedRow, SourceUnavailable
from hero_draft.models.rules import HeroPriorityRule, RoleCompatibilityRule, SynergyRule
from hero_draft.repositories.catalog_repository import (
    CatalogCache,
    CsvCatalogSource,
    DuckDBCatalogSource,
    parse_hero_row,
    parse_item_row,
    parse_rule_row,
)
from hero_draft.services.recommendation_engine import REPO_ROOT


@pytest.fixture
def cache(write_catalog):
    return CatalogCache(CsvCatalogSource(write_catalog()))


# ======================================================================
# Parsing
# ======================================================================


def test_load_heroes_trims_and_keeps_role_string(write_catalog):
    csv_dir = write_catalog(heroes=[
        {"Hero Name": "  Chou ", "Role": "Fighter/Assassin", "Damage Type": " physical ", "Note": "kick"},
    ])
    heroes = CatalogCache(CsvCatalogSource(csv_dir)).load_heroes()

    assert len(heroes) == 1
    chou = heroes[0]
    assert chou.name == "Chou"
    assert chou.role == "Fighter/Assassin"
    assert chou.primary_role == "Fighter"
    assert chou.damage_type == "physical"
    assert chou.note == "kick"
    assert chou.attack_reliance == ""


def test_load_items_coerces_numbers_with_zero_fallback(write_catalog):
    csv_dir = write_catalog(items=[
        {
            "Item Name": "Odd Item",
            "Category": "attack",
            "Price": "1200",
            "Attack": "abc",
            "Attack Speed": "0.25",
            "Magic Power": "",
            "HP": "nan",
            "Description": "Some text",
        },
    ])
    items = CatalogCache(CsvCatalogSource(csv_dir)).load_items()

    item = items[0]
    assert item.price == 1200
    assert item.attack == 0
    assert item.attack_speed == 0.25
    assert item.magic_power == 0
    assert item.hp == 0
    assert item.armor == 0  # Column present but blank
    assert item.description == "Some text"


@pytest.mark.parametrize(
    "cell, expected",
    [
        ("60", 60),
        (" 1.5e2 ", 150),
        (".5", 0.5),
        ("-12", -12),
        ("0x1F", 31),
        ("0b101", 5),
        ("1_000", 0),
        ("inf", 0),
        ("nan", 0),
        ("Infinity", 0),
        ("1e999", 0),
        ("12abc", 0),
        ("+", 0),
    ],
)
def test_numeric_cell_forms(cell, expected):
    item = parse_item_row({"Item Name": "Long Sword", "Attack": cell}, row_number=2)
    assert item.attack == expected


def test_missing_stat_column_defaults_to_zero(tmp_path):
    csv_dir = tmp_path / "csv"
    csv_dir.mkdir()
    (csv_dir / "items.csv").write_text("Item Name,Category,Price\nDagger,attack,250\n")

    items = CatalogCache(CsvCatalogSource(csv_dir)).load_items()

    assert items[0].price == 250
    assert items[0].attack == 0
    assert items[0].hp_regen == 0


def test_rules_decode_into_variants(write_catalog):
    csv_dir = write_catalog(rules=[
        {"Rule Type": "role_compatibility", "Primary Role": "Marksman", "Compatible Role": "Tank"},
        {"Rule Type": "hero_priority", "Primary Role": "Tank", "Hero Name": "Tigreal", "Priority": "9"},
        {
            "Rule Type": "synergy",
            "Primary Role": "Miya",
            "Compatible Role": "Angela",
            "Hero Name": "Support",
            "Priority": "3",
            "Notes": "attach",
        },
        {"Rule Type": "lane_hint", "Primary Role": "Tank"},
    ])
    rules = CatalogCache(CsvCatalogSource(csv_dir)).load_rules()

    assert rules == (
        RoleCompatibilityRule(primary_role="Marksman", compatible_role="Tank"),
        HeroPriorityRule(role="Tank", hero_name="Tigreal", priority=9),
        SynergyRule(selected_hero="Miya", partner="Angela", bonus=3, partner_role="Support", notes="attach"),
    )


def test_priority_uses_leading_integer():
    rule = parse_rule_row(
        {"Rule Type": "hero_priority", "Primary Role": "Mage", "Hero Name": "Kagura", "Priority": "7 (patch)"},
        row_number=2,
    )
    assert rule.priority == 7


def test_parse_hero_row_blank_name_raises():
    with pytest.raises(MalformedRow) as exc_info:
        parse_hero_row({"Hero Name": "  ", "Role": "Mage"}, row_number=5)
    assert exc_info.value.row_number == 5
    assert exc_info.value.table == "heroes"


def test_malformed_rows_are_skipped_and_logged(write_catalog, caplog):
    csv_dir = write_catalog(
        heroes=[
            {"Hero Name": "Miya", "Role": "Marksman", "Damage Type": "physical"},
            {"Hero Name": "", "Role": "Mage", "Damage Type": "magic"},
            {"Hero Name": "Eudora", "Role": "Mage", "Damage Type": "magic"},
        ],
        rules=[
            {"Rule Type": "hero_priority", "Primary Role": "Mage", "Hero Name": "Eudora", "Priority": "high"},
            {"Rule Type": "synergy", "Primary Role": "Miya", "Priority": "2"},
            {"Rule Type": "role_compatibility", "Primary Role": "Marksman", "Compatible Role": "Mage"},
        ],
    )
    cache = CatalogCache(CsvCatalogSource(csv_dir))

    with caplog.at_level(logging.WARNING):
        heroes = cache.load_heroes()
        rules = cache.load_rules()

    assert [h.name for h in heroes] == ["Miya", "Eudora"]
    assert rules == (RoleCompatibilityRule(primary_role="Marksman", compatible_role="Mage"),)
    assert "heroes row 3" in caplog.text
    assert "skipped 2 malformed row(s)" in caplog.text


def test_missing_directory_raises_source_unavailable(tmp_path):
    cache = CatalogCache(CsvCatalogSource(tmp_path / "nowhere"))
    with pytest.raises(SourceUnavailable) as exc_info:
        cache.load_heroes()
    assert exc_info.value.table == "heroes"


def test_empty_file_raises_source_unavailable(tmp_path):
    csv_dir = tmp_path / "csv"
    csv_dir.mkdir()
    (csv_dir / "items.csv").write_text("")
    with pytest.raises(SourceUnavailable):
        CatalogCache(CsvCatalogSource(csv_dir)).load_items()


# ======================================================================
# Caching
# ======================================================================


def test_repeated_loads_return_same_object(cache):
    first = cache.load_items()
    second = cache.load_items()
    assert first is second
    assert cache.is_loaded("items")


def test_cached_collection_survives_file_edits_until_invalidate(write_catalog):
    csv_dir = write_catalog()
    cache = CatalogCache(CsvCatalogSource(csv_dir))
    before = cache.load_heroes()

    write_catalog(heroes=[{"Hero Name": "Layla", "Role": "Marksman", "Damage Type": "physical"}])
    assert cache.load_heroes() is before

    cache.invalidate()
    after = cache.load_heroes()
    assert [h.name for h in after] == ["Layla"]


def test_invalidate_is_idempotent(cache):
    cache.load_heroes()
    cache.invalidate()
    cache.invalidate()
    assert not cache.is_loaded("heroes")


def test_reload_returns_counts(cache):
    counts = cache.reload()
    assert counts == {"heroes": 4, "items": 3, "draft_rules": 2}
    assert cache.is_loaded("draft_rules")


def test_sequential_loads_have_equal_values(write_catalog):
    csv_dir = write_catalog()
    first = CatalogCache(CsvCatalogSource(csv_dir)).load_items()
    second = CatalogCache(CsvCatalogSource(csv_dir)).load_items()
    assert first == second


def test_isolated_caches_do_not_share_state(write_catalog):
    csv_dir = write_catalog()
    a = CatalogCache(CsvCatalogSource(csv_dir))
    b = CatalogCache(CsvCatalogSource(csv_dir))
    a.load_heroes()
    assert not b.is_loaded("heroes")


# ======================================================================
# DuckDB source
# ======================================================================


def _build_duckdb(csv_dir, db_path):
    with duckdb.connect(str(db_path)) as conn:
        for stem, table in [("heroes", "heroes"), ("items", "items"), ("draft-rules", "draft_rules")]:
            conn.execute(f"""
                CREATE TABLE {table} AS
                SELECT * FROM read_csv('{csv_dir / (stem + ".csv")}', header=true, all_varchar=true)
            """)
    return db_path


def test_duckdb_source_matches_csv_source(write_catalog, tmp_path):
    csv_dir = write_catalog()
    db_path = _build_duckdb(csv_dir, tmp_path / "catalog.duckdb")

    from_csv = CatalogCache(CsvCatalogSource(csv_dir))
    from_db = CatalogCache(DuckDBCatalogSource(db_path))

    assert from_db.load_heroes() == from_csv.load_heroes()
    assert from_db.load_items() == from_csv.load_items()
    assert from_db.load_rules() == from_csv.load_rules()


def test_duckdb_missing_file_raises(tmp_path):
    cache = CatalogCache(DuckDBCatalogSource(tmp_path / "missing.duckdb"))
    with pytest.raises(SourceUnavailable):
        cache.load_items()


def test_duckdb_missing_table_raises(tmp_path):
    db_path = tmp_path / "partial.duckdb"
    with duckdb.connect(str(db_path)) as conn:
        conn.execute("CREATE TABLE heroes (\"Hero Name\" VARCHAR)")
    cache = CatalogCache(DuckDBCatalogSource(db_path))
    with pytest.raises(SourceUnavailable):
        cache.load_rules()


# ======================================================================
# Shipped catalog
# ======================================================================


def test_shipped_catalog_loads_every_row(caplog):
    cache = CatalogCache(CsvCatalogSource(REPO_ROOT / "data" / "csv"))

    with caplog.at_level(logging.WARNING):
        counts = cache.reload()

    assert counts == {"heroes": 12, "items": 25, "draft_rules": 27}
    assert "malformed" not in caplog.text
    synergy = [rule for rule in cache.load_rules() if isinstance(rule, SynergyRule)]
    assert [(rule.selected_hero, rule.partner, rule.bonus) for rule in synergy] == [
        ("Miya", "Angela", 3),
        ("Tigreal", "Eudora", 3),
        ("Angela", "Marksman", 2),
    ]
