"""Catalog loading from tabular sources with an explicit in-memory cache."""

import logging
import math
import re
import threading
from pathlib import Path
from typing import Any, Callable, Optional, Protocol

import duckdb
import pandas as pd

from hero_draft.errors import MalformedRow, SourceUnavailable
from hero_draft.models.catalog import DEFAULT_STAT_VALUE, HeroRecord, ItemRecord
from hero_draft.models.rules import (
    RULE_TYPE_HERO_PRIORITY,
    RULE_TYPE_ROLE_COMPATIBILITY,
    RULE_TYPE_SYNERGY,
    DraftRule,
    HeroPriorityRule,
    RoleCompatibilityRule,
    SynergyRule,
)

logger = logging.getLogger(__name__)

HEROES_TABLE = "heroes"
ITEMS_TABLE = "items"
RULES_TABLE = "draft_rules"

CSV_FILENAMES = {
    HEROES_TABLE: "heroes.csv",
    ITEMS_TABLE: "items.csv",
    RULES_TABLE: "draft-rules.csv",
}

# Item table column -> ItemRecord numeric field
ITEM_STAT_COLUMNS = {
    "Price": "price",
    "Attack": "attack",
    "Attack Speed": "attack_speed",
    "Crit Chance": "crit_chance",
    "Armor Penetration": "armor_penetration",
    "Spell Vamp": "spell_vamp",
    "Magic Power": "magic_power",
    "HP": "hp",
    "Armor": "armor",
    "Magic Resist": "magic_resist",
    "Movement Speed": "movement_speed",
    "Cooldown Reduction": "cooldown_reduction",
    "Mana Regen": "mana_regen",
    "HP Regen": "hp_regen",
}

_LEADING_INT = re.compile(r"^[+-]?\d+")
# Plain decimal or exponent notation; no underscores, no "inf"/"nan" words
_DECIMAL = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
# Unsigned hex, octal and binary literals ("0x1F")
_PREFIXED_INT = re.compile(r"^0([xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)$")

Row = dict[str, Any]


class CatalogSource(Protocol):
    """Anything that can return a table as a list of header-keyed rows."""

    identity: str

    def read_table(self, table: str) -> list[Row]:
        ...


class CsvCatalogSource:
    """Reads catalog tables from a directory of CSV files."""

    def __init__(self, csv_dir: Path | str):
        self.csv_dir = Path(csv_dir)
        self.identity = f"csv:{self.csv_dir}"

    def read_table(self, table: str) -> list[Row]:
        path = self.csv_dir / CSV_FILENAMES.get(table, f"{table}.csv")
        if not path.exists():
            raise SourceUnavailable(table, str(path), "file not found")
        try:
            df = pd.read_csv(path, dtype=str, keep_default_na=False, skipinitialspace=True)
        except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            raise SourceUnavailable(table, str(path), str(e)) from e
        df.columns = [str(col).strip() for col in df.columns]
        return df.to_dict(orient="records")


class DuckDBCatalogSource:
    """Reads catalog tables from a DuckDB file built by scripts/build_duckdb.py."""

    def __init__(self, database_path: Path | str):
        self._db_path = Path(database_path)
        self.identity = f"duckdb:{self._db_path}"

    def read_table(self, table: str) -> list[Row]:
        if not self._db_path.exists():
            raise SourceUnavailable(table, str(self._db_path), "database file not found")
        try:
            # Read-only connection per query - no locks needed
            with duckdb.connect(str(self._db_path), read_only=True) as conn:
                df = conn.execute(f'SELECT * FROM "{table}"').df()
        except duckdb.Error as e:
            raise SourceUnavailable(table, str(self._db_path), str(e)) from e
        df.columns = [str(col).strip() for col in df.columns]
        return df.to_dict(orient="records")


# ======================================================================
# Cell coercion
# ======================================================================


def _text(value: Any) -> str:
    """Trimmed string for a cell; None/NaN read as blank."""
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value).strip()


def _to_number(value: Any) -> float:
    """Parse a numeric cell, falling back to DEFAULT_STAT_VALUE."""
    text = _text(value)
    if _PREFIXED_INT.match(text):
        try:
            return float(int(text, 0))
        except OverflowError:
            return DEFAULT_STAT_VALUE
    if not _DECIMAL.match(text):
        return DEFAULT_STAT_VALUE
    number = float(text)
    # Overflowing exponents read as infinite and fall back
    if not math.isfinite(number):
        return DEFAULT_STAT_VALUE
    return number


def _to_int(value: Any) -> Optional[int]:
    """Parse the leading base-10 integer of a cell ("8 (meta)" -> 8), None if absent."""
    match = _LEADING_INT.match(_text(value))
    if match is None:
        return None
    return int(match.group(0))


# ======================================================================
# Row parsers
# ======================================================================


def parse_hero_row(row: Row, row_number: int) -> HeroRecord:
    name = _text(row.get("Hero Name"))
    if not name:
        raise MalformedRow(HEROES_TABLE, row_number, "blank Hero Name")
    return HeroRecord(
        name=name,
        role=_text(row.get("Role")),
        damage_type=_text(row.get("Damage Type")),
        attack_reliance=_text(row.get("Attack Reliance")),
        note=_text(row.get("Note")),
    )


def parse_item_row(row: Row, row_number: int) -> ItemRecord:
    name = _text(row.get("Item Name"))
    if not name:
        raise MalformedRow(ITEMS_TABLE, row_number, "blank Item Name")
    stats = {field: _to_number(row.get(column)) for column, field in ITEM_STAT_COLUMNS.items()}
    return ItemRecord(
        name=name,
        category=_text(row.get("Category")),
        description=_text(row.get("Description")),
        **stats,
    )


def parse_rule_row(row: Row, row_number: int) -> Optional[DraftRule]:
    """Decode one rule row into its variant.

    Returns None for rule types this engine does not know about.
    """
    rule_type = _text(row.get("Rule Type"))
    primary = _text(row.get("Primary Role"))
    compatible = _text(row.get("Compatible Role"))
    hero_name = _text(row.get("Hero Name"))

    if rule_type == RULE_TYPE_ROLE_COMPATIBILITY:
        if not primary or not compatible:
            raise MalformedRow(RULES_TABLE, row_number, "role_compatibility needs both roles")
        return RoleCompatibilityRule(primary_role=primary, compatible_role=compatible)

    if rule_type == RULE_TYPE_HERO_PRIORITY:
        priority = _to_int(row.get("Priority"))
        if not primary or not hero_name or priority is None:
            raise MalformedRow(RULES_TABLE, row_number, "hero_priority needs role, hero and integer priority")
        return HeroPriorityRule(role=primary, hero_name=hero_name, priority=priority)

    if rule_type == RULE_TYPE_SYNERGY:
        # Synergy rows reuse the shared columns:
        # Primary Role = selected hero, Compatible Role = partner hero or role,
        # Priority = bonus, Hero Name = partner role label
        bonus = _to_int(row.get("Priority"))
        if not primary or not compatible or bonus is None:
            raise MalformedRow(RULES_TABLE, row_number, "synergy needs both sides and integer bonus")
        return SynergyRule(
            selected_hero=primary,
            partner=compatible,
            bonus=bonus,
            partner_role=hero_name,
            notes=_text(row.get("Notes")),
        )

    logger.debug(f"Ignoring {RULES_TABLE} row {row_number} with rule type {rule_type!r}")
    return None


def _parse_rows(table: str, rows: list[Row], parser: Callable[[Row, int], Any]) -> tuple:
    records = []
    skipped = 0
    # Row numbers are 1-based and count the header, matching spreadsheet view
    for row_number, row in enumerate(rows, start=2):
        try:
            record = parser(row, row_number)
        except MalformedRow as e:
            skipped += 1
            logger.warning(f"Skipping malformed row: {e}")
            continue
        if record is not None:
            records.append(record)
    if skipped:
        logger.warning(f"{table}: skipped {skipped} malformed row(s)")
    return tuple(records)


# ======================================================================
# Cache
# ======================================================================


class CatalogCache:
    """Owns the parsed catalog collections for one source.

    Each table is read and parsed on first access and the resulting tuple is
    returned on every later call (the same object, not a copy). Collections
    stay until ``invalidate()`` or ``reload()`` is called explicitly.
    """

    def __init__(self, source: CatalogSource):
        self.source = source
        self._collections: dict[str, tuple] = {}
        self._lock = threading.Lock()

    def load_heroes(self) -> tuple[HeroRecord, ...]:
        return self._load(HEROES_TABLE, parse_hero_row)

    def load_items(self) -> tuple[ItemRecord, ...]:
        return self._load(ITEMS_TABLE, parse_item_row)

    def load_rules(self) -> tuple[DraftRule, ...]:
        return self._load(RULES_TABLE, parse_rule_row)

    def is_loaded(self, table: str) -> bool:
        return table in self._collections

    def invalidate(self) -> None:
        """Drop every cached collection. Safe to call repeatedly."""
        with self._lock:
            self._collections.clear()
        logger.info(f"Catalog cache invalidated for {self.source.identity}")

    def reload(self) -> dict[str, int]:
        """Invalidate, then re-read all tables. Returns row counts per table."""
        self.invalidate()
        return {
            HEROES_TABLE: len(self.load_heroes()),
            ITEMS_TABLE: len(self.load_items()),
            RULES_TABLE: len(self.load_rules()),
        }

    def _load(self, table: str, parser: Callable[[Row, int], Any]) -> tuple:
        cached = self._collections.get(table)
        if cached is not None:
            return cached
        with self._lock:
            cached = self._collections.get(table)
            if cached is not None:
                return cached
            rows = self.source.read_table(table)
            records = _parse_rows(table, rows, parser)
            self._collections[table] = records
        logger.info(f"Loaded {len(records)} {table} from {self.source.identity}")
        return records
