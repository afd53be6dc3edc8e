#!/usr/bin/env python3
"""Build the DuckDB catalog database from the catalog CSV files.

Run this after editing the catalog CSVs when serving with
CATALOG_BACKEND=duckdb, then call POST /api/admin/catalog/reload.

Only the three catalog tables are imported, under the table names the
loader reads (draft-rules.csv -> draft_rules). Cells are stored as text;
the loader does its own coercion.

Usage:
    python backend/scripts/build_duckdb.py [csv_dir] [output_path]

Default csv_dir: data/csv (relative to repo root)
Default output_path: data/catalog.duckdb
"""
import sys
from pathlib import Path

import duckdb

from hero_draft.repositories.catalog_repository import CSV_FILENAMES


def build_duckdb(csv_dir: Path, output_path: Path) -> dict[str, int]:
    """Write every catalog table found in csv_dir into a fresh database.

    Returns:
        Row count per imported table. Tables whose CSV is missing are absent.
    """
    if output_path.exists():
        output_path.unlink()
        print(f"Removed existing {output_path}")

    counts: dict[str, int] = {}
    with duckdb.connect(str(output_path)) as conn:
        for table, filename in CSV_FILENAMES.items():
            csv_file = csv_dir / filename
            if not csv_file.exists():
                print(f"  ✗ {table}: {csv_file} not found")
                continue
            conn.execute(f"""
                CREATE TABLE {table} AS
                SELECT * FROM read_csv('{csv_file}', header=true, all_varchar=true)
            """)
            counts[table] = conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]
            print(f"  ✓ {table}: {counts[table]:,} rows")

    return counts


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    repo_root = Path(__file__).parent.parent.parent  # backend/scripts -> backend -> repo root
    csv_dir = Path(args[0]) if len(args) > 0 else repo_root / "data" / "csv"
    output_path = Path(args[1]) if len(args) > 1 else repo_root / "data" / "catalog.duckdb"

    if not csv_dir.is_dir():
        print(f"Error: CSV directory not found: {csv_dir}")
        return 1

    print(f"Building {output_path} from {csv_dir}...")
    counts = build_duckdb(csv_dir, output_path)

    missing = [table for table in CSV_FILENAMES if table not in counts]
    if missing:
        print(f"\nIncomplete catalog, missing tables: {', '.join(missing)}")
        return 1

    print(f"\nDone! Database ready at: {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
