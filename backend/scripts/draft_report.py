#!/usr/bin/env python3
"""Print partner and item recommendations from the command line.

Useful for checking rule-table edits before reloading the server.

Usage:
    # Partners for a hero
    python backend/scripts/draft_report.py --hero Miya

    # Suggested build for a role / damage type
    python backend/scripts/draft_report.py --role Mage --damage-type magic

    # Budget items
    python backend/scripts/draft_report.py --damage-type physical --budget 1500

    # Read a different CSV directory, emit JSON
    python backend/scripts/draft_report.py --hero Tigreal --csv-dir /tmp/csv --json
"""

import argparse
import json
import sys

from hero_draft.errors import CatalogError, HeroNotFoundError
from hero_draft.repositories.catalog_repository import CatalogCache, CsvCatalogSource
from hero_draft.services.recommendation_engine import RecommendationEngine, create_engine


def _print_partners(engine: RecommendationEngine, hero: str, limit: int, as_json: bool) -> None:
    simulation = engine.simulate_draft(hero, limit=limit)
    if as_json:
        print(json.dumps(simulation.to_dict(), indent=2))
        return

    print(f"\n{simulation.selected.name} ({simulation.selected.role})")
    print(f"  {simulation.pick_reason}")
    if not simulation.partners:
        print("  No compatible partners found")
    for i, rec in enumerate(simulation.partners, start=1):
        print(
            f"  {i}. {rec.hero.name:<15} {rec.role:<10} "
            f"base={rec.base_priority} diversity=+{rec.diversity_bonus} "
            f"synergy=+{rec.synergy_bonus} total={rec.total_score}"
        )
    balance = "balanced" if simulation.validation.is_balanced else "unbalanced"
    print(f"  Team: {balance} {simulation.validation.role_distribution}")


def _print_build(engine: RecommendationEngine, role: str, damage_type: str, as_json: bool) -> None:
    build = engine.suggest_build(role, damage_type)
    if as_json:
        print(json.dumps(build.to_dict(), indent=2))
        return

    print(f"\nBuild for {role} ({damage_type})")
    for item in build.suggested:
        print(f"  - {item.name:<25} {item.price:>8.0f}")
    print(f"  Total: {build.meta.total_price:.0f}")


def _print_budget(engine: RecommendationEngine, damage_type: str, max_price: float, limit: int, as_json: bool) -> None:
    items = engine.budget_items(damage_type, max_price=max_price, limit=limit)
    if as_json:
        print(json.dumps([item.to_dict() for item in items], indent=2))
        return

    print(f"\nBudget {damage_type} items up to {max_price:.0f}")
    for item in items:
        print(f"  - {item.name:<25} {item.price:>8.0f}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Print hero draft recommendations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument("--hero", help="Selected hero for partner recommendations")
    parser.add_argument("--limit", type=int, default=4, help="Maximum results (default: 4)")
    parser.add_argument("--role", help="Role for a build suggestion (e.g. Mage)")
    parser.add_argument("--damage-type", help="physical or magic")
    parser.add_argument("--budget", type=float, metavar="MAX_PRICE",
                        help="List budget items up to MAX_PRICE")
    parser.add_argument("--csv-dir", help="Catalog CSV directory (default: from settings)")
    parser.add_argument("--json", "-j", action="store_true", help="Emit JSON")
    args = parser.parse_args(argv)

    if not (args.hero or args.damage_type):
        parser.error("pass --hero and/or --damage-type")

    if args.csv_dir:
        engine = RecommendationEngine(CatalogCache(CsvCatalogSource(args.csv_dir)))
    else:
        engine = create_engine()

    damage_type = args.damage_type.lower() if args.damage_type else None

    try:
        if args.hero:
            _print_partners(engine, args.hero, args.limit, args.json)
        if damage_type and args.budget is not None:
            _print_budget(engine, damage_type, args.budget, args.limit, args.json)
        elif damage_type:
            role = (args.role or "").capitalize()
            _print_build(engine, role, damage_type, args.json)
    except HeroNotFoundError as e:
        print(f"Error: {e}")
        sys.exit(1)
    except CatalogError as e:
        print(f"Error: {e}")
        sys.exit(2)


if __name__ == "__main__":
    main()
