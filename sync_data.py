#!/usr/bin/env python3
"""
Load baseline returns into the store and check them.

Usage:
    python sync_data.py 2016 2020 2024          # Sync cycles from the baseline API
    python sync_data.py 2024 --regions 19,55    # Sync only some regions
    python sync_data.py --file returns.json     # Load a {cycle: [...]} timeline file
    python sync_data.py --file 2024.csv 2024    # Load one cycle from CSV/JSON list
    python sync_data.py --validate              # Check data integrity
"""

import sys

import duckdb

from app.repositories import BaselineRepository, get_write_connection
from etl import load_file, sync_all
from etl.validation import validate_cycle
from settings import DB_PATH
from settings.logging import setup_logging

logger = setup_logging(level="INFO", to_file=True)


def run_validation(cycles: list[int] | None = None) -> bool:
    """Validate cycles in database."""
    conn = duckdb.connect(DB_PATH, read_only=True)

    if not cycles:
        cycles = [r[0] for r in conn.execute("SELECT DISTINCT cycle FROM baseline ORDER BY cycle").fetchall()]

    if not cycles:
        print("\nNo baselines found. Run 'python sync_data.py <cycle>' first.\n")
        conn.close()
        return True

    print("\n" + "=" * 60)
    print("BASELINE VALIDATION REPORT")
    print("=" * 60)

    all_valid = True
    for cycle in cycles:
        result = validate_cycle(conn, cycle)
        status = "OK" if result["valid"] else "ISSUES"
        print(f"\nCycle {cycle} [{status}]")
        print(f"  Records: {result['stats']['records']:,}")
        print(f"  Regions: {result['stats']['regions']:,}")
        print(f"  Total votes: {result['stats']['total_votes']:,}")
        print(f"  Not reporting: {result['stats']['not_reporting']}")
        print(f"  Party votes above total: {result['stats']['party_over_total']}")
        if result["issues"]:
            all_valid = False
            for issue in result["issues"]:
                print(f"  - {issue}")

    print("\n" + "=" * 60)
    print("All data valid!" if all_valid else "Some issues found. Reload the affected cycles.")
    print("=" * 60 + "\n")

    conn.close()
    return all_valid


def _option(args: list[str], name: str) -> str | None:
    if name in args:
        i = args.index(name)
        if i + 1 < len(args):
            return args[i + 1]
    return None


def main():
    args = sys.argv[1:]

    if "--validate" in args or args == ["validate"]:
        run_validation()
        return

    path = _option(args, "--file")
    regions = _option(args, "--regions") or "ALL"
    positional = [a for i, a in enumerate(args) if i == 0 or args[i - 1] not in ("--file", "--regions")]
    cycles = [int(a) for a in positional if a.isdigit()]

    if path:
        conn = get_write_connection()
        try:
            stats = load_file(BaselineRepository(read_only=False, conn=conn), path, cycles[0] if cycles else None)
        finally:
            conn.close()
        run_validation(list(stats))
        return

    if not cycles:
        print(__doc__)
        sys.exit(1)

    logger.info("Syncing cycles {} (regions={})", cycles, regions)
    sync_all(cycles, regions if regions == "ALL" else regions.split(","))

    logger.info("Running validation...")
    run_validation(cycles)


if __name__ == "__main__":
    main()
