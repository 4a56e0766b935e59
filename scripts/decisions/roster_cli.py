#!/usr/bin/env python
"""Roster Optimization — CLI wrapper for decision function.

Decision Rule (Exact): Maximize Σ(expected_points)
4 riders per class, one All-Star per class unless disabled.

CONTRACT: This script MUST call pick_roster()
from gatedrop.decisions. No alternate execution paths allowed.

Usage:
    PYTHONPATH=src python scripts/decisions/roster_cli.py --candidates storage/a1.csv
    PYTHONPATH=src python scripts/decisions/roster_cli.py --candidates a1.csv --exclude 12 --exclude 40
    PYTHONPATH=src python scripts/decisions/roster_cli.py --candidates a1.csv --no-all-star-250
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from gatedrop.config import DEFAULT_REQUIRE_ALL_STAR, LOG_DATE_FORMAT, LOG_FORMAT, LOG_LEVEL
from gatedrop.data import candidates_from_frame, read_table
from gatedrop.decisions import pick_roster
from gatedrop.exceptions import GatedropError
from gatedrop.models import BikeClass


def main():
    parser = argparse.ArgumentParser(description="Pick the optimal 8-rider roster")
    parser.add_argument("--candidates", required=True, help="CSV/JSON with rider_id, bike_class, expected_points")
    parser.add_argument("--exclude", action="append", default=[], help="Rider id to exclude (repeatable)")
    parser.add_argument("--no-all-star-250", action="store_true", help="Do not require a 250 All-Star")
    parser.add_argument("--no-all-star-450", action="store_true", help="Do not require a 450 All-Star")
    parser.add_argument("--output", default=None, help="Write selected riders to this CSV")
    args = parser.parse_args()

    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    require_all_star = {
        BikeClass.CLASS_250: DEFAULT_REQUIRE_ALL_STAR and not args.no_all_star_250,
        BikeClass.CLASS_450: DEFAULT_REQUIRE_ALL_STAR and not args.no_all_star_450,
    }

    try:
        candidates_df = read_table(args.candidates)
        roster, selected_df = pick_roster(
            candidates_df,
            excluded_ids=[x.strip() for x in args.exclude],
            require_all_star=require_all_star,
        )
    except (GatedropError, FileNotFoundError) as e:
        print(f"ERROR: {e}")
        return 1

    roster.print_roster(candidates_from_frame(candidates_df))

    if not roster.is_feasible:
        return 1

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        selected_df.to_csv(output_path, index=False)
        print(f"Saved to {output_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
