#!/usr/bin/env python
"""Race Scoring — CLI wrapper for decision function.

Scoring Rule: table points at max(1, finish - handicap),
doubled for non-All-Stars at 10th or better.

CONTRACT: This script MUST call score_results()
from gatedrop.decisions. No alternate execution paths allowed.

Usage:
    PYTHONPATH=src python scripts/decisions/score_cli.py --results storage/a1_results.csv
    PYTHONPATH=src python scripts/decisions/score_cli.py --results a1.csv --skip-pending --output out.csv
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from gatedrop.config import LOG_DATE_FORMAT, LOG_FORMAT, LOG_LEVEL, REPORTS_DIR
from gatedrop.data import read_table
from gatedrop.decisions import score_results
from gatedrop.exceptions import GatedropError


def main():
    parser = argparse.ArgumentParser(description="Score race results")
    parser.add_argument("--results", required=True, help="CSV/JSON with rider_id, finish_position, handicap, is_all_star")
    parser.add_argument("--skip-pending", action="store_true", help="Skip riders without a finish position")
    parser.add_argument("--output", default=None, help="Output CSV (default: reports dir)")
    args = parser.parse_args()

    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    try:
        scored_df = score_results(read_table(args.results), skip_pending=args.skip_pending)
    except (GatedropError, FileNotFoundError) as e:
        print(f"ERROR: {e}")
        return 1

    print("\n" + "=" * 70)
    print("RACE SCORING")
    print("=" * 70)
    for _, row in scored_df.sort_values("fantasy_points", ascending=False).iterrows():
        name = row.get("rider_name", row.get("rider_id", "?"))
        print(f"{str(name):<22} {row['fantasy_points']:>4}  {row['points_breakdown']}")
    print("=" * 70 + "\n")

    output_path = Path(args.output) if args.output else REPORTS_DIR / f"{Path(args.results).stem}_scored.csv"
    output_path.parent.mkdir(parents=True, exist_ok=True)
    scored_df.to_csv(output_path, index=False)
    print(f"Saved to {output_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
