#!/usr/bin/env python3
"""
Generate the HTML results report from the detail JSON.

Usage:
    python scripts/generate_report.py
    python scripts/generate_report.py --simulate 5
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Add project path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent))

from bd_election_results.config import DETAIL_FILENAME, OUT_DIR, REPORT_FILENAME
from bd_election_results.report import write_report
from bd_election_results.simulator import simulate
from scrape_results import setup_logging


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render the BNP vs NCP/Jamaat results report")
    parser.add_argument("--detail", type=Path, default=OUT_DIR / DETAIL_FILENAME,
                        help="Detail JSON written by scrape_results.py")
    parser.add_argument("--output", type=Path, default=OUT_DIR / REPORT_FILENAME,
                        help="HTML file to write")
    parser.add_argument("--simulate", type=float, default=None, metavar="PCT",
                        help="Also print seat counts after moving PCT%% of votes to the alliance")
    parser.add_argument("--quiet", action="store_true", help="Only log warnings and errors")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution function."""
    args = parse_args(argv)
    setup_logging(verbose=not args.quiet)
    logger = logging.getLogger(__name__)

    try:
        stats = write_report(args.detail, args.output)
    except FileNotFoundError:
        logger.error(f"Detail file not found: {args.detail}")
        return 1
    except ValueError as e:
        logger.error(f"Invalid detail file {args.detail}: {e}")
        return 1

    print(f"HTML report generated: {args.output}")
    print(f"   BNP wins: {stats.bnp_wins} seats")
    print(f"   Alliance wins: {stats.alliance_wins} seats")
    print(f"   BNP total votes: {stats.bnp_total_votes:,}")
    print(f"   Alliance total votes: {stats.alliance_total_votes:,}")

    if args.simulate is not None:
        result = simulate(stats.combined_seats, args.simulate)
        print(f"\nSimulation ({result.percentage:+g}% to alliance):")
        print(f"   BNP wins: {result.bnp_wins} seats ({result.bnp_total_votes:,} votes)")
        print(f"   Alliance wins: {result.alliance_wins} seats ({result.alliance_total_votes:,} votes)")

    return 0


if __name__ == "__main__":
    sys.exit(main())
