#!/usr/bin/env python3
"""
Bangladesh 2026 constituency results scraper.

Walks every division, district and seat on the results site, keeps the
BNP and NCP/Jamaat (alliance) candidates of each seat, and writes
out/bnp_vs_alliance_detail.json after every district.

Usage:
    python scripts/scrape_results.py
    python scripts/scrape_results.py --division Dhaka --cache-dir data/raw
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

# Add project path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from bd_election_results.config import ScraperConfig
from bd_election_results.detail_store import DetailStore
from bd_election_results.scraper import ElectionScraper


def setup_logging(verbose: bool = True, log_dir: Path = Path("logs")) -> None:
    """Setup logging configuration."""
    level = logging.INFO if verbose else logging.WARNING

    log_dir.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_dir / f"scraper_{int(time.time())}.log", encoding='utf-8'),
            logging.StreamHandler(sys.stdout)
        ]
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Scrape BNP vs NCP/Jamaat results per constituency")
    parser.add_argument("--out-dir", type=Path, default=None,
                        help="Directory for the detail JSON (default: out/)")
    parser.add_argument("--rate-limit", type=float, default=None,
                        help="Seconds between requests, minimum 1")
    parser.add_argument("--cache-dir", type=Path, default=None,
                        help="Cache raw district pages here")
    parser.add_argument("--division", action="append", dest="divisions", default=None,
                        help="Only scrape this division (id or name); repeatable")
    parser.add_argument("--no-robots", action="store_true",
                        help="Skip the robots.txt check")
    parser.add_argument("--quiet", action="store_true", help="Only log warnings and errors")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution function."""
    args = parse_args(argv)
    setup_logging(verbose=not args.quiet)
    logger = logging.getLogger(__name__)

    try:
        config = ScraperConfig.from_env(
            out_dir=args.out_dir,
            rate_limit=args.rate_limit,
            cache_dir=args.cache_dir,
            divisions=args.divisions,
        )
        config.selected_divisions()
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    store = DetailStore(config.detail_path)
    store.initialize()

    try:
        scraper = ElectionScraper(config, check_robots=not args.no_robots)
        summary = scraper.scrape_all(on_district=store.update)
        store.update(summary.seat_results)

    except KeyboardInterrupt:
        logger.info(f"Scraping interrupted by user, partial results kept in {config.detail_path}")
        return 130
    except Exception as e:
        logger.error(f"Scraping failed: {e}")
        return 1

    print("\n--- GRAND TOTALS ---")
    print(f"Seats scraped: {len(summary.seat_results)}")
    print(f"BNP: {summary.total_bnp:,} votes")
    print(f"NCP/Jamaat (alliance): {summary.total_alliance:,} votes")
    if summary.failed_divisions or summary.failed_districts:
        print(f"Failed: {', '.join(summary.failed_divisions + summary.failed_districts)}")
    print(f"Output saved to: {config.detail_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
