"""
performance_report.py: Print a performance report for a JSON ledger export.

The input is a JSON array of ledger rows (snake_case or camelCase keys), for
example the output of an admin "export bets" query.  Rows are validated with
the ingestion schema; the first malformed row aborts the run.

Usage
-----
  python scripts/performance_report.py bets.json
  python scripts/performance_report.py bets.json --interval weekly
  python scripts/performance_report.py bets.json --user u-7 --sport NFL
"""

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

from pydantic import ValidationError

# Ensure the project root (one level up from scripts/) is on sys.path so that
# `from bet_analytics.xxx import ...` resolves when run directly.
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from bet_analytics.config import AnalyticsSettings  # noqa: E402
from bet_analytics.core.records import InvalidRecordError  # noqa: E402
from bet_analytics.schemas import parse_ledger  # noqa: E402
from bet_analytics.services.performance import build_performance_report  # noqa: E402

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Compute betting performance analytics for a ledger export."
    )
    parser.add_argument("ledger", type=Path, help="JSON file containing a list of bet rows")
    parser.add_argument(
        "--interval",
        choices=["daily", "weekly", "monthly"],
        help="Profit-over-time bucket size (default: ANALYTICS_BUCKET_INTERVAL or daily)",
    )
    parser.add_argument("--user", help="Only include bets for this user_id")
    parser.add_argument("--sport", help="Only include bets for this sport")
    parser.add_argument("--indent", type=int, default=2, help="JSON indent (default 2)")
    args = parser.parse_args()

    try:
        rows = json.loads(args.ledger.read_text())
        records = parse_ledger(rows)
    except (OSError, json.JSONDecodeError, ValidationError, InvalidRecordError) as exc:
        logger.error("Could not load ledger %s: %s", args.ledger, exc)
        sys.exit(1)

    if args.user:
        records = [r for r in records if r.user_id == args.user]
    if args.sport:
        records = [r for r in records if (r.sport or "").lower() == args.sport.lower()]

    settings = AnalyticsSettings.from_env()
    if args.interval:
        settings = replace(settings, bucket_interval=args.interval)

    logger.info("Loaded %d bets from %s", len(records), args.ledger)
    report = build_performance_report(records, settings)
    print(json.dumps(report.to_dict(), indent=args.indent))


if __name__ == "__main__":
    main()
