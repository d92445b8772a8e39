"""
CLI entry point for running a single availability query against a snapshot file.

Usage:
    python -m availability_engine.engine.run_query --data calendar.json \
        --intent find_slots --start 2026-01-05 --end 2026-01-09 --preference morning
    python -m availability_engine.engine.run_query --data calendar.json \
        --intent suggest_times --start 2026-01-01 --end 2026-01-31 --count 5 --verbose
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from availability_engine.engine.query_engine import create_query_engine
from availability_engine.schemas.calendar_schema import CalendarSnapshot
from availability_engine.schemas.query_schema import (
    QueryIntent,
    QueryValidationError,
    SlotDuration,
    TimePreference,
    parse_query,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Query an instructor calendar snapshot for open days and times."
    )
    parser.add_argument(
        "--data",
        type=str,
        required=True,
        help="Path to a calendar snapshot JSON file.",
    )
    parser.add_argument(
        "--intent",
        choices=[intent.value for intent in QueryIntent],
        required=True,
        help="Kind of query to run.",
    )
    parser.add_argument("--start", type=str, required=True, help="First date (YYYY-MM-DD).")
    parser.add_argument("--end", type=str, required=True, help="Last date (YYYY-MM-DD).")
    parser.add_argument(
        "--preference",
        choices=[pref.value for pref in TimePreference],
        default=TimePreference.ANY.value,
        help="Time-of-day preference (default: any).",
    )
    parser.add_argument(
        "--duration",
        choices=[duration.value for duration in SlotDuration],
        default=SlotDuration.ONE_HOUR.value,
        help="Required contiguous block (default: 1hour).",
    )
    parser.add_argument(
        "--count",
        type=int,
        default=None,
        help="Maximum number of results.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging output.",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        )
    else:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s %(levelname)s: %(message)s",
        )

    data_path = Path(args.data)
    if not data_path.is_file():
        logger.error("Snapshot file not found: %s", data_path)
        sys.exit(1)

    try:
        snapshot = CalendarSnapshot.model_validate_json(data_path.read_text(encoding="utf-8"))
    except (OSError, ValidationError) as exc:
        logger.error("Invalid snapshot in %s: %s", data_path, exc)
        sys.exit(1)

    logger.info("Loaded snapshot for '%s' from %s", snapshot.owner_id, data_path)

    payload = {
        "intent": args.intent,
        "date_range": {"start": args.start, "end": args.end},
        "time_preference": args.preference,
        "slot_duration": args.duration,
        "count": args.count,
    }

    try:
        query = parse_query(payload)
        result = create_query_engine(snapshot).execute(query)
    except QueryValidationError as exc:
        logger.error("%s", exc)
        sys.exit(1)

    sys.stdout.write(result.model_dump_json(indent=2) + "\n")


if __name__ == "__main__":
    main()
