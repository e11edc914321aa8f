# File: calendar_summary/cli.py
"""
Calendar summary entry point.
Reads a rendered calendar page (saved file or URL) and prints how much
time went to each activity or color.
"""

import argparse
import json
import sys
import time
from typing import List, Optional

import requests

from calendar_summary.core.config_manager import Config
from calendar_summary.core.orchestrator import SummaryService
from calendar_summary.models.calendar import DateRange
from calendar_summary.models.common import parse_iso_date
from calendar_summary.models.enums import GroupingMode
from calendar_summary.models.summary import SummaryResponse
from calendar_summary.services.page_loader import load_document
from calendar_summary.utils.logger import setup_logger

logger = setup_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="calendar-summary",
        description="Summarize time spent per activity on a rendered calendar page."
    )
    parser.add_argument("source", help="Saved HTML file or http(s) URL of the calendar page")
    parser.add_argument("--url", help="Original page URL, used for date hints when reading a file")
    parser.add_argument(
        "--group-by",
        choices=["name", "color"],
        default="name",
        help="Group activities by name or by color (default: name)"
    )
    parser.add_argument("--start", help="First day to include (YYYY-MM-DD)")
    parser.add_argument("--end", help="Last day to include (YYYY-MM-DD)")
    parser.add_argument("--output", help="Also save the response JSON to this file")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    return parser


def parse_date_range(start: Optional[str], end: Optional[str]) -> Optional[DateRange]:
    """
    Build the day filter from CLI values.

    Raises:
        ValueError: if only one bound is given or a bound is not a date
    """
    if not start and not end:
        return None
    if not start or not end:
        raise ValueError("--start and --end must be given together")

    start_day = parse_iso_date(start)
    end_day = parse_iso_date(end)
    if start_day is None or end_day is None:
        raise ValueError(f"Invalid date range: {start} .. {end} (expected YYYY-MM-DD)")
    return DateRange(start_day, end_day)


def pretty_print_summary(response: SummaryResponse) -> None:
    """Print a readable table of the summary."""
    if response.error:
        print(f"Error: {response.error}")
        return

    if not response.summaries:
        print("No activities found.")
        return

    print("\n" + "=" * 60)
    print("ACTIVITY SUMMARY")
    if response.date_range:
        print(f"{response.date_range.start.isoformat()} .. {response.date_range.end.isoformat()}")
    print("=" * 60)

    name_width = max(len(s.name) for s in response.summaries)
    name_width = min(max(name_width, 8), 40)
    for summary in response.summaries:
        color = summary.color or ""
        print(f"  {summary.name[:name_width]:<{name_width}}  {summary.formatted_duration:>8}  "
              f"x{summary.count:<3} {color}")

    print("-" * 60)
    total = response.total_minutes
    hours, minutes = divmod(total, 60)
    print(f"  Total: {hours}h {minutes:02d}m across {len(response.summaries)} activities")
    print("=" * 60 + "\n")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main execution function.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    args = build_parser().parse_args(argv)
    start_time = time.time()

    try:
        if not Config.validate():
            logger.error("Configuration validation failed")
            return 1

        date_range = parse_date_range(args.start, args.end)
        mode = GroupingMode.from_value(args.group_by)

        document = load_document(args.source, url=args.url)
        service = SummaryService()
        response = service.get_summary_data(document, mode, date_range)

        if args.json:
            print(json.dumps(response.to_dict(), indent=2, ensure_ascii=False))
        else:
            pretty_print_summary(response)

        if args.output and not service.save_summary(response, args.output):
            return 1

        return 0 if response.is_success() else 1

    except ValueError as e:
        logger.error(f"Invalid arguments: {e}")
        return 1

    except FileNotFoundError as e:
        logger.error("Missing required file", exc_info=True)
        logger.error(f"Could not find: {e.filename}")
        return 1

    except requests.exceptions.RequestException as e:
        logger.error("Could not download calendar page", exc_info=True)
        logger.error(str(e))
        return 1

    except KeyboardInterrupt:
        logger.warning("Summary interrupted by user")
        return 1

    finally:
        elapsed = time.time() - start_time
        logger.info(f"Total execution time: {elapsed:.2f} seconds")


if __name__ == "__main__":
    sys.exit(main())
