"""
Hotel Review Service

CLI entry point for browsing reviews and review statistics.
"""

import argparse
import asyncio
import json
import logging
import sys

from src.analytics.review_stats import HotelRatingReport, ReviewStatsAggregator
from src.registry.exceptions import ReviewServiceError
from src.registry.review_store import ReviewStore
from src.services.review_service import ReviewService
from src.utils.storage import StorageManager
import config.settings as settings


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Hotel Review Service - browse reviews and rating statistics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Reviews for hotel 5
  python main.py list --hotel 5

  # Rating breakdown and category averages for hotel 5
  python main.py stats 5

  # CSV rating table for every hotel
  python main.py report --output-dir output
        """
    )

    parser.add_argument(
        "--seed-path",
        default=str(settings.SEED_REVIEWS_PATH),
        help=f"Mock review dataset (default: {settings.SEED_REVIEWS_PATH})"
    )

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List reviews")
    list_filter = list_parser.add_mutually_exclusive_group()
    list_filter.add_argument("--hotel", help="Only reviews of this hotel")
    list_filter.add_argument("--user", help="Only reviews by this user")

    show_parser = subparsers.add_parser("show", help="Show one review")
    show_parser.add_argument("review_id", help="Review id")

    stats_parser = subparsers.add_parser("stats", help="Review statistics for a hotel")
    stats_parser.add_argument("hotel_id", help="Hotel id")

    report_parser = subparsers.add_parser("report", help="Write rating table for all hotels")
    report_parser.add_argument(
        "--output-dir",
        default=str(settings.OUTPUT_ROOT),
        help=f"Output directory (default: {settings.OUTPUT_ROOT})"
    )
    report_parser.add_argument("--date", help="Date stamp for file names (YYYY-MM-DD)")

    snapshot_parser = subparsers.add_parser("snapshot", help="Dump the review collection as JSON")
    snapshot_parser.add_argument(
        "--output-dir",
        default=str(settings.OUTPUT_ROOT),
        help=f"Output directory (default: {settings.OUTPUT_ROOT})"
    )

    return parser


def run_command(args, store: ReviewStore) -> None:
    """Execute one CLI subcommand against the store."""
    service = ReviewService(store)

    if args.command == "list":
        if args.hotel:
            reviews = asyncio.run(service.get_hotel_reviews(args.hotel))
        elif args.user:
            reviews = asyncio.run(service.get_user_reviews(args.user))
        else:
            reviews = asyncio.run(service.get_all_reviews())
        print(json.dumps([r.to_dict() for r in reviews], indent=2))

    elif args.command == "show":
        review = asyncio.run(service.get_review_by_id(args.review_id))
        print(json.dumps(review.to_dict(), indent=2))

    elif args.command == "stats":
        stats = asyncio.run(service.get_review_stats(args.hotel_id))
        print(json.dumps(stats.to_dict(), indent=2))

    elif args.command == "report":
        report = HotelRatingReport(
            aggregator=ReviewStatsAggregator(store),
            storage=StorageManager(args.output_dir)
        )
        output_path = report.generate_report(args.date)
        print(f"Rating report: {output_path}")

    elif args.command == "snapshot":
        storage = StorageManager(args.output_dir)
        output_path = storage.save_snapshot([r.to_dict() for r in store.list()])
        print(f"Snapshot: {output_path}")


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    try:
        store = ReviewStore.from_seed(args.seed_path)
        run_command(args, store)
        sys.exit(0)

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        sys.exit(1)

    except ReviewServiceError as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    except Exception as e:
        logger.error(f"{args.command} failed: {e}", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        print(f"Check {settings.LOG_FILE} for details", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
