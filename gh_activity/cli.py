"""Command line entry point for fetching and exporting GitHub activity."""

import argparse
import asyncio
import logging
import sys
from datetime import date
from pathlib import Path

from gh_activity.cache.storage.filesystem import FileSystemStorage
from gh_activity.cache.store import CacheStore, events_key, user_key
from gh_activity.client.api import GitHubClient
from gh_activity.client.retry import RetryPolicy
from gh_activity.config import Settings, get_settings
from gh_activity.display import display_activities, display_user
from gh_activity.errors.exceptions import ActivityError, NetworkError, UnknownIdentity
from gh_activity.errors.logger import get_logger
from gh_activity.export.exporter import ActivityExporter
from gh_activity.pipeline import PipelineOptions, process
from gh_activity.preferences import DEFAULT_PATH, Preferences, load_preferences, save_preferences
from gh_activity.service import ActivityService

DEFAULT_LIMIT = 30


def non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value}")
    return number


def describe_failure(error: Exception, identity: str) -> str:
    """Turn a fetch failure into the one line shown to the user."""
    if isinstance(error, UnknownIdentity):
        return f'Error: The username "{identity}" does not exist on GitHub.'
    if isinstance(error, NetworkError):
        return "Error: Unable to connect to GitHub. Please check your internet connection."
    return f"Error: {error}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gh-activity", description="Show and export a GitHub user's recent public activity"
    )
    parser.add_argument("username", nargs="?", help="GitHub username")
    parser.add_argument(
        "--limit",
        type=non_negative_int,
        help=f"Number of events to show (default {DEFAULT_LIMIT})",
    )
    parser.add_argument(
        "--type", dest="filter_type", help="Only show events of this type, e.g. PushEvent"
    )
    parser.add_argument("--sort", choices=["date", "type"], help="Sort events by date or type")
    parser.add_argument(
        "--from", dest="from_date", type=date.fromisoformat, help="Start date (YYYY-MM-DD)"
    )
    parser.add_argument(
        "--to", dest="to_date", type=date.fromisoformat, help="End date (YYYY-MM-DD)"
    )
    parser.add_argument("--export", dest="export_format", help="Export format: json, csv or md")
    parser.add_argument("--output-dir", type=Path, help="Directory for exported files")
    parser.add_argument("--page-size", type=non_negative_int, help="Events requested per API page")
    parser.add_argument("--no-profile", action="store_true", help="Skip the user profile block")
    parser.add_argument(
        "--no-cache", action="store_true", help="Ignore cached results for this user"
    )
    parser.add_argument("--clear-cache", action="store_true", help="Delete the whole cache first")
    parser.add_argument(
        "--save", action="store_true", help="Remember these options in .ghactivityrc"
    )
    parser.add_argument("--config", type=Path, default=DEFAULT_PATH, help="Preferences file")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def merge_preferences(args: argparse.Namespace, preferences: Preferences) -> argparse.Namespace:
    """Fill options not given on the command line from saved preferences."""
    args.username = args.username or preferences.username
    args.limit = args.limit if args.limit is not None else (preferences.limit or DEFAULT_LIMIT)
    args.export_format = args.export_format or preferences.export_format
    args.from_date = args.from_date or preferences.from_date
    args.to_date = args.to_date or preferences.to_date
    return args


def build_service(settings: Settings) -> ActivityService:
    retry_policy = RetryPolicy(
        max_attempts=settings.retry.max_attempts, delay_ms=settings.retry.delay_ms
    )
    client = GitHubClient(settings.api, retry_policy)
    cache = CacheStore(FileSystemStorage(settings.cache.path), ttl=settings.cache.ttl)
    return ActivityService(client, cache)


async def run_activity(
    args: argparse.Namespace,
    settings: Settings,
    service: ActivityService | None = None,
) -> int:
    """Fetch, display and optionally export activity. Failures are reported, not raised."""
    service = service or build_service(settings)
    identity = args.username

    try:
        if args.clear_cache:
            await service.cache.clear()
        elif args.no_cache:
            await service.cache.invalidate(user_key(identity))
            await service.cache.invalidate(events_key(identity))

        print(f'Fetching data for "{identity}"...')
        if not args.no_profile:
            display_user(await service.get_user(identity))

        events = await service.get_events(identity, args.page_size)
    except ActivityError as e:
        print(describe_failure(e, identity), file=sys.stderr)
        structured = get_logger()
        structured.log_error(structured.create_error_from_exception(e, identity=identity))
        return 0
    finally:
        await service.client.close()

    options = PipelineOptions(
        filter_type=args.filter_type,
        sort_key=args.sort,
        limit=args.limit,
        from_date=args.from_date,
        to_date=args.to_date,
    )
    processed = process(events, options)
    display_activities(processed, identity)

    if args.export_format:
        exporter = ActivityExporter(args.output_dir or settings.export.output_dir)
        try:
            path = exporter.export(processed, args.export_format)
            print(f"Activities exported to {path}")
        except (ActivityError, OSError) as e:
            print(f"Export failed: {e}", file=sys.stderr)
            structured = get_logger()
            structured.log_error(structured.create_error_from_exception(e, identity=identity))

    return 0


def main(argv: list[str] | None = None) -> int:
    """Parse arguments and run. Returns the process exit code."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    args = merge_preferences(args, load_preferences(args.config))
    if not args.username:
        print("Error: Please provide a GitHub username.", file=sys.stderr)
        return 1

    if args.save:
        save_preferences(
            Preferences(
                username=args.username,
                limit=args.limit,
                export_format=args.export_format,
                from_date=args.from_date,
                to_date=args.to_date,
            ),
            args.config,
        )

    return asyncio.run(run_activity(args, get_settings()))


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
