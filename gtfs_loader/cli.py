"""Command-line interface for gtfs-loader."""

import argparse
import logging
import sys

from gtfs_loader.api import load_feed, validate_feed
from gtfs_loader.errors import GTFSError
from gtfs_loader.gtfs.models import FailurePolicy, LoadConfig
from gtfs_loader.version import VERSION


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def build_config(args: argparse.Namespace, keep_going: bool) -> LoadConfig:
    return LoadConfig(
        default_timezone=args.default_timezone,
        jobs=args.jobs,
        required_files=frozenset(args.require or []),
        failure_policy=FailurePolicy.COLLECT if keep_going else FailurePolicy.ALL_OR_NOTHING,
        download_timeout=args.timeout,
    )


def cmd_load(args: argparse.Namespace) -> int:
    """Execute load command."""
    setup_logging(args.verbose)

    try:
        feed = load_feed(args.input, build_config(args, args.keep_going))
    except GTFSError as e:
        print(f"Error: {e}", file=sys.stderr)
        logging.exception("Load failed")
        return 1

    print("\nLoad successful!" if not feed.errors else "\nLoad finished with errors")
    if feed.agency is not None:
        print(f"Agency: {feed.agency.agency_name} ({feed.agency.agency_timezone.key})")
    print(f"Stats: {feed.stats}")
    for name, error in feed.errors.items():
        print(f"  - {name}: {error}")
    return 0 if not feed.errors else 1


def cmd_validate(args: argparse.Namespace) -> int:
    """Execute validate command."""
    setup_logging(args.verbose)

    try:
        feed = load_feed(args.input, build_config(args, keep_going=True))
    except GTFSError as e:
        print(f"Error: {e}", file=sys.stderr)
        logging.exception("Validation failed")
        return 1

    report = validate_feed(feed)
    if report.valid:
        print("\nValidation successful!")
        print(f"Stats: {report.stats}")
        if report.warnings:
            print(f"Warnings ({len(report.warnings)}):")
            for warning in report.warnings:
                print(f"  - {warning}")
        return 0
    else:
        print(f"\nValidation failed with {len(report.errors)} errors:")
        for error in report.errors:
            print(f"  - {error}")
        return 1


def add_feed_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--input", required=True, help="GTFS directory, .zip archive or http(s) URL of a .zip"
    )
    parser.add_argument(
        "--default-timezone",
        default="UTC",
        help="Time zone for stop times when agency.txt has no rows (default: UTC)",
    )
    parser.add_argument(
        "--jobs",
        type=int,
        default=1,
        help="Number of parallel table decoders (default: 1)",
    )
    parser.add_argument(
        "--require",
        action="append",
        metavar="FILE",
        help="File that must be present, e.g. stop_times.txt (repeatable)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=60.0,
        help="Download timeout in seconds (default: 60)",
    )


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="gtfs-loader",
        description="Decode GTFS feeds into typed records",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Load command
    load_parser = subparsers.add_parser("load", help="Load a feed and print table counts")
    add_feed_arguments(load_parser)
    load_parser.add_argument(
        "--keep-going",
        type=lambda x: x.lower() == "true",
        default=False,
        help="Skip tables that fail to decode instead of aborting (default: false)",
    )
    load_parser.set_defaults(func=cmd_load)

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Load a feed and check references")
    add_feed_arguments(validate_parser)
    validate_parser.set_defaults(func=cmd_validate)

    # Parse and execute
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
