"""Public API for gtfs-loader."""

import logging
from datetime import UTC, datetime
from pathlib import Path

from gtfs_loader.gtfs.assembler import FeedAssembler
from gtfs_loader.gtfs.models import Feed, LoadConfig, ValidationReport
from gtfs_loader.gtfs.validator import GTFSValidator
from gtfs_loader.source import open_feed_directory

logger = logging.getLogger(__name__)


def load_feed(location: str | Path, config: LoadConfig | None = None) -> Feed:
    """
    Load a GTFS feed.

    Args:
        location: Feed directory, local .zip archive or http(s) URL of a .zip
        config: Optional load configuration

    Returns:
        Feed with one table per file found

    Raises:
        GTFSError: the first decoding or retrieval failure, unless
            config.failure_policy is FailurePolicy.COLLECT
    """
    if config is None:
        config = LoadConfig()

    logger.info(f"Loading feed: {location}")
    start_time = datetime.now(UTC)

    with open_feed_directory(location, timeout=config.download_timeout) as directory:
        feed = FeedAssembler(directory, config).assemble()

    elapsed = (datetime.now(UTC) - start_time).total_seconds()
    logger.info(f"Feed loaded in {elapsed:.2f}s")
    return feed


def validate_feed(feed: Feed) -> ValidationReport:
    """
    Check cross-table references of a loaded feed.

    Args:
        feed: Feed returned by load_feed

    Returns:
        ValidationReport with results
    """
    return GTFSValidator(feed).validate()
