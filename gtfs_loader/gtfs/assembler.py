"""Assemble a Feed from the tables of a GTFS directory."""

import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo

from gtfs_loader.errors import GTFSError
from gtfs_loader.gtfs.models import Agencies, FailurePolicy, Feed, LoadConfig
from gtfs_loader.gtfs.reader import GTFSReader
from gtfs_loader.parsing.binders import required_timezone

logger = logging.getLogger(__name__)


def resolve_timezone(agencies: Agencies | None, default_timezone: str) -> ZoneInfo:
    """Time zone of the first agency, or default_timezone when there is none."""
    if agencies is not None and agencies.first is not None:
        return agencies.first.agency_timezone
    return required_timezone(default_timezone)


class FeedAssembler:
    """
    Decode every table of a feed directory in dependency order.

    agency.txt is decoded first because stop_times.txt needs its time zone.
    The remaining tables are independent and run on a thread pool when
    config.jobs > 1.
    """

    def __init__(self, gtfs_path: str | Path, config: LoadConfig | None = None) -> None:
        self.config = config or LoadConfig()
        self.reader = GTFSReader(gtfs_path, required_files=self.config.required_files)
        self.errors: dict[str, GTFSError] = {}

    def assemble(self) -> Feed:
        """Decode all tables and return the feed."""
        logger.info(f"Reading GTFS data from {self.reader.gtfs_path}")
        self.errors = {}

        agencies = self._decode("agency.txt", self.reader.read_agencies)
        timezone = resolve_timezone(agencies, self.config.default_timezone)
        logger.info(f"Using time zone {timezone.key} for stop times")

        tasks: dict[str, Callable[[], Any]] = {
            "routes.txt": self.reader.read_routes,
            "stops.txt": self.reader.read_stops,
            "trips.txt": self.reader.read_trips,
            "stop_times.txt": lambda: self.reader.read_stop_times(timezone),
            "calendar_dates.txt": self.reader.read_calendar_dates,
        }
        tables = self._run(tasks)

        feed = Feed(
            agencies=agencies,
            routes=tables["routes.txt"],
            stops=tables["stops.txt"],
            trips=tables["trips.txt"],
            stop_times=tables["stop_times.txt"],
            calendar_dates=tables["calendar_dates.txt"],
            errors=dict(self.errors),
        )
        logger.info(f"Loaded feed: {feed.stats}")
        return feed

    def _run(self, tasks: dict[str, Callable[[], Any]]) -> dict[str, Any]:
        if self.config.jobs <= 1:
            return {name: self._decode(name, read) for name, read in tasks.items()}

        with ThreadPoolExecutor(max_workers=self.config.jobs) as executor:
            futures = {name: executor.submit(read) for name, read in tasks.items()}
            # Results are collected in task order so the reported failure is deterministic
            return {name: self._decode(name, future.result) for name, future in futures.items()}

    def _decode(self, name: str, read: Callable[[], Any]) -> Any:
        """Run one table read, applying the configured failure policy."""
        try:
            return read()
        except GTFSError as e:
            if self.config.failure_policy is FailurePolicy.ALL_OR_NOTHING:
                logger.error(f"Failed to load {name}: {e}")
                raise
            logger.warning(f"Failed to load {name}, continuing without it: {e}")
            self.errors[name] = e
            return None
