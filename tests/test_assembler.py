"""Tests for feed assembly."""

import dataclasses
import datetime as dt
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from gtfs_loader.errors import BindingError, ErrorKind, GTFSError, SourceError
from gtfs_loader.gtfs.assembler import FeedAssembler, resolve_timezone
from gtfs_loader.gtfs.models import Agencies, Agency, FailurePolicy, LoadConfig
from gtfs_loader.gtfs.reader import GTFSReader


def test_assemble_minimal(gtfs_minimal: Path) -> None:
    feed = FeedAssembler(gtfs_minimal).assemble()

    assert feed.stats == {
        "agencies": 1,
        "routes": 1,
        "stops": 3,
        "trips": 2,
        "stop_times": 6,
        "calendar_dates": 2,
    }
    assert feed.agency.agency_name == "Transit Agency, Inc."
    assert feed.routes[0].route_long_name == 'Line "One"'
    assert feed.errors == {}


def test_assembled_feed_is_frozen(gtfs_minimal: Path) -> None:
    feed = FeedAssembler(gtfs_minimal).assemble()
    with pytest.raises(dataclasses.FrozenInstanceError):
        feed.routes = None


def test_assemble_preserves_file_order(gtfs_minimal: Path) -> None:
    feed = FeedAssembler(gtfs_minimal).assemble()
    assert [(st.trip_id, st.stop_sequence) for st in feed.stop_times] == [
        ("T1", 1),
        ("T1", 2),
        ("T1", 3),
        ("T2", 1),
        ("T2", 2),
        ("T2", 3),
    ]


def test_stop_times_use_agency_timezone(gtfs_new_york: Path) -> None:
    feed = FeedAssembler(gtfs_new_york).assemble()
    new_york = ZoneInfo("America/New_York")

    assert feed.routes is None
    assert feed.stops is None
    first = feed.stop_times[0]
    assert first.timezone == new_york
    assert first.arrival_time == dt.datetime(2000, 1, 1, 8, 15, tzinfo=new_york)
    assert first.arrival_time.astimezone(dt.UTC).hour == 13
    assert feed.stop_times[1].departure_time is None


def test_stop_times_default_timezone_without_agency(gtfs_new_york: Path, feed_dir: Path) -> None:
    (feed_dir / "stop_times.txt").write_text(
        (gtfs_new_york / "stop_times.txt").read_text(encoding="utf-8"), encoding="utf-8"
    )

    feed = FeedAssembler(feed_dir).assemble()
    assert feed.agency is None
    assert feed.stop_times[0].arrival_time.tzinfo == ZoneInfo("UTC")

    feed = FeedAssembler(feed_dir, LoadConfig(default_timezone="Asia/Tokyo")).assemble()
    assert feed.stop_times[0].arrival_time.utcoffset() == dt.timedelta(hours=9)


def test_invalid_default_timezone(feed_dir: Path) -> None:
    with pytest.raises(BindingError):
        FeedAssembler(feed_dir, LoadConfig(default_timezone="Nowhere/Special")).assemble()


def test_broken_stop_times_abort_feed(gtfs_broken: Path) -> None:
    """One bad stop time row means no feed at all."""
    with pytest.raises(GTFSError) as exc_info:
        FeedAssembler(gtfs_broken).assemble()

    error = exc_info.value
    assert error.kind is ErrorKind.INVALID_FIELD_TYPE
    assert error.table == "stop_times.txt"
    assert error.line == 3
    assert error.column == "arrival_time"


def test_broken_stop_times_abort_feed_in_parallel(gtfs_broken: Path) -> None:
    with pytest.raises(GTFSError):
        FeedAssembler(gtfs_broken, LoadConfig(jobs=4)).assemble()


def test_collect_policy_keeps_other_tables(gtfs_broken: Path) -> None:
    config = LoadConfig(failure_policy=FailurePolicy.COLLECT)
    feed = FeedAssembler(gtfs_broken, config).assemble()

    assert feed.stop_times is None
    assert len(feed.routes) == 1
    assert feed.agency.agency_name == "Broken Transit"
    assert list(feed.errors) == ["stop_times.txt"]
    assert feed.errors["stop_times.txt"].kind is ErrorKind.INVALID_FIELD_TYPE


def test_collect_policy_agency_failure_uses_default_timezone(
    gtfs_new_york: Path, feed_dir: Path
) -> None:
    (feed_dir / "agency.txt").write_text(
        "agency_name,agency_url,agency_timezone\nBad Agency,not a url,America/New_York\n",
        encoding="utf-8",
    )
    (feed_dir / "stop_times.txt").write_text(
        (gtfs_new_york / "stop_times.txt").read_text(encoding="utf-8"), encoding="utf-8"
    )
    config = LoadConfig(default_timezone="Asia/Tokyo", failure_policy=FailurePolicy.COLLECT)

    feed = FeedAssembler(feed_dir, config).assemble()

    assert feed.agencies is None
    assert list(feed.errors) == ["agency.txt"]
    assert feed.errors["agency.txt"].kind is ErrorKind.INVALID_FIELD_TYPE
    assert feed.errors["agency.txt"].column == "agency_url"
    assert feed.stop_times[0].arrival_time.utcoffset() == dt.timedelta(hours=9)


def test_parallel_matches_sequential(gtfs_minimal: Path) -> None:
    sequential = FeedAssembler(gtfs_minimal).assemble()
    parallel = FeedAssembler(gtfs_minimal, LoadConfig(jobs=4)).assemble()

    assert parallel.stats == sequential.stats
    assert list(parallel.stop_times) == list(sequential.stop_times)
    assert list(parallel.stops) == list(sequential.stops)


def test_required_file_missing(gtfs_new_york: Path) -> None:
    config = LoadConfig(required_files=frozenset({"routes.txt"}))
    with pytest.raises(SourceError) as exc_info:
        FeedAssembler(gtfs_new_york, config).assemble()
    assert exc_info.value.kind is ErrorKind.FILE_NOT_FOUND
    assert exc_info.value.table == "routes.txt"


def test_empty_file_is_not_an_error(feed_dir: Path) -> None:
    (feed_dir / "routes.txt").write_text("", encoding="utf-8")
    feed = FeedAssembler(feed_dir, LoadConfig(required_files=frozenset({"routes.txt"}))).assemble()
    assert feed.routes is not None
    assert len(feed.routes) == 0


def test_reader_rejects_missing_directory() -> None:
    with pytest.raises(SourceError) as exc_info:
        GTFSReader("/nonexistent/path")
    assert exc_info.value.kind is ErrorKind.FILE_NOT_FOUND


def test_resolve_timezone() -> None:
    agencies = Agencies()
    assert resolve_timezone(None, "UTC") == ZoneInfo("UTC")
    assert resolve_timezone(agencies, "Europe/Rome") == ZoneInfo("Europe/Rome")

    agencies.add(Agency(agency_name="A", agency_timezone=ZoneInfo("America/Chicago")))
    agencies.add(Agency(agency_name="B", agency_timezone=ZoneInfo("America/Denver")))
    assert resolve_timezone(agencies, "UTC") == ZoneInfo("America/Chicago")
