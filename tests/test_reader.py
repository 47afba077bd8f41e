"""Tests for GTFS reader."""

from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from gtfs_loader.errors import ErrorKind, SourceError
from gtfs_loader.gtfs.fields import StopField
from gtfs_loader.gtfs.reader import GTFSReader


def test_reader_basic(gtfs_minimal: Path) -> None:
    """Test basic GTFS reading."""
    reader = GTFSReader(gtfs_minimal)

    assert len(reader.read_agencies()) == 1
    assert len(reader.read_stops()) == 3
    assert len(reader.read_routes()) == 1
    assert len(reader.read_trips()) == 2
    assert len(reader.read_stop_times(ZoneInfo("UTC"))) == 6
    assert len(reader.read_calendar_dates()) == 2


def test_reader_crlf_file(gtfs_minimal: Path) -> None:
    """stops.txt in the fixture uses \\r\\n line endings."""
    stops = GTFSReader(gtfs_minimal).read_stops()

    assert stops.header == [
        StopField.STOP_ID,
        StopField.STOP_NAME,
        StopField.STOP_LAT,
        StopField.STOP_LON,
    ]
    assert [stop.stop_id for stop in stops] == ["A", "B", "C"]
    assert stops[2].stop_lon == pytest.approx(2.3499)


def test_reader_stop_times_over_24h(gtfs_minimal: Path) -> None:
    stop_times = GTFSReader(gtfs_minimal).read_stop_times(ZoneInfo("Europe/Paris"))

    late = stop_times[3]
    assert late.trip_id == "T2"
    assert late.arrival_time.day == 2
    assert late.arrival_time.hour == 1


def test_reader_missing_optional_file(gtfs_new_york: Path) -> None:
    assert GTFSReader(gtfs_new_york).read_calendar_dates() is None


def test_reader_missing_required_file(gtfs_new_york: Path) -> None:
    reader = GTFSReader(gtfs_new_york, required_files=frozenset({"calendar_dates.txt"}))
    with pytest.raises(SourceError) as exc_info:
        reader.read_calendar_dates()
    assert exc_info.value.kind is ErrorKind.FILE_NOT_FOUND


def test_reader_missing_directory() -> None:
    """Test reader with a directory that does not exist."""
    with pytest.raises(SourceError):
        GTFSReader("/nonexistent/path")
