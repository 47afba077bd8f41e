"""Tests for GTFS validator."""

from pathlib import Path

from gtfs_loader.gtfs.assembler import FeedAssembler
from gtfs_loader.gtfs.validator import GTFSValidator


def test_validator_valid_data(gtfs_minimal: Path) -> None:
    """Test validator passes on valid data."""
    feed = FeedAssembler(gtfs_minimal).assemble()

    validator = GTFSValidator(feed)
    report = validator.validate()

    assert report.valid
    assert len(report.errors) == 0
    assert report.stats["stops"] == 3
    assert report.stats["routes"] == 1


def test_validator_invalid_coordinates(gtfs_edgecases: Path) -> None:
    """Test validator catches invalid coordinates."""
    feed = FeedAssembler(gtfs_edgecases).assemble()

    report = GTFSValidator(feed).validate()

    assert not report.valid
    assert any("latitude" in err.lower() for err in report.errors)
    assert any("longitude" in err.lower() for err in report.errors)


def test_validator_orphan_trip(gtfs_edgecases: Path) -> None:
    """Test validator catches trips referencing nonexistent routes."""
    feed = FeedAssembler(gtfs_edgecases).assemble()

    report = GTFSValidator(feed).validate()

    assert any("non-existent route R404" in err for err in report.errors)


def test_validator_stop_time_references(gtfs_edgecases: Path) -> None:
    """Test validator catches stop times pointing at unknown trips and stops."""
    feed = FeedAssembler(gtfs_edgecases).assemble()

    report = GTFSValidator(feed).validate()

    assert any("non-existent trip T3" in err for err in report.errors)
    assert any("non-existent stop Z" in err for err in report.errors)


def test_validator_warnings(gtfs_edgecases: Path) -> None:
    """Test validator generates warnings for edge cases."""
    feed = FeedAssembler(gtfs_edgecases).assemble()

    report = GTFSValidator(feed).validate()

    assert any("empty name" in warning for warning in report.warnings)
    assert any("non-increasing times" in warning for warning in report.warnings)


def test_validator_skips_checks_for_missing_tables(gtfs_new_york: Path) -> None:
    """Without trips.txt and stops.txt, references cannot be checked."""
    feed = FeedAssembler(gtfs_new_york).assemble()

    report = GTFSValidator(feed).validate()

    assert report.valid
