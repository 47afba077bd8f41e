"""Pytest configuration and fixtures."""

import shutil
import zipfile
from pathlib import Path

import pytest


@pytest.fixture
def gtfs_minimal() -> Path:
    """Path to minimal GTFS fixture with all six tables."""
    return Path(__file__).parent / "fixtures" / "gtfs_minimal"


@pytest.fixture
def gtfs_edgecases() -> Path:
    """Path to edge cases GTFS fixture with broken cross-table references."""
    return Path(__file__).parent / "fixtures" / "gtfs_edgecases"


@pytest.fixture
def gtfs_new_york() -> Path:
    """Path to fixture with only agency.txt and stop_times.txt."""
    return Path(__file__).parent / "fixtures" / "gtfs_new_york"


@pytest.fixture
def gtfs_broken() -> Path:
    """Path to fixture whose stop_times.txt has an unparseable time."""
    return Path(__file__).parent / "fixtures" / "gtfs_broken"


@pytest.fixture
def feed_dir(tmp_path: Path) -> Path:
    """Empty feed directory for tests that write their own tables."""
    directory = tmp_path / "feed"
    directory.mkdir()
    yield directory
    # Cleanup
    if directory.exists():
        shutil.rmtree(directory)


@pytest.fixture
def gtfs_minimal_zip(gtfs_minimal: Path, tmp_path: Path) -> Path:
    """gtfs_minimal packed into a zip archive."""
    archive = tmp_path / "gtfs_minimal.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        for path in sorted(gtfs_minimal.iterdir()):
            zf.write(path, arcname=path.name)
    return archive
