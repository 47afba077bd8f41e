"""Turn a feed location into a directory of GTFS text files."""

import logging
import shutil
import tempfile
import threading
import zipfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from urllib.parse import urlsplit

import requests

from gtfs_loader.errors import ErrorKind, SourceError

logger = logging.getLogger(__name__)

REMOTE_SCHEMES = ("http", "https")
ARCHIVE_NAME = "feed.zip"
CHUNK_SIZE = 1024 * 1024

# Serializes filesystem work so a directory is complete before it is handed out
_fs_lock = threading.Lock()


def is_remote(location: str) -> bool:
    return urlsplit(location).scheme.lower() in REMOTE_SCHEMES


@contextmanager
def open_feed_directory(location: str | Path, timeout: float = 60.0) -> Iterator[Path]:
    """
    Yield a directory containing the feed's text files.

    location may be a directory, a local .zip archive or an http(s) URL to a
    .zip archive. Archives are unpacked into a temporary directory that is
    removed when the context exits.
    """
    location = str(location)

    if is_remote(location):
        if not urlsplit(location).path.lower().endswith(".zip"):
            raise SourceError(
                ErrorKind.INVALID_URL, f"remote feeds must be .zip archives: {location}"
            )
        with _temporary_directory() as tmp:
            archive = Path(tmp) / ARCHIVE_NAME
            download(location, archive, timeout=timeout)
            yield extract(archive, Path(tmp) / "feed")
        return

    if "://" in location:
        raise SourceError(ErrorKind.INVALID_URL, f"unsupported feed location: {location}")

    path = Path(location)
    if path.is_dir():
        yield path
        return
    if not path.exists():
        raise SourceError(ErrorKind.FILE_NOT_FOUND, str(path))
    if path.suffix.lower() != ".zip":
        raise SourceError(ErrorKind.INVALID_URL, f"expected a directory or a .zip archive: {path}")

    with _temporary_directory() as tmp:
        yield extract(path, Path(tmp) / "feed")


def _temporary_directory() -> tempfile.TemporaryDirectory:
    with _fs_lock:
        return tempfile.TemporaryDirectory(prefix="gtfs_")


def download(url: str, destination: Path, timeout: float = 60.0) -> Path:
    """Download url to destination."""
    logger.info(f"Downloading feed from {url}")
    try:
        response = requests.get(url, stream=True, timeout=timeout)
    except requests.RequestException as e:
        raise SourceError(ErrorKind.DOWNLOAD_FAILED, str(e)) from e

    with response:
        if response.status_code != 200:
            raise SourceError(ErrorKind.DOWNLOAD_FAILED, f"HTTP {response.status_code} for {url}")
        try:
            with _fs_lock, open(destination, "wb") as f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    f.write(chunk)
        except requests.RequestException as e:
            raise SourceError(ErrorKind.DOWNLOAD_FAILED, str(e)) from e

    logger.info(f"Downloaded {destination.stat().st_size} bytes to {destination}")
    return destination


def extract(archive: Path, destination: Path) -> Path:
    """
    Extract archive into destination and return the directory holding the feed.

    Archives that wrap every file in one top-level folder are unwrapped.
    """
    logger.info(f"Extracting {archive} to {destination}")
    try:
        with _fs_lock, zipfile.ZipFile(archive) as zf:
            zf.extractall(destination)
    except (zipfile.BadZipFile, OSError) as e:
        shutil.rmtree(destination, ignore_errors=True)
        raise SourceError(ErrorKind.EXTRACTION_FAILED, f"{archive}: {e}") from e

    entries = [p for p in destination.iterdir() if not p.name.startswith(("__MACOSX", "."))]
    if len(entries) == 1 and entries[0].is_dir():
        logger.debug(f"Unwrapping single folder {entries[0].name}")
        return entries[0]
    return destination
