"""gtfs-loader - Decode GTFS feeds into typed, validated records."""

from gtfs_loader.api import load_feed, validate_feed
from gtfs_loader.errors import ErrorKind, GTFSError
from gtfs_loader.gtfs.models import FailurePolicy, Feed, LoadConfig
from gtfs_loader.version import VERSION

__version__ = VERSION
__all__ = [
    "VERSION",
    "ErrorKind",
    "FailurePolicy",
    "Feed",
    "GTFSError",
    "LoadConfig",
    "load_feed",
    "validate_feed",
]
