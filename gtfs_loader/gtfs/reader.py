"""Read GTFS tables from a feed directory."""

import logging
from pathlib import Path
from zoneinfo import ZoneInfo

from gtfs_loader.errors import ErrorKind, SourceError
from gtfs_loader.gtfs.models import (
    Agencies,
    CalendarDates,
    FieldT,
    RecordT,
    Routes,
    Stops,
    StopTimes,
    Table,
    Trips,
)
from gtfs_loader.gtfs.tables import (
    AGENCY_SCHEMA,
    CALENDAR_DATE_SCHEMA,
    ROUTE_SCHEMA,
    STOP_SCHEMA,
    TRIP_SCHEMA,
    TableSchema,
    read_table,
    stop_time_schema,
)

logger = logging.getLogger(__name__)


class GTFSReader:
    """Decode individual GTFS files found in one directory."""

    def __init__(self, gtfs_path: str | Path, required_files: frozenset[str] = frozenset()) -> None:
        """Initialize reader with GTFS directory path."""
        self.gtfs_path = Path(gtfs_path)
        if not self.gtfs_path.is_dir():
            raise SourceError(
                ErrorKind.FILE_NOT_FOUND, f"GTFS path not found or not a directory: {gtfs_path}"
            )
        self.required_files = required_files

    def read_agencies(self) -> Agencies | None:
        """Read agency.txt."""
        return self._read(AGENCY_SCHEMA)

    def read_routes(self) -> Routes | None:
        """Read routes.txt."""
        return self._read(ROUTE_SCHEMA)

    def read_stops(self) -> Stops | None:
        """Read stops.txt."""
        return self._read(STOP_SCHEMA)

    def read_trips(self) -> Trips | None:
        """Read trips.txt."""
        return self._read(TRIP_SCHEMA)

    def read_stop_times(self, timezone: ZoneInfo) -> StopTimes | None:
        """Read stop_times.txt, anchoring arrival and departure times in timezone."""
        return self._read(stop_time_schema(timezone))

    def read_calendar_dates(self) -> CalendarDates | None:
        """Read calendar_dates.txt."""
        return self._read(CALENDAR_DATE_SCHEMA)

    def _read(self, schema: TableSchema[FieldT, RecordT]) -> Table[FieldT, RecordT] | None:
        file_path = self.gtfs_path / schema.file_name
        if not file_path.exists():
            if schema.file_name in self.required_files:
                raise SourceError(
                    ErrorKind.FILE_NOT_FOUND, f"Required file not found: {file_path}"
                ).with_context(table=schema.file_name)
            logger.info(f"{schema.file_name} not found, skipping")
            return None

        table = read_table(file_path, schema)
        logger.info(f"Loaded {len(table)} records from {schema.file_name}")
        return table
