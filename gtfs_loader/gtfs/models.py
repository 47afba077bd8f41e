"""Data models for GTFS records, tables and feeds."""

import datetime as dt
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Generic, TypeVar
from uuid import UUID, uuid4
from zoneinfo import ZoneInfo

from gtfs_loader.errors import GTFSError
from gtfs_loader.gtfs.fields import (
    AgencyField,
    CalendarDateField,
    RouteField,
    StopField,
    StopTimeField,
    TripField,
)

UTC_ZONE = ZoneInfo("UTC")


class RouteType(IntEnum):
    """Basic GTFS route types."""

    TRAM = 0
    SUBWAY = 1
    RAIL = 2
    BUS = 3
    FERRY = 4
    CABLE_TRAM = 5
    AERIAL_LIFT = 6
    FUNICULAR = 7
    TROLLEYBUS = 11
    MONORAIL = 12


class LocationType(IntEnum):
    STOP = 0
    STATION = 1
    ENTRANCE_EXIT = 2
    GENERIC_NODE = 3
    BOARDING_AREA = 4


class Accessibility(IntEnum):
    """Shared by wheelchair_boarding, wheelchair_accessible and bikes_allowed."""

    UNKNOWN = 0
    ALLOWED = 1
    NOT_ALLOWED = 2


class PickupDropOffPolicy(IntEnum):
    REGULAR = 0
    NOT_AVAILABLE = 1
    PHONE_AGENCY = 2
    COORDINATE_WITH_DRIVER = 3


class Timepoint(IntEnum):
    APPROXIMATE = 0
    EXACT = 1


class DirectionId(IntEnum):
    OUTBOUND = 0
    INBOUND = 1


class ExceptionType(IntEnum):
    """calendar_dates.txt exception types."""

    ADDED = 1
    REMOVED = 2


@dataclass(frozen=True)
class Color:
    """RGB color from a route_color style field."""

    red: int
    green: int
    blue: int

    @property
    def hex(self) -> str:
        return f"{self.red:02X}{self.green:02X}{self.blue:02X}"


@dataclass(frozen=True)
class Locale:
    """Language tag such as "fr" or "en-US"."""

    tag: str
    language: str
    region: str | None = None


@dataclass(frozen=True)
class Agency:
    """GTFS agency."""

    agency_id: str | None = None
    agency_name: str = ""
    agency_url: str = ""
    agency_timezone: ZoneInfo = UTC_ZONE
    agency_lang: Locale | None = None
    agency_phone: str | None = None
    agency_fare_url: str | None = None
    agency_email: str | None = None
    nonstandard: str | None = None
    id: UUID = field(default_factory=uuid4, compare=False, repr=False)


@dataclass(frozen=True)
class Route:
    """GTFS route."""

    route_id: str = ""
    agency_id: str | None = None
    route_short_name: str | None = None
    route_long_name: str | None = None
    route_desc: str | None = None
    route_type: int = 0
    route_url: str | None = None
    route_color: Color | None = None
    route_text_color: Color | None = None
    route_sort_order: int | None = None
    continuous_pickup: PickupDropOffPolicy | None = None
    continuous_drop_off: PickupDropOffPolicy | None = None
    nonstandard: str | None = None
    id: UUID = field(default_factory=uuid4, compare=False, repr=False)

    @property
    def name(self) -> str:
        """route_short_name, falling back to route_long_name."""
        return self.route_short_name or self.route_long_name or ""

    @property
    def basic_route_type(self) -> RouteType | None:
        """route_type as a basic RouteType, None for extended types."""
        try:
            return RouteType(self.route_type)
        except ValueError:
            return None


@dataclass(frozen=True)
class Stop:
    """GTFS stop, station or other location."""

    stop_id: str = ""
    stop_code: str | None = None
    stop_name: str | None = None
    stop_desc: str | None = None
    stop_lat: float | None = None
    stop_lon: float | None = None
    zone_id: str | None = None
    stop_url: str | None = None
    location_type: LocationType | None = None
    parent_station: str | None = None
    stop_timezone: ZoneInfo | None = None
    wheelchair_boarding: Accessibility | None = None
    level_id: str | None = None
    platform_code: str | None = None
    nonstandard: str | None = None
    id: UUID = field(default_factory=uuid4, compare=False, repr=False)


@dataclass(frozen=True)
class Trip:
    """GTFS trip."""

    route_id: str = ""
    service_id: str = ""
    trip_id: str = ""
    trip_headsign: str | None = None
    trip_short_name: str | None = None
    direction_id: DirectionId | None = None
    block_id: str | None = None
    shape_id: str | None = None
    wheelchair_accessible: Accessibility | None = None
    bikes_allowed: Accessibility | None = None
    nonstandard: str | None = None
    id: UUID = field(default_factory=uuid4, compare=False, repr=False)


@dataclass(frozen=True)
class StopTime:
    """GTFS stop time. Times are anchored on 2000-01-01 in timezone."""

    trip_id: str = ""
    arrival_time: dt.datetime | None = None
    departure_time: dt.datetime | None = None
    stop_id: str = ""
    stop_sequence: int = 0
    stop_headsign: str | None = None
    pickup_type: PickupDropOffPolicy | None = None
    drop_off_type: PickupDropOffPolicy | None = None
    continuous_pickup: PickupDropOffPolicy | None = None
    continuous_drop_off: PickupDropOffPolicy | None = None
    shape_dist_traveled: float | None = None
    timepoint: Timepoint | None = None
    nonstandard: str | None = None
    timezone: ZoneInfo = UTC_ZONE
    id: UUID = field(default_factory=uuid4, compare=False, repr=False)


@dataclass(frozen=True)
class CalendarDate:
    """Service exception for a single date."""

    service_id: str = ""
    date: dt.date = dt.date.min
    exception_type: ExceptionType = ExceptionType.ADDED
    nonstandard: str | None = None
    id: UUID = field(default_factory=uuid4, compare=False, repr=False)


FieldT = TypeVar("FieldT", bound=Enum)
RecordT = TypeVar("RecordT")


@dataclass
class Table(Generic[FieldT, RecordT]):
    """Records decoded from one file, in file order, plus the header used."""

    header: list[FieldT] = field(default_factory=list)
    records: list[RecordT] = field(default_factory=list)
    id: UUID = field(default_factory=uuid4, compare=False, repr=False)

    def __iter__(self) -> Iterator[RecordT]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def __getitem__(self, index: int) -> RecordT:
        return self.records[index]

    @property
    def first(self) -> RecordT | None:
        return self.records[0] if self.records else None

    def add(self, record: RecordT) -> None:
        self.records.append(record)

    def remove(self, record: RecordT) -> None:
        """Remove record by its synthetic identity."""
        for index, existing in enumerate(self.records):
            if existing.id == record.id:  # type: ignore[attr-defined]
                del self.records[index]
                return
        raise ValueError(f"Record not in table: {record}")


Agencies = Table[AgencyField, Agency]
Routes = Table[RouteField, Route]
Stops = Table[StopField, Stop]
Trips = Table[TripField, Trip]
StopTimes = Table[StopTimeField, StopTime]
CalendarDates = Table[CalendarDateField, CalendarDate]


class FailurePolicy(Enum):
    """What the assembler does when one table fails to decode."""

    ALL_OR_NOTHING = "all_or_nothing"
    COLLECT = "collect"


@dataclass(frozen=True)
class LoadConfig:
    """Configuration for loading a feed."""

    default_timezone: str = "UTC"  # used when agency.txt has no rows
    jobs: int = 1
    required_files: frozenset[str] = frozenset()
    failure_policy: FailurePolicy = FailurePolicy.ALL_OR_NOTHING
    download_timeout: float = 60.0  # seconds


@dataclass(frozen=True)
class Feed:
    """All tables decoded from one GTFS feed. Absent files are None."""

    agencies: Agencies | None = None
    routes: Routes | None = None
    stops: Stops | None = None
    trips: Trips | None = None
    stop_times: StopTimes | None = None
    calendar_dates: CalendarDates | None = None
    errors: dict[str, GTFSError] = field(default_factory=dict)
    id: UUID = field(default_factory=uuid4, compare=False, repr=False)

    @property
    def agency(self) -> Agency | None:
        """The first agency in the feed, if any."""
        return self.agencies.first if self.agencies is not None else None

    @property
    def stats(self) -> dict[str, int]:
        tables = {
            "agencies": self.agencies,
            "routes": self.routes,
            "stops": self.stops,
            "trips": self.trips,
            "stop_times": self.stop_times,
            "calendar_dates": self.calendar_dates,
        }
        return {name: len(table) for name, table in tables.items() if table is not None}


@dataclass
class ValidationReport:
    """Report from validation process."""

    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    stats: dict[str, int] = field(default_factory=dict)
