"""Table schemas and the generic header-driven table decoder."""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Generic
from zoneinfo import ZoneInfo

from gtfs_loader.errors import BindingError, ErrorKind, GTFSError, StructuralError
from gtfs_loader.gtfs.fields import (
    AgencyField,
    CalendarDateField,
    RouteField,
    StopField,
    StopTimeField,
    TripField,
)
from gtfs_loader.gtfs.models import (
    Accessibility,
    Agency,
    CalendarDate,
    DirectionId,
    ExceptionType,
    FieldT,
    LocationType,
    PickupDropOffPolicy,
    RecordT,
    Route,
    Stop,
    StopTime,
    Table,
    Timepoint,
    Trip,
)
from gtfs_loader.parsing import binders
from gtfs_loader.parsing.binders import Binding, bind
from gtfs_loader.parsing.header import read_header
from gtfs_loader.parsing.tokenizer import read_record, split_records

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TableSchema(Generic[FieldT, RecordT]):
    """How one GTFS file maps onto a record type."""

    file_name: str
    field_type: type[FieldT]
    record_type: Callable[..., RecordT]
    bindings: Mapping[FieldT, Binding]
    required: frozenset[FieldT]
    # Record attributes that do not come from a column
    constants: Mapping[str, Any] = field(default_factory=dict)


def _b(attribute: str, convert: binders.Converter) -> Binding:
    return Binding(attribute, convert)


AGENCY_SCHEMA: TableSchema[AgencyField, Agency] = TableSchema(
    file_name="agency.txt",
    field_type=AgencyField,
    record_type=Agency,
    bindings={
        AgencyField.AGENCY_ID: _b("agency_id", binders.optional_string),
        AgencyField.AGENCY_NAME: _b("agency_name", binders.required_string),
        AgencyField.AGENCY_URL: _b("agency_url", binders.required_url),
        AgencyField.AGENCY_TIMEZONE: _b("agency_timezone", binders.required_timezone),
        AgencyField.AGENCY_LANG: _b("agency_lang", binders.optional_locale),
        AgencyField.AGENCY_PHONE: _b("agency_phone", binders.optional_string),
        AgencyField.AGENCY_FARE_URL: _b("agency_fare_url", binders.optional_url),
        AgencyField.AGENCY_EMAIL: _b("agency_email", binders.optional_string),
        AgencyField.NONSTANDARD: _b("nonstandard", binders.optional_string),
    },
    required=frozenset(
        {AgencyField.AGENCY_NAME, AgencyField.AGENCY_URL, AgencyField.AGENCY_TIMEZONE}
    ),
)

ROUTE_SCHEMA: TableSchema[RouteField, Route] = TableSchema(
    file_name="routes.txt",
    field_type=RouteField,
    record_type=Route,
    bindings={
        RouteField.ROUTE_ID: _b("route_id", binders.required_string),
        RouteField.AGENCY_ID: _b("agency_id", binders.optional_string),
        RouteField.ROUTE_SHORT_NAME: _b("route_short_name", binders.optional_string),
        RouteField.ROUTE_LONG_NAME: _b("route_long_name", binders.optional_string),
        RouteField.ROUTE_DESC: _b("route_desc", binders.optional_string),
        RouteField.ROUTE_TYPE: _b("route_type", binders.required_uint),
        RouteField.ROUTE_URL: _b("route_url", binders.optional_url),
        RouteField.ROUTE_COLOR: _b("route_color", binders.optional_color),
        RouteField.ROUTE_TEXT_COLOR: _b("route_text_color", binders.optional_color),
        RouteField.ROUTE_SORT_ORDER: _b("route_sort_order", binders.optional_uint),
        RouteField.CONTINUOUS_PICKUP: _b(
            "continuous_pickup", binders.optional_enum(PickupDropOffPolicy)
        ),
        RouteField.CONTINUOUS_DROP_OFF: _b(
            "continuous_drop_off", binders.optional_enum(PickupDropOffPolicy)
        ),
        RouteField.NONSTANDARD: _b("nonstandard", binders.optional_string),
    },
    required=frozenset({RouteField.ROUTE_ID, RouteField.ROUTE_TYPE}),
)

STOP_SCHEMA: TableSchema[StopField, Stop] = TableSchema(
    file_name="stops.txt",
    field_type=StopField,
    record_type=Stop,
    bindings={
        StopField.STOP_ID: _b("stop_id", binders.required_string),
        StopField.STOP_CODE: _b("stop_code", binders.optional_string),
        StopField.STOP_NAME: _b("stop_name", binders.optional_string),
        StopField.STOP_DESC: _b("stop_desc", binders.optional_string),
        StopField.STOP_LAT: _b("stop_lat", binders.optional_float),
        StopField.STOP_LON: _b("stop_lon", binders.optional_float),
        StopField.ZONE_ID: _b("zone_id", binders.optional_string),
        StopField.STOP_URL: _b("stop_url", binders.optional_url),
        StopField.LOCATION_TYPE: _b("location_type", binders.optional_enum(LocationType)),
        StopField.PARENT_STATION: _b("parent_station", binders.optional_string),
        StopField.STOP_TIMEZONE: _b("stop_timezone", binders.optional_timezone),
        StopField.WHEELCHAIR_BOARDING: _b(
            "wheelchair_boarding", binders.optional_enum(Accessibility)
        ),
        StopField.LEVEL_ID: _b("level_id", binders.optional_string),
        StopField.PLATFORM_CODE: _b("platform_code", binders.optional_string),
        StopField.NONSTANDARD: _b("nonstandard", binders.optional_string),
    },
    required=frozenset({StopField.STOP_ID}),
)

TRIP_SCHEMA: TableSchema[TripField, Trip] = TableSchema(
    file_name="trips.txt",
    field_type=TripField,
    record_type=Trip,
    bindings={
        TripField.ROUTE_ID: _b("route_id", binders.required_string),
        TripField.SERVICE_ID: _b("service_id", binders.required_string),
        TripField.TRIP_ID: _b("trip_id", binders.required_string),
        TripField.TRIP_HEADSIGN: _b("trip_headsign", binders.optional_string),
        TripField.TRIP_SHORT_NAME: _b("trip_short_name", binders.optional_string),
        TripField.DIRECTION_ID: _b("direction_id", binders.optional_enum(DirectionId)),
        TripField.BLOCK_ID: _b("block_id", binders.optional_string),
        TripField.SHAPE_ID: _b("shape_id", binders.optional_string),
        TripField.WHEELCHAIR_ACCESSIBLE: _b(
            "wheelchair_accessible", binders.optional_enum(Accessibility)
        ),
        TripField.BIKES_ALLOWED: _b("bikes_allowed", binders.optional_enum(Accessibility)),
        TripField.NONSTANDARD: _b("nonstandard", binders.optional_string),
    },
    required=frozenset({TripField.ROUTE_ID, TripField.SERVICE_ID, TripField.TRIP_ID}),
)

CALENDAR_DATE_SCHEMA: TableSchema[CalendarDateField, CalendarDate] = TableSchema(
    file_name="calendar_dates.txt",
    field_type=CalendarDateField,
    record_type=CalendarDate,
    bindings={
        CalendarDateField.SERVICE_ID: _b("service_id", binders.required_string),
        CalendarDateField.DATE: _b("date", binders.service_date),
        CalendarDateField.EXCEPTION_TYPE: _b(
            "exception_type", binders.required_enum(ExceptionType)
        ),
        CalendarDateField.NONSTANDARD: _b("nonstandard", binders.optional_string),
    },
    required=frozenset(
        {CalendarDateField.SERVICE_ID, CalendarDateField.DATE, CalendarDateField.EXCEPTION_TYPE}
    ),
)


def stop_time_schema(timezone: ZoneInfo) -> TableSchema[StopTimeField, StopTime]:
    """Schema for stop_times.txt with arrival/departure anchored in timezone."""
    time_of_day = binders.time_of_day(timezone)
    policy = binders.optional_enum(PickupDropOffPolicy)
    return TableSchema(
        file_name="stop_times.txt",
        field_type=StopTimeField,
        record_type=StopTime,
        bindings={
            StopTimeField.TRIP_ID: _b("trip_id", binders.required_string),
            StopTimeField.ARRIVAL_TIME: _b("arrival_time", time_of_day),
            StopTimeField.DEPARTURE_TIME: _b("departure_time", time_of_day),
            StopTimeField.STOP_ID: _b("stop_id", binders.required_string),
            StopTimeField.STOP_SEQUENCE: _b("stop_sequence", binders.required_uint),
            StopTimeField.STOP_HEADSIGN: _b("stop_headsign", binders.optional_string),
            StopTimeField.PICKUP_TYPE: _b("pickup_type", policy),
            StopTimeField.DROP_OFF_TYPE: _b("drop_off_type", policy),
            StopTimeField.CONTINUOUS_PICKUP: _b("continuous_pickup", policy),
            StopTimeField.CONTINUOUS_DROP_OFF: _b("continuous_drop_off", policy),
            StopTimeField.SHAPE_DIST_TRAVELED: _b("shape_dist_traveled", binders.optional_float),
            StopTimeField.TIMEPOINT: _b("timepoint", binders.optional_enum(Timepoint)),
            StopTimeField.NONSTANDARD: _b("nonstandard", binders.optional_string),
        },
        required=frozenset(
            {StopTimeField.TRIP_ID, StopTimeField.STOP_ID, StopTimeField.STOP_SEQUENCE}
        ),
        constants={"timezone": timezone},
    )


def decode_record(
    record: str,
    header: list[FieldT],
    schema: TableSchema[FieldT, RecordT],
) -> RecordT:
    """Decode one data record using a resolved header."""
    fields = read_record(record)
    if len(fields) != len(header):
        raise StructuralError(
            ErrorKind.HEADER_RECORD_MISMATCH,
            f"header has {len(header)} fields, record has {len(fields)}",
        )

    builder: dict[str, Any] = dict(schema.constants)
    for column, raw in zip(header, fields):
        try:
            bind(raw, builder, schema.bindings[column])
        except BindingError as e:
            e.with_context(column=column.value)
            raise
    return schema.record_type(**builder)


def _check_required(header: list[FieldT], schema: TableSchema[FieldT, Any]) -> None:
    missing = schema.required.difference(header)
    if missing:
        names = ", ".join(sorted(f.value for f in missing))
        raise StructuralError(ErrorKind.MISSING_REQUIRED_FIELDS, names)


def decode_table(text: str, schema: TableSchema[FieldT, RecordT]) -> Table[FieldT, RecordT]:
    """
    Decode the full contents of one GTFS file.

    The first record is the header; every following record must have the
    same number of fields. Any failure aborts the whole table and is raised
    with the file name and line number attached.
    """
    records = split_records(text)
    if not records:
        logger.debug(f"{schema.file_name} is empty")
        return Table()

    line = 1
    try:
        header = read_header(records[0], schema.field_type)
        table: Table[FieldT, RecordT] = Table(header=header)

        checked_required = False
        for line, record in enumerate(records[1:], start=2):
            if not record:
                logger.debug(f"Skipping blank line {line} in {schema.file_name}")
                continue
            if not checked_required:
                _check_required(header, schema)
                checked_required = True
            table.add(decode_record(record, header, schema))
    except GTFSError as e:
        e.with_context(table=schema.file_name, line=line)
        raise

    logger.debug(f"Decoded {len(table)} records from {schema.file_name}")
    return table


def read_table(path: Path, schema: TableSchema[FieldT, RecordT]) -> Table[FieldT, RecordT]:
    """Read a GTFS file from disk and decode it."""
    with open(path, encoding="utf-8-sig", newline="") as f:
        text = f.read()
    return decode_table(text, schema)
