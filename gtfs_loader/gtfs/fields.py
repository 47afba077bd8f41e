"""Recognized GTFS column names, one enumeration per table."""

from enum import Enum


class AgencyField(str, Enum):
    """Columns of agency.txt."""

    AGENCY_ID = "agency_id"
    AGENCY_NAME = "agency_name"
    AGENCY_URL = "agency_url"
    AGENCY_TIMEZONE = "agency_timezone"
    AGENCY_LANG = "agency_lang"
    AGENCY_PHONE = "agency_phone"
    AGENCY_FARE_URL = "agency_fare_url"
    AGENCY_EMAIL = "agency_email"
    NONSTANDARD = "nonstandard"


class RouteField(str, Enum):
    """Columns of routes.txt."""

    ROUTE_ID = "route_id"
    AGENCY_ID = "agency_id"
    ROUTE_SHORT_NAME = "route_short_name"
    ROUTE_LONG_NAME = "route_long_name"
    ROUTE_DESC = "route_desc"
    ROUTE_TYPE = "route_type"
    ROUTE_URL = "route_url"
    ROUTE_COLOR = "route_color"
    ROUTE_TEXT_COLOR = "route_text_color"
    ROUTE_SORT_ORDER = "route_sort_order"
    CONTINUOUS_PICKUP = "continuous_pickup"
    CONTINUOUS_DROP_OFF = "continuous_drop_off"
    NONSTANDARD = "nonstandard"


class StopField(str, Enum):
    """Columns of stops.txt."""

    STOP_ID = "stop_id"
    STOP_CODE = "stop_code"
    STOP_NAME = "stop_name"
    STOP_DESC = "stop_desc"
    STOP_LAT = "stop_lat"
    STOP_LON = "stop_lon"
    ZONE_ID = "zone_id"
    STOP_URL = "stop_url"
    LOCATION_TYPE = "location_type"
    PARENT_STATION = "parent_station"
    STOP_TIMEZONE = "stop_timezone"
    WHEELCHAIR_BOARDING = "wheelchair_boarding"
    LEVEL_ID = "level_id"
    PLATFORM_CODE = "platform_code"
    NONSTANDARD = "nonstandard"


class TripField(str, Enum):
    """Columns of trips.txt."""

    ROUTE_ID = "route_id"
    SERVICE_ID = "service_id"
    TRIP_ID = "trip_id"
    TRIP_HEADSIGN = "trip_headsign"
    TRIP_SHORT_NAME = "trip_short_name"
    DIRECTION_ID = "direction_id"
    BLOCK_ID = "block_id"
    SHAPE_ID = "shape_id"
    WHEELCHAIR_ACCESSIBLE = "wheelchair_accessible"
    BIKES_ALLOWED = "bikes_allowed"
    NONSTANDARD = "nonstandard"


class StopTimeField(str, Enum):
    """Columns of stop_times.txt."""

    TRIP_ID = "trip_id"
    ARRIVAL_TIME = "arrival_time"
    DEPARTURE_TIME = "departure_time"
    STOP_ID = "stop_id"
    STOP_SEQUENCE = "stop_sequence"
    STOP_HEADSIGN = "stop_headsign"
    PICKUP_TYPE = "pickup_type"
    DROP_OFF_TYPE = "drop_off_type"
    CONTINUOUS_PICKUP = "continuous_pickup"
    CONTINUOUS_DROP_OFF = "continuous_drop_off"
    SHAPE_DIST_TRAVELED = "shape_dist_traveled"
    TIMEPOINT = "timepoint"
    NONSTANDARD = "nonstandard"


class CalendarDateField(str, Enum):
    """Columns of calendar_dates.txt."""

    SERVICE_ID = "service_id"
    DATE = "date"
    EXCEPTION_TYPE = "exception_type"
    NONSTANDARD = "nonstandard"
