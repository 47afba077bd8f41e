"""Cross-table checks on a loaded feed."""

import logging
from collections import defaultdict

from gtfs_loader.gtfs.models import Feed, StopTime, ValidationReport

logger = logging.getLogger(__name__)


class GTFSValidator:
    """
    Validate references between tables of a decoded feed.

    Decoding never enforces trip -> route or stop time -> trip/stop links;
    this is where consumers that care about them find out.
    """

    def __init__(self, feed: Feed) -> None:
        """Initialize validator with a decoded feed."""
        self.feed = feed
        self.errors: list[str] = []
        self.warnings: list[str] = []

    def validate(self) -> ValidationReport:
        """Run all validation checks."""
        logger.info("Validating GTFS data")

        for name, error in self.feed.errors.items():
            self.errors.append(f"{name} could not be loaded: {error}")

        self._validate_agencies()
        self._validate_stops()
        self._validate_routes()
        self._validate_trips()
        self._validate_stop_times()

        valid = len(self.errors) == 0

        report = ValidationReport(
            valid=valid,
            errors=self.errors.copy(),
            warnings=self.warnings.copy(),
            stats=self.feed.stats,
        )

        if not valid:
            logger.error(f"Validation failed with {len(self.errors)} errors")
        elif self.warnings:
            logger.warning(f"Validation passed with {len(self.warnings)} warnings")
        else:
            logger.info("Validation passed")

        return report

    def _validate_agencies(self) -> None:
        agencies = self.feed.agencies
        if agencies is None or not len(agencies):
            self.warnings.append("No agencies found, stop times use the default time zone")
            return

        zones = {agency.agency_timezone.key for agency in agencies}
        if len(zones) > 1:
            self.errors.append(f"Agencies use different time zones: {sorted(zones)}")

    def _validate_stops(self) -> None:
        """Validate stops have valid coordinates."""
        for stop in self.feed.stops or []:
            if stop.stop_lat is not None and not (-90 <= stop.stop_lat <= 90):
                self.errors.append(f"Stop {stop.stop_id} has invalid latitude: {stop.stop_lat}")
            if stop.stop_lon is not None and not (-180 <= stop.stop_lon <= 180):
                self.errors.append(f"Stop {stop.stop_id} has invalid longitude: {stop.stop_lon}")
            if not stop.stop_name:
                self.warnings.append(f"Stop {stop.stop_id} has empty name")

    def _validate_routes(self) -> None:
        for route in self.feed.routes or []:
            if not route.name:
                self.warnings.append(f"Route {route.route_id} has neither short nor long name")

    def _validate_trips(self) -> None:
        """Validate trips reference valid routes."""
        if self.feed.routes is None:
            return
        route_ids = {route.route_id for route in self.feed.routes}

        for trip in self.feed.trips or []:
            if trip.route_id not in route_ids:
                self.errors.append(
                    f"Trip {trip.trip_id} references non-existent route {trip.route_id}"
                )

    def _validate_stop_times(self) -> None:
        """Validate stop_times are ordered and reference valid stops/trips."""
        # A missing file means the reference cannot be checked, not that it is broken
        stop_ids = None
        if self.feed.stops is not None:
            stop_ids = {stop.stop_id for stop in self.feed.stops}
        trip_ids = None
        if self.feed.trips is not None:
            trip_ids = {trip.trip_id for trip in self.feed.trips}

        trip_stop_times: dict[str, list[StopTime]] = defaultdict(list)
        for st in self.feed.stop_times or []:
            trip_stop_times[st.trip_id].append(st)

        for trip_id, stop_times in trip_stop_times.items():
            if trip_ids is not None and trip_id not in trip_ids:
                self.errors.append(f"Stop times reference non-existent trip {trip_id}")
                continue

            stop_times.sort(key=lambda st: st.stop_sequence)
            prev_time = None
            for st in stop_times:
                if stop_ids is not None and st.stop_id not in stop_ids:
                    self.errors.append(
                        f"Stop time for trip {trip_id} references non-existent stop {st.stop_id}"
                    )

                if prev_time is not None and st.arrival_time is not None:
                    if st.arrival_time < prev_time:
                        self.warnings.append(
                            f"Trip {trip_id} has non-increasing times at stop {st.stop_id}: "
                            f"{prev_time.time()} -> {st.arrival_time.time()}"
                        )
                prev_time = st.departure_time or st.arrival_time or prev_time

            if stop_times[0].arrival_time is None and stop_times[0].departure_time is None:
                self.errors.append(f"Trip {trip_id} missing first arrival time")
            if stop_times[-1].arrival_time is None and stop_times[-1].departure_time is None:
                self.errors.append(f"Trip {trip_id} missing last departure time")
