"""Station finder - search, popularity listing and proximity queries over the catalog."""

from decimal import Decimal
from typing import TYPE_CHECKING

from travellite.application.services.distance_calculator import haversine_km, validate_coordinate
from travellite.application.services.pricing_engine import round_money
from travellite.domain.errors import StationNotFoundError, ValidationError
from travellite.domain.models.geo_coordinate import GeoCoordinate
from travellite.domain.models.station import StateSummary, Station, StationType

if TYPE_CHECKING:
    from travellite.domain.ports import StationCatalog

MAX_RESULTS = 50
MIN_QUERY_LENGTH = 2


def _cap(limit: int) -> int:
    if limit < 1:
        raise ValidationError("limit must be at least 1", field="limit")
    return min(limit, MAX_RESULTS)


class StationFinder:
    """Query side of the station catalog used by the API and CLI."""

    def __init__(self, catalog: "StationCatalog") -> None:
        self._catalog = catalog

    def search(
        self, query: str, station_type: StationType | None = None, limit: int = 10
    ) -> list[Station]:
        """Search stations by name, code, city or state.

        Raises:
            ValidationError: If the query is shorter than two characters.
        """
        query = (query or "").strip()
        if len(query) < MIN_QUERY_LENGTH:
            raise ValidationError(
                "Search query must be at least 2 characters long", field="q"
            )
        return self._catalog.search(query, station_type, _cap(limit))

    def popular(self, station_type: StationType | None = None, limit: int = 20) -> list[Station]:
        return self._catalog.list_popular(station_type, _cap(limit))

    def get(self, identifier: str) -> Station:
        """Find a station by id, falling back to its code."""
        try:
            return self._catalog.lookup(identifier)
        except StationNotFoundError:
            station = self._catalog.find_by_code(identifier)
            if station is None:
                raise
            return station

    def nearby(
        self,
        center: GeoCoordinate,
        max_distance_km: float = 100.0,
        station_type: StationType | None = None,
        limit: int = 10,
    ) -> list[tuple[Station, Decimal]]:
        """List stations within ``max_distance_km`` of a point, closest first.

        Raises:
            InvalidCoordinateError: If the center is not a valid coordinate.
        """
        validate_coordinate(center)
        if max_distance_km <= 0:
            raise ValidationError("max_distance_km must be positive", field="max_distance_km")

        candidates: list[tuple[Station, float]] = []
        for station in self._catalog.all_stations():
            if station_type is not None and station.type != station_type:
                continue
            distance = haversine_km(center, station.coordinates)
            if distance <= max_distance_km:
                candidates.append((station, distance))

        candidates.sort(key=lambda pair: pair[1])
        return [
            (station, round_money(Decimal(str(distance))))
            for station, distance in candidates[: _cap(limit)]
        ]

    def distance_between(self, source: str, destination: str) -> tuple[Station, Station, Decimal]:
        """Great-circle distance in km between two stations given by id or code."""
        origin = self.get(source)
        target = self.get(destination)
        km = haversine_km(origin.coordinates, target.coordinates)
        return origin, target, round_money(Decimal(str(km)))

    def states(self, station_type: StationType | None = None) -> list[StateSummary]:
        """Group active stations by state, states with the most stations first."""
        counts: dict[str, dict[StationType, int]] = {}
        for station in self._catalog.all_stations():
            if station_type is not None and station.type != station_type:
                continue
            per_type = counts.setdefault(station.state, {})
            per_type[station.type] = per_type.get(station.type, 0) + 1

        summaries = [
            StateSummary(
                name=state,
                total_stations=sum(per_type.values()),
                railways=per_type.get(StationType.RAILWAY, 0),
                airports=per_type.get(StationType.AIRPORT, 0),
            )
            for state, per_type in counts.items()
        ]
        summaries.sort(key=lambda s: (-s.total_stations, s.name))
        return summaries
