"""Station catalog held in memory, built from configured stations."""

import logging

from travellite.domain.errors import StationNotFoundError
from travellite.domain.models.station import Station, StationType

logger = logging.getLogger(__name__)


class InMemoryStationCatalog:
    """Read-only station catalog backed by a dict.

    Inactive stations can still be looked up by id (existing bookings refer
    to them) but are left out of search and listings.
    """

    def __init__(self, stations: list[Station]) -> None:
        self._stations: dict[str, Station] = {station.id: station for station in stations}
        self._by_code: dict[str, Station] = {
            station.code.upper(): station for station in stations if station.is_active
        }

    def lookup(self, station_id: str) -> Station:
        station = self._stations.get(station_id)
        if station is None:
            raise StationNotFoundError(station_id)
        return station

    def find_by_code(self, code: str) -> Station | None:
        return self._by_code.get(code.upper())

    def search(
        self, query: str, station_type: StationType | None = None, limit: int = 10
    ) -> list[Station]:
        """Rank matches: exact code, then name prefix, then any substring; ties by popularity."""
        needle = query.strip().lower()
        if not needle:
            return []

        ranked: list[tuple[int, Station]] = []
        for station in self.all_stations():
            if station_type is not None and station.type != station_type:
                continue
            rank = self._match_rank(station, needle)
            if rank is not None:
                ranked.append((rank, station))

        ranked.sort(key=lambda item: (item[0], -item[1].popularity, item[1].name))
        logger.debug(f"Station search '{query}' matched {len(ranked)} station(s)")
        return [station for _, station in ranked[:limit]]

    def list_popular(
        self, station_type: StationType | None = None, limit: int = 20
    ) -> list[Station]:
        stations = [
            station
            for station in self.all_stations()
            if station_type is None or station.type == station_type
        ]
        stations.sort(key=lambda s: (-s.popularity, s.name))
        return stations[:limit]

    def all_stations(self) -> list[Station]:
        return [station for station in self._stations.values() if station.is_active]

    def __len__(self) -> int:
        return len(self._stations)

    @staticmethod
    def _match_rank(station: Station, needle: str) -> int | None:
        name = station.name.lower()
        if station.code.lower() == needle:
            return 0
        if name.startswith(needle):
            return 1
        haystacks = (name, station.code.lower(), station.city.lower(), station.state.lower())
        if any(needle in haystack for haystack in haystacks):
            return 2
        return None
