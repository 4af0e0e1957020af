"""Station catalog port."""

from typing import Protocol

from travellite.domain.models.station import Station, StationType


class StationCatalog(Protocol):
    """Port for read-only station lookup."""

    def lookup(self, station_id: str) -> Station:
        """Return the station with the given id.

        Raises:
            StationNotFoundError: If no such station exists.
        """
        ...

    def find_by_code(self, code: str) -> Station | None:
        """Return the active station with the given code, if any."""
        ...

    def search(
        self, query: str, station_type: StationType | None = None, limit: int = 10
    ) -> list[Station]:
        """Find stations whose name, code, city or state match the query."""
        ...

    def list_popular(
        self, station_type: StationType | None = None, limit: int = 20
    ) -> list[Station]:
        """List stations sorted by popularity, most popular first."""
        ...

    def all_stations(self) -> list[Station]:
        """Return every active station."""
        ...
