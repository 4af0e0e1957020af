"""Station domain model."""

from dataclasses import dataclass, field
from datetime import time
from enum import StrEnum

from travellite.domain.models.geo_coordinate import GeoCoordinate


class StationType(StrEnum):
    """Kind of station a luggage counter is located at."""

    RAILWAY = "railway"
    AIRPORT = "airport"


@dataclass(frozen=True)
class OperatingHours:
    """Daily opening window of a station counter."""

    start: time = time(6, 0)
    end: time = time(22, 0)

    def is_open_at(self, moment: time) -> bool:
        """Check whether the counter is open at the given time of day.

        Windows that wrap past midnight (e.g. 22:00-06:00) are supported.
        """
        if self.start <= self.end:
            return self.start <= moment < self.end
        return moment >= self.start or moment < self.end


@dataclass(frozen=True)
class Station:
    """Represents a railway or airport station offering luggage service."""

    id: str
    name: str
    code: str
    type: StationType
    coordinates: GeoCoordinate
    operating_hours: OperatingHours = field(default_factory=OperatingHours)
    city: str = ""
    state: str = ""
    popularity: int = 0  # Higher values sort first in popular listings
    is_active: bool = True


@dataclass(frozen=True)
class StateSummary:
    """Number of active stations in one state, split by station type."""

    name: str
    total_stations: int
    railways: int
    airports: int
