"""Station catalog loader."""

import logging
from datetime import time
from typing import Any

from travellite.adapters.config.app_config import AppConfig
from travellite.domain.models.geo_coordinate import GeoCoordinate
from travellite.domain.models.station import OperatingHours, Station, StationType

logger = logging.getLogger(__name__)


def parse_clock_time(value: str) -> time:
    """Parse ``HH:MM``; ``24:00`` stands for midnight at the end of the day."""
    hours, _, minutes = value.partition(":")
    hour, minute = int(hours), int(minutes or 0)
    if hour == 24 and minute == 0:
        return time(0, 0)
    return time(hour, minute)


class StationCatalogLoader:
    """Loads stations from app config."""

    @staticmethod
    def load(config: AppConfig) -> list[Station]:
        """Load stations from app config.

        Raises:
            ValueError: If a station entry is missing a required key or has a bad value.
        """
        stations: list[Station] = []
        seen_ids: set[str] = set()

        for index, station_data in enumerate(config.get_stations_config()):
            if not isinstance(station_data, dict):
                continue

            station = StationCatalogLoader._parse_station(station_data, index)
            if station.id in seen_ids:
                raise ValueError(f"Duplicate station id '{station.id}' in configuration")
            seen_ids.add(station.id)
            stations.append(station)

        logger.info(f"Loaded {len(stations)} station(s) from {config.config_file}")
        return stations

    @staticmethod
    def _parse_station(data: dict[str, Any], index: int) -> Station:
        for key in ("id", "name", "code", "type", "latitude", "longitude"):
            if key not in data:
                raise ValueError(f"Station #{index + 1} is missing '{key}'")

        try:
            station_type = StationType(str(data["type"]).lower())
        except ValueError:
            raise ValueError(
                f"Station '{data['id']}' has unknown type '{data['type']}'"
            ) from None

        hours_data = data.get("operating_hours")
        if isinstance(hours_data, dict):
            operating_hours = OperatingHours(
                start=parse_clock_time(str(hours_data.get("start", "06:00"))),
                end=parse_clock_time(str(hours_data.get("end", "22:00"))),
            )
        else:
            operating_hours = OperatingHours()

        return Station(
            id=str(data["id"]),
            name=str(data["name"]),
            code=str(data["code"]).upper(),
            type=station_type,
            coordinates=GeoCoordinate(
                latitude=float(data["latitude"]), longitude=float(data["longitude"])
            ),
            operating_hours=operating_hours,
            city=str(data.get("city", "")),
            state=str(data.get("state", "")),
            popularity=int(data.get("popularity", 0)),
            is_active=bool(data.get("is_active", True)),
        )
