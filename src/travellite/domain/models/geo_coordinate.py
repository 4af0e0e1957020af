"""Geographic coordinate domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class GeoCoordinate:
    """A latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float
