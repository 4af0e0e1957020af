"""Great-circle distance between station coordinates."""

import math

from travellite.domain.errors import InvalidCoordinateError
from travellite.domain.models.geo_coordinate import GeoCoordinate

EARTH_RADIUS_KM = 6371.0


def validate_coordinate(coordinate: GeoCoordinate) -> None:
    """Check that both components are present, finite and within range.

    Raises:
        InvalidCoordinateError: If the coordinate cannot be used for distance calculation.
    """
    for name, value, bound in (
        ("latitude", coordinate.latitude, 90.0),
        ("longitude", coordinate.longitude, 180.0),
    ):
        if value is None:
            raise InvalidCoordinateError(f"{name} is required", field=name)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidCoordinateError(f"{name} must be a number, got {value!r}", field=name)
        if not math.isfinite(value):
            raise InvalidCoordinateError(f"{name} must be finite, got {value}", field=name)
        if not -bound <= value <= bound:
            raise InvalidCoordinateError(
                f"{name} must be between {-bound:g} and {bound:g}, got {value}", field=name
            )


def haversine_km(a: GeoCoordinate, b: GeoCoordinate) -> float:
    """Compute the great-circle distance in kilometers between two coordinates."""
    validate_coordinate(a)
    validate_coordinate(b)

    lat1, lon1, lat2, lon2 = map(math.radians, [a.latitude, a.longitude, b.latitude, b.longitude])

    dlat = lat2 - lat1
    dlon = lon2 - lon1
    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    # Float error can push h a hair above 1 for antipodal points
    h = min(1.0, h)
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_KM * c


distance = haversine_km
