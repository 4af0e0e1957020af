"""Tests for great-circle distance calculation."""

import math

import pytest

from travellite.application.services.distance_calculator import (
    EARTH_RADIUS_KM,
    distance,
    haversine_km,
    validate_coordinate,
)
from travellite.domain.errors import ErrorKind, InvalidCoordinateError
from travellite.domain.models import GeoCoordinate

NEW_DELHI = GeoCoordinate(28.6434, 77.2197)
MUMBAI_CENTRAL = GeoCoordinate(18.9690, 72.8205)


def test_distance_to_same_point_is_zero() -> None:
    """Given one coordinate, when measuring to itself, then the distance is 0."""
    assert haversine_km(NEW_DELHI, NEW_DELHI) == 0.0


def test_distance_is_symmetric() -> None:
    """Given two coordinates, when measuring both ways, then the results are equal."""
    assert haversine_km(NEW_DELHI, MUMBAI_CENTRAL) == pytest.approx(
        haversine_km(MUMBAI_CENTRAL, NEW_DELHI)
    )


def test_one_degree_of_latitude_on_meridian() -> None:
    """Given points one degree apart on a meridian, when measuring, then ~111.19 km."""
    result = haversine_km(GeoCoordinate(0.0, 0.0), GeoCoordinate(1.0, 0.0))

    assert result == pytest.approx(EARTH_RADIUS_KM * math.pi / 180, rel=1e-9)
    assert result == pytest.approx(111.19, abs=0.01)


def test_antipodal_points_are_half_circumference_apart() -> None:
    """Given antipodal points, when measuring, then the distance is pi * R without NaN."""
    result = haversine_km(GeoCoordinate(0.0, 0.0), GeoCoordinate(0.0, 180.0))

    assert not math.isnan(result)
    assert result == pytest.approx(math.pi * EARTH_RADIUS_KM, rel=1e-9)


def test_delhi_to_mumbai_is_plausible() -> None:
    """Given New Delhi and Mumbai Central, when measuring, then it is about 1150 km."""
    assert 1100 < haversine_km(NEW_DELHI, MUMBAI_CENTRAL) < 1200


def test_distance_alias_matches_haversine() -> None:
    """Given the public alias, when called, then it computes the same value."""
    assert distance(NEW_DELHI, MUMBAI_CENTRAL) == haversine_km(NEW_DELHI, MUMBAI_CENTRAL)


@pytest.mark.parametrize(
    ("coordinate", "field"),
    [
        (GeoCoordinate(91.0, 0.0), "latitude"),
        (GeoCoordinate(-90.5, 0.0), "latitude"),
        (GeoCoordinate(0.0, 180.5), "longitude"),
        (GeoCoordinate(float("nan"), 0.0), "latitude"),
        (GeoCoordinate(0.0, float("inf")), "longitude"),
        (GeoCoordinate(None, 0.0), "latitude"),  # type: ignore[arg-type]
        (GeoCoordinate("12.5", 0.0), "latitude"),  # type: ignore[arg-type]
    ],
)
def test_invalid_coordinates_are_rejected(coordinate: GeoCoordinate, field: str) -> None:
    """Given an unusable coordinate, when measuring, then InvalidCoordinateError names the field."""
    with pytest.raises(InvalidCoordinateError) as exc_info:
        haversine_km(coordinate, NEW_DELHI)

    assert exc_info.value.kind == ErrorKind.INVALID_COORDINATE
    assert exc_info.value.field == field


def test_boundary_coordinates_are_valid() -> None:
    """Given coordinates exactly on the range limits, when validating, then no error is raised."""
    validate_coordinate(GeoCoordinate(90.0, 180.0))
    validate_coordinate(GeoCoordinate(-90.0, -180.0))
