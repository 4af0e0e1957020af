"""Tests for domain models and errors."""

from dataclasses import FrozenInstanceError
from datetime import UTC, datetime, time
from decimal import Decimal

import pytest

from travellite.domain.errors import (
    BookingNotFoundError,
    ErrorKind,
    ForbiddenError,
    InvalidCoordinateError,
    StationNotFoundError,
    TravelLiteError,
    UnauthenticatedError,
    ValidationError,
)
from travellite.domain.models import (
    ErrorDetails,
    GeoCoordinate,
    OperatingHours,
    Principal,
    PrincipalRole,
    ServiceFees,
    Station,
    StationType,
    TaxBreakdown,
    TrackingEvent,
)


def test_station_creation() -> None:
    """Given station data, when creating a Station, then defaults fill the optional fields."""
    station = Station(
        id="ndls",
        name="New Delhi Railway Station",
        code="NDLS",
        type=StationType.RAILWAY,
        coordinates=GeoCoordinate(28.6434, 77.2197),
    )

    assert station.coordinates.latitude == 28.6434
    assert station.operating_hours == OperatingHours(time(6, 0), time(22, 0))
    assert station.popularity == 0
    assert station.is_active is True


def test_station_is_immutable() -> None:
    """Given a station, when assigning a field, then FrozenInstanceError is raised."""
    coordinates = GeoCoordinate(28.55, 77.1)
    station = Station("del", "Delhi Airport", "DEL", StationType.AIRPORT, coordinates)

    with pytest.raises(FrozenInstanceError):
        station.name = "Other"  # type: ignore[misc]


@pytest.mark.parametrize(
    ("start", "end", "moment", "is_open"),
    [
        (time(6, 0), time(22, 0), time(6, 0), True),
        (time(6, 0), time(22, 0), time(22, 0), False),
        (time(22, 0), time(6, 0), time(23, 30), True),
        (time(22, 0), time(6, 0), time(5, 59), True),
        (time(22, 0), time(6, 0), time(12, 0), False),
    ],
)
def test_operating_hours(start: time, end: time, moment: time, is_open: bool) -> None:
    """Given an opening window, when checking a time, then wrap past midnight is handled."""
    assert OperatingHours(start, end).is_open_at(moment) is is_open


def test_fee_and_tax_totals() -> None:
    """Given fee and tax components, when totalling, then the components are summed."""
    fees = ServiceFees(Decimal("25"), Decimal("15"), Decimal("20"), Decimal("10"))
    taxes = TaxBreakdown(Decimal("18"), Decimal("23.49"), Decimal("5"), Decimal("6.53"))

    assert fees.total == Decimal("70")
    assert taxes.total == Decimal("30.02")


def test_principal_roles() -> None:
    """Given principals of each role, when checking staff, then only staff qualify."""
    assert Principal("s", PrincipalRole.STAFF, "ndls").is_staff
    assert not Principal("c", PrincipalRole.CUSTOMER).is_staff
    assert not Principal("a", PrincipalRole.ADMIN).is_staff


def test_tracking_event_defaults_to_empty_notes() -> None:
    """Given a tracking event without notes, when creating it, then notes are empty."""
    event = TrackingEvent("booking_created", "ndls", datetime(2024, 12, 1, tzinfo=UTC))

    assert event.notes == ""


@pytest.mark.parametrize(
    ("error", "kind"),
    [
        (ValidationError("bad"), ErrorKind.VALIDATION),
        (StationNotFoundError("x"), ErrorKind.NOT_FOUND),
        (BookingNotFoundError("x"), ErrorKind.NOT_FOUND),
        (ForbiddenError("no"), ErrorKind.FORBIDDEN),
        (InvalidCoordinateError("lat"), ErrorKind.INVALID_COORDINATE),
        (UnauthenticatedError("who"), ErrorKind.UNAUTHENTICATED),
    ],
)
def test_errors_carry_their_kind(error: TravelLiteError, kind: ErrorKind) -> None:
    """Given a core error, when inspecting it, then its kind identifies the failure."""
    assert error.kind == kind
    assert isinstance(error, TravelLiteError)


def test_error_details() -> None:
    """Given an error with a field, when describing it, then kind, reason and field are kept."""
    details = BookingNotFoundError("TL20241201ABCD").to_details()

    assert details == ErrorDetails(
        kind="not_found", reason="Booking not found: TL20241201ABCD", field="booking_id"
    )
    assert details.model_dump() == {
        "kind": "not_found",
        "reason": "Booking not found: TL20241201ABCD",
        "field": "booking_id",
    }
