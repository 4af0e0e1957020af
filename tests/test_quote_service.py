"""Tests for route quotes and travel time estimates."""

from datetime import UTC, datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from travellite.adapters.catalog import InMemoryStationCatalog
from travellite.application.services import PricingEngine, QuoteService
from travellite.application.services.travel_estimator import (
    estimate_delivery_hours,
    estimate_travel_time,
)
from travellite.domain.errors import StationNotFoundError, ValidationError
from travellite.domain.models import GeoCoordinate, Station, StationType


class MockClock:
    def __init__(self, now: datetime) -> None:
        self.current = now

    def now(self) -> datetime:
        return self.current


def make_station(station_id: str, station_type: StationType, lat: float, lon: float) -> Station:
    coordinates = GeoCoordinate(lat, lon)
    return Station(station_id, station_id.title(), station_id.upper(), station_type, coordinates)


@pytest.fixture
def service() -> QuoteService:
    catalog = InMemoryStationCatalog(
        [
            make_station("ndls", StationType.RAILWAY, 28.6434, 77.2197),
            make_station("mmct", StationType.RAILWAY, 18.9690, 72.8205),
            make_station("del", StationType.AIRPORT, 28.5562, 77.1000),
        ]
    )
    clock = MockClock(datetime(2024, 12, 1, 14, 0, tzinfo=UTC))
    return QuoteService(catalog, PricingEngine(), clock)


def test_route_quote_prices_the_great_circle_distance(service: QuoteService) -> None:
    """Given two railway stations far apart, when quoting, then the long distance band applies."""
    route = service.quote_route("ndls", "mmct", user_tier="new")

    assert Decimal("1100") < route.distance_km < Decimal("1200")
    assert route.distance_km == route.distance_km.quantize(Decimal("0.01"))
    assert route.source.code == "NDLS"
    assert route.destination.code == "MMCT"
    assert route.quote.distance_category == "Long Distance"
    assert route.quote.time_category == "Standard"
    assert route.quote.total == Decimal("2000.00")
    assert route.travel_time.processing_hours == 1
    assert route.travel_time.delivery_hours == 60


def test_route_quote_uses_station_types(service: QuoteService) -> None:
    """Given a railway and an airport station, when quoting, then mixed pricing applies."""
    route = service.quote_route("ndls", "del", datetime(2024, 12, 1, 23, 0, tzinfo=UTC), "premium")

    assert route.quote.station_multiplier == Decimal("1.2")
    assert route.quote.time_category == "Night Service"
    assert route.quote.discount.kind == "premium"
    assert route.travel_time.processing_hours == 2


def local_service(now: datetime) -> QuoteService:
    catalog = InMemoryStationCatalog(
        [
            make_station("ndls", StationType.RAILWAY, 28.6434, 77.2197),
            make_station("mmct", StationType.RAILWAY, 18.9690, 72.8205),
        ]
    )
    return QuoteService(catalog, PricingEngine(), MockClock(now), ZoneInfo("Asia/Kolkata"))


def test_default_pickup_uses_local_wall_clock() -> None:
    """Given 17:30 UTC, which is 23:00 in Kolkata, when quoting now, then night pricing applies."""
    service = local_service(datetime(2024, 12, 1, 17, 30, tzinfo=UTC))

    route = service.quote_route("ndls", "mmct")

    assert route.quote.time_category == "Night Service"


def test_explicit_pickup_is_converted_to_local_time() -> None:
    """Given a UTC pickup at 03:00, which is 08:30 in Kolkata, when quoting, then the morning
    rush applies."""
    service = local_service(datetime(2024, 12, 1, 12, 0, tzinfo=UTC))

    route = service.quote_route("ndls", "mmct", datetime(2024, 12, 1, 3, 0, tzinfo=UTC))

    assert route.quote.time_category == "Morning Rush"


def test_naive_pickup_is_taken_as_local() -> None:
    """Given a naive 23:00 pickup, when expressing it locally, then it is left unchanged."""
    service = local_service(datetime(2024, 12, 1, 12, 0, tzinfo=UTC))
    naive = datetime(2024, 12, 1, 23, 0)

    assert service.local_time(naive) == naive
    assert service.local_time().hour == 17
    assert service.local_time().minute == 30


def test_route_quote_rejects_same_station(service: QuoteService) -> None:
    """Given the same station twice, when quoting, then ValidationError."""
    with pytest.raises(ValidationError) as exc_info:
        service.quote_route("ndls", "ndls")

    assert exc_info.value.field == "destination_station_id"


def test_route_quote_rejects_unknown_station(service: QuoteService) -> None:
    """Given an unknown station id, when quoting, then StationNotFoundError."""
    with pytest.raises(StationNotFoundError):
        service.quote_route("ndls", "atlantis")


def test_travel_time_for_railway_route() -> None:
    """Given 120 km by rail, when estimating, then 2 h transport plus 1 h processing."""
    estimate = estimate_travel_time(120, "railway", "railway")

    assert estimate.transport_hours == Decimal("2.00")
    assert estimate.processing_hours == 1
    assert estimate.estimated_hours == Decimal("3.00")
    assert estimate.estimated_minutes == 180
    assert estimate.delivery_hours == 24


def test_travel_time_for_airport_route() -> None:
    """Given 100 km between airports, when estimating, then the faster speed and 2 h apply."""
    estimate = estimate_travel_time(100, "airport", "airport")

    assert estimate.transport_hours == Decimal("1.25")
    assert estimate.estimated_hours == Decimal("3.25")
    assert estimate.estimated_minutes == 195


@pytest.mark.parametrize(
    ("distance_km", "hours"),
    [(50, 24), (200, 24), (300, 36), (500, 36), (501, 48), (1000, 48), (1001, 60)],
)
def test_delivery_hours_grow_with_distance(distance_km: float, hours: int) -> None:
    """Given a distance, when estimating delivery, then it takes at least a day plus extras."""
    assert estimate_delivery_hours(distance_km) == hours
