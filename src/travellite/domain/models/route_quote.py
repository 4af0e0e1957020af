"""Route quote domain models."""

from dataclasses import dataclass
from decimal import Decimal

from travellite.domain.models.price_quote import PriceQuote
from travellite.domain.models.station import Station


@dataclass(frozen=True)
class TravelTimeEstimate:
    """Expected door-to-door time for moving luggage between two stations."""

    transport_hours: Decimal
    processing_hours: int
    estimated_hours: Decimal
    estimated_minutes: int
    delivery_hours: int


@dataclass(frozen=True)
class RouteQuote:
    """Price quote for a concrete pair of stations."""

    source: Station
    destination: Station
    distance_km: Decimal
    quote: PriceQuote
    travel_time: TravelTimeEstimate
