"""Quote service - prices a trip between two catalog stations."""

import logging
from datetime import datetime, tzinfo
from decimal import Decimal
from typing import TYPE_CHECKING

from travellite.application.services.distance_calculator import haversine_km
from travellite.application.services.pricing_engine import PricingEngine, round_money
from travellite.application.services.travel_estimator import estimate_travel_time
from travellite.domain.errors import ValidationError
from travellite.domain.models.route_quote import RouteQuote

if TYPE_CHECKING:
    from travellite.domain.contracts import Clock
    from travellite.domain.ports import StationCatalog

logger = logging.getLogger(__name__)


class QuoteService:
    """Combines station lookup, distance and pricing into a route quote."""

    def __init__(
        self,
        catalog: "StationCatalog",
        engine: PricingEngine,
        clock: "Clock",
        timezone: tzinfo | None = None,
    ) -> None:
        self._catalog = catalog
        self._engine = engine
        self._clock = clock
        self._timezone = timezone

    def local_time(self, moment: datetime | None = None) -> datetime:
        """Express a pickup moment (default now) on the pricing wall clock.

        Aware times are converted to the configured timezone; naive times are
        taken as already local.
        """
        moment = moment or self._clock.now()
        if self._timezone is not None and moment.tzinfo is not None:
            return moment.astimezone(self._timezone)
        return moment

    def quote_route(
        self,
        source_id: str,
        destination_id: str,
        pickup_time: datetime | None = None,
        user_tier: str = "new",
        prior_booking_count: int = 0,
    ) -> RouteQuote:
        """Quote moving luggage from one station to another.

        The pickup time defaults to now; its hour is read in the configured timezone.

        Raises:
            ValidationError: If both ids name the same station.
            StationNotFoundError: If either station is unknown.
        """
        if source_id == destination_id:
            raise ValidationError(
                "Source and destination stations cannot be the same",
                field="destination_station_id",
            )
        source = self._catalog.lookup(source_id)
        destination = self._catalog.lookup(destination_id)

        distance = Decimal(str(haversine_km(source.coordinates, destination.coordinates)))
        pickup = self.local_time(pickup_time)
        quote = self._engine.quote(
            distance, source.type, destination.type, pickup, user_tier, prior_booking_count
        )
        logger.info(f"Quoted {source.code} -> {destination.code}: {quote.total} {quote.currency}")

        return RouteQuote(
            source=source,
            destination=destination,
            distance_km=round_money(distance),
            quote=quote,
            travel_time=estimate_travel_time(distance, source.type, destination.type),
        )
