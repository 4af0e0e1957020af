"""Deterministic multi-stage price calculation for luggage transport.

The pipeline runs in ``Decimal`` and rounds every reported amount to two
decimal places as soon as it is computed. The rounded value is what the next
stage works with, so the breakdown shown to a customer always adds up to the
total.
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from travellite.domain.errors import InvalidDistanceError
from travellite.domain.models.price_quote import (
    DiscountBreakdown,
    PriceQuote,
    PricingTier,
    QuickQuote,
    ServiceFees,
    TaxBreakdown,
)

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
HUNDRED = Decimal("100")


def round_money(value: Decimal) -> Decimal:
    """Round an amount to two decimal places, halves away from zero."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class DistanceBand:
    """Multiplier applied to routes longer than ``above_km``."""

    name: str
    above_km: Decimal
    multiplier: Decimal


@dataclass(frozen=True)
class TimeBand:
    """Multiplier applied to pickups in ``[start_hour, end_hour)``.

    Bands with ``start_hour > end_hour`` wrap around midnight.
    """

    name: str
    start_hour: int
    end_hour: int
    multiplier: Decimal

    def contains(self, hour: int) -> bool:
        if self.start_hour > self.end_hour:
            return hour >= self.start_hour or hour < self.end_hour
        return self.start_hour <= hour < self.end_hour


@dataclass(frozen=True)
class PricingConfig:
    """Constants driving the price pipeline."""

    base_price: Decimal = Decimal("50")
    price_per_km: Decimal = Decimal("2.5")
    minimum_charge: Decimal = Decimal("100")
    maximum_charge: Decimal = Decimal("2000")
    currency: str = "INR"
    station_multipliers: dict[str, Decimal] = field(
        default_factory=lambda: {
            "railway-railway": Decimal("1.0"),
            "railway-airport": Decimal("1.2"),
            "airport-railway": Decimal("1.2"),
            "airport-airport": Decimal("1.4"),
        }
    )
    # Highest threshold first
    distance_bands: tuple[DistanceBand, ...] = (
        DistanceBand("Long Distance", Decimal("500"), Decimal("1.3")),
        DistanceBand("Interstate", Decimal("200"), Decimal("1.2")),
        DistanceBand("Regional", Decimal("50"), Decimal("1.1")),
    )
    local_band_name: str = "Local"
    time_bands: tuple[TimeBand, ...] = (
        TimeBand("Night Service", 22, 6, Decimal("1.15")),
        TimeBand("Morning Rush", 6, 10, Decimal("1.05")),
        TimeBand("Evening Rush", 17, 21, Decimal("1.05")),
    )
    standard_time_name: str = "Standard"
    handling_fee: Decimal = Decimal("25")
    insurance_fee: Decimal = Decimal("15")
    packaging_fee: Decimal = Decimal("20")
    tracking_fee: Decimal = Decimal("10")
    gst_rate: Decimal = Decimal("0.18")
    service_tax_rate: Decimal = Decimal("0.05")
    new_user_discount_rate: Decimal = Decimal("0.10")
    loyalty_discount_rate: Decimal = Decimal("0.05")
    loyalty_min_bookings: int = 5
    premium_discount_rate: Decimal = Decimal("0.15")
    quick_quote_spread: Decimal = Decimal("0.10")


class PricingEngine:
    """Computes price quotes. Stateless: safe to share between threads."""

    def __init__(self, config: PricingConfig | None = None) -> None:
        """Initialize with pricing constants (defaults to the standard tariff)."""
        self.config = config or PricingConfig()

    def quote(
        self,
        distance_km: float | Decimal,
        source_type: str,
        destination_type: str,
        pickup_time: datetime,
        user_tier: str = "new",
        prior_booking_count: int = 0,
    ) -> PriceQuote:
        """Compute the full price breakdown for a trip.

        Args:
            distance_km: Route length in kilometers, must be positive.
            source_type: Type of the source station ("railway" or "airport").
            destination_type: Type of the destination station.
            pickup_time: When the luggage is handed over; only its hour is used.
            user_tier: Customer tier ("new", "returning" or "premium").
            prior_booking_count: Number of earlier bookings by the customer.

        Raises:
            InvalidDistanceError: If the distance is not a positive finite number.
        """
        cfg = self.config
        distance = self._to_distance(distance_km)

        base_price = round_money(cfg.base_price)
        distance_price = round_money(distance * cfg.price_per_km)
        subtotal = round_money(base_price + distance_price)

        station_multiplier = self.station_multiplier(source_type, destination_type)
        distance_category, distance_multiplier = self._distance_band(distance)
        time_category, time_multiplier = self._time_band(pickup_time.hour)
        adjusted_price = round_money(
            subtotal * station_multiplier * distance_multiplier * time_multiplier
        )

        fees = ServiceFees(
            handling=round_money(cfg.handling_fee),
            insurance=round_money(cfg.insurance_fee),
            packaging=round_money(cfg.packaging_fee),
            tracking=round_money(cfg.tracking_fee),
        )
        pre_tax_total = round_money(adjusted_price + fees.total)

        discount = self._discount(pre_tax_total, user_tier, prior_booking_count)
        discounted_total = round_money(pre_tax_total - discount.amount)

        taxes = TaxBreakdown(
            gst_percentage=cfg.gst_rate * HUNDRED,
            gst=round_money(discounted_total * cfg.gst_rate),
            service_tax_percentage=cfg.service_tax_rate * HUNDRED,
            service_tax=round_money(discounted_total * cfg.service_tax_rate),
        )

        total = round_money(discounted_total + taxes.total)
        minimum_applied = total < cfg.minimum_charge
        maximum_applied = total > cfg.maximum_charge
        if minimum_applied:
            total = round_money(cfg.minimum_charge)
        elif maximum_applied:
            total = round_money(cfg.maximum_charge)

        logger.debug(
            f"Quote for {distance} km {source_type}-{destination_type} at hour "
            f"{pickup_time.hour} tier={user_tier}: subtotal={subtotal} adjusted={adjusted_price} "
            f"discount={discount.amount} taxes={taxes.total} total={total}"
        )

        return PriceQuote(
            distance_km=round_money(distance),
            base_price=base_price,
            distance_price=distance_price,
            subtotal=subtotal,
            station_multiplier=station_multiplier,
            distance_multiplier=distance_multiplier,
            distance_category=distance_category,
            time_multiplier=time_multiplier,
            time_category=time_category,
            adjusted_price=adjusted_price,
            fees=fees,
            pre_tax_total=pre_tax_total,
            discount=discount,
            discounted_total=discounted_total,
            taxes=taxes,
            total=total,
            currency=cfg.currency,
            minimum_charge_applied=minimum_applied,
            maximum_charge_applied=maximum_applied,
        )

    def quick_quote(
        self,
        distance_km: float | Decimal,
        source_type: str,
        destination_type: str,
        pickup_time: datetime,
    ) -> QuickQuote:
        """Estimate the price for a distance as a first-time customer would pay it.

        The returned range spreads the estimate by the configured percentage
        in both directions.
        """
        full = self.quote(distance_km, source_type, destination_type, pickup_time, "new", 0)
        spread = self.config.quick_quote_spread
        return QuickQuote(
            distance_km=full.distance_km,
            estimated_price=full.total,
            min_price=round_money(full.total * (1 - spread)),
            max_price=round_money(full.total * (1 + spread)),
            currency=full.currency,
        )

    def pricing_tiers(self) -> list[PricingTier]:
        """List the distance tiers from shortest to longest."""
        bands = list(reversed(self.config.distance_bands))
        tiers = [
            PricingTier(
                name=self.config.local_band_name,
                multiplier=Decimal("1.0"),
                min_km=Decimal("0"),
                max_km=bands[0].above_km if bands else None,
            )
        ]
        for index, band in enumerate(bands):
            upper = bands[index + 1].above_km if index + 1 < len(bands) else None
            tiers.append(
                PricingTier(
                    name=band.name, multiplier=band.multiplier, min_km=band.above_km, max_km=upper
                )
            )
        return tiers

    def pricing_tier(self, distance_km: float | Decimal) -> PricingTier:
        """Return the tier a distance falls into."""
        distance = self._to_distance(distance_km)
        tiers = self.pricing_tiers()
        for tier in reversed(tiers):
            if distance > tier.min_km:
                return tier
        return tiers[0]

    def station_multiplier(self, source_type: str, destination_type: str) -> Decimal:
        """Multiplier for a station-type pairing; unknown pairings are neutral."""
        key = f"{source_type}-{destination_type}"
        return self.config.station_multipliers.get(key, Decimal("1.0"))

    def _distance_band(self, distance: Decimal) -> tuple[str, Decimal]:
        for band in self.config.distance_bands:
            if distance > band.above_km:
                return band.name, band.multiplier
        return self.config.local_band_name, Decimal("1.0")

    def _time_band(self, hour: int) -> tuple[str, Decimal]:
        for band in self.config.time_bands:
            if band.contains(hour):
                return band.name, band.multiplier
        return self.config.standard_time_name, Decimal("1.0")

    def _discount(
        self, pre_tax_total: Decimal, user_tier: str, prior_booking_count: int
    ) -> DiscountBreakdown:
        cfg = self.config
        if user_tier == "new":
            kind, rate = "new_user", cfg.new_user_discount_rate
        elif user_tier == "returning" and prior_booking_count >= cfg.loyalty_min_bookings:
            kind, rate = "loyalty", cfg.loyalty_discount_rate
        elif user_tier == "premium":
            kind, rate = "premium", cfg.premium_discount_rate
        else:
            if user_tier != "returning":
                logger.warning(f"Unrecognised user tier {user_tier!r}, no discount applied")
            return DiscountBreakdown(kind=None, percentage=Decimal("0"), amount=Decimal("0.00"))
        return DiscountBreakdown(
            kind=kind, percentage=rate * HUNDRED, amount=round_money(pre_tax_total * rate)
        )

    @staticmethod
    def _to_distance(distance_km: float | Decimal) -> Decimal:
        if isinstance(distance_km, bool) or not isinstance(distance_km, (int, float, Decimal)):
            raise InvalidDistanceError("Distance must be a number", field="distance_km")
        if isinstance(distance_km, float) and not math.isfinite(distance_km):
            raise InvalidDistanceError("Distance must be a finite number", field="distance_km")
        distance = Decimal(str(distance_km))
        if not distance.is_finite():
            raise InvalidDistanceError("Distance must be a finite number", field="distance_km")
        if distance <= 0:
            raise InvalidDistanceError("Distance must be greater than 0", field="distance_km")
        return distance
