"""Price quote domain models."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class ServiceFees:
    """Fixed service fees charged on every booking."""

    handling: Decimal
    insurance: Decimal
    packaging: Decimal
    tracking: Decimal

    @property
    def total(self) -> Decimal:
        """Sum of all service fees."""
        return self.handling + self.insurance + self.packaging + self.tracking


@dataclass(frozen=True)
class DiscountBreakdown:
    """Customer discount applied to the pre-tax total.

    ``kind`` is None when no discount applies.
    """

    kind: str | None
    percentage: Decimal
    amount: Decimal


@dataclass(frozen=True)
class TaxBreakdown:
    """Taxes levied on the discounted total."""

    gst_percentage: Decimal
    gst: Decimal
    service_tax_percentage: Decimal
    service_tax: Decimal

    @property
    def total(self) -> Decimal:
        """Sum of all taxes."""
        return self.gst + self.service_tax


@dataclass(frozen=True)
class PriceQuote:
    """Fully computed price breakdown for one route, pickup time and customer tier.

    Every amount is already rounded to two decimal places.
    """

    distance_km: Decimal
    base_price: Decimal
    distance_price: Decimal
    subtotal: Decimal
    station_multiplier: Decimal
    distance_multiplier: Decimal
    distance_category: str
    time_multiplier: Decimal
    time_category: str
    adjusted_price: Decimal
    fees: ServiceFees
    pre_tax_total: Decimal
    discount: DiscountBreakdown
    discounted_total: Decimal
    taxes: TaxBreakdown
    total: Decimal
    currency: str
    minimum_charge_applied: bool = False
    maximum_charge_applied: bool = False

    @property
    def surcharges(self) -> Decimal:
        """Amount added on top of the subtotal by the multipliers."""
        return self.adjusted_price - self.subtotal


@dataclass(frozen=True)
class QuickQuote:
    """Simplified estimate used for distance-only price previews."""

    distance_km: Decimal
    estimated_price: Decimal
    min_price: Decimal
    max_price: Decimal
    currency: str


@dataclass(frozen=True)
class PricingTier:
    """Distance band with its price multiplier.

    ``max_km`` is None for the open-ended top tier.
    """

    name: str
    multiplier: Decimal
    min_km: Decimal
    max_km: Decimal | None
