"""Domain models for luggage bookings."""

from travellite.domain.models.booking import (
    REQUIRED_PHOTO_ANGLES,
    Booking,
    BookingRequest,
    BookingStats,
    ContactInfo,
    EmergencyContact,
    LuggagePhoto,
    PaymentInfo,
    PaymentMethod,
    PaymentStatus,
    PhotoAngle,
    RiskLevel,
    SecurityItem,
    StationWorkload,
    StatusTotals,
    TrackingEvent,
)
from travellite.domain.models.booking_status import (
    INITIAL_STATUS,
    TRANSITIONS,
    BookingEvent,
    BookingStatus,
    OperationType,
)
from travellite.domain.models.checklist import (
    RISK_ORDER,
    ChecklistItem,
    ChecklistStats,
    ItemCategory,
)
from travellite.domain.models.error_details import ErrorDetails
from travellite.domain.models.geo_coordinate import GeoCoordinate
from travellite.domain.models.price_quote import (
    DiscountBreakdown,
    PriceQuote,
    PricingTier,
    QuickQuote,
    ServiceFees,
    TaxBreakdown,
)
from travellite.domain.models.principal import CUSTOMER_TIERS, Principal, PrincipalRole
from travellite.domain.models.route_quote import RouteQuote, TravelTimeEstimate
from travellite.domain.models.station import (
    OperatingHours,
    StateSummary,
    Station,
    StationType,
)

__all__ = [
    "CUSTOMER_TIERS",
    "INITIAL_STATUS",
    "REQUIRED_PHOTO_ANGLES",
    "RISK_ORDER",
    "TRANSITIONS",
    "Booking",
    "BookingEvent",
    "BookingRequest",
    "BookingStats",
    "BookingStatus",
    "ChecklistItem",
    "ChecklistStats",
    "ContactInfo",
    "DiscountBreakdown",
    "EmergencyContact",
    "ErrorDetails",
    "GeoCoordinate",
    "ItemCategory",
    "LuggagePhoto",
    "OperatingHours",
    "OperationType",
    "PaymentInfo",
    "PaymentMethod",
    "PaymentStatus",
    "PhotoAngle",
    "PriceQuote",
    "Principal",
    "PrincipalRole",
    "PricingTier",
    "QuickQuote",
    "RiskLevel",
    "RouteQuote",
    "SecurityItem",
    "ServiceFees",
    "StateSummary",
    "Station",
    "StationType",
    "StationWorkload",
    "StatusTotals",
    "TaxBreakdown",
    "TrackingEvent",
    "TravelTimeEstimate",
]
