"""Booking domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import StrEnum

from travellite.domain.models.booking_status import BookingStatus
from travellite.domain.models.price_quote import PriceQuote


class PhotoAngle(StrEnum):
    """Side of the luggage shown in an intake photo."""

    FRONT = "front"
    BACK = "back"
    LEFT = "left"
    RIGHT = "right"


REQUIRED_PHOTO_ANGLES: tuple[PhotoAngle, ...] = (
    PhotoAngle.FRONT,
    PhotoAngle.BACK,
    PhotoAngle.LEFT,
    PhotoAngle.RIGHT,
)


class PaymentMethod(StrEnum):
    """Payment instrument chosen by the customer."""

    CARD = "card"
    UPI = "upi"
    NETBANKING = "netbanking"
    WALLET = "wallet"


class PaymentStatus(StrEnum):
    """State of the payment attached to a booking."""

    PENDING = "pending"
    COMPLETED = "completed"


class RiskLevel(StrEnum):
    """Declared risk of a security checklist item."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass(frozen=True)
class LuggagePhoto:
    """Reference to a stored luggage photo taken from one angle."""

    angle: PhotoAngle
    url: str


@dataclass(frozen=True)
class SecurityItem:
    """Item declared on the security checklist."""

    item_id: str
    category_id: str
    name: str
    estimated_value: Decimal = Decimal("0")
    risk_level: RiskLevel = RiskLevel.LOW


@dataclass(frozen=True)
class EmergencyContact:
    """Person to reach if the customer cannot be contacted."""

    name: str
    phone: str
    relationship: str


@dataclass(frozen=True)
class ContactInfo:
    """Customer contact details for a booking."""

    phone: str
    email: str | None = None
    address: str | None = None
    emergency_contact: EmergencyContact | None = None


@dataclass(frozen=True)
class PaymentInfo:
    """Payment record of a booking."""

    method: PaymentMethod | None
    amount: Decimal
    status: PaymentStatus = PaymentStatus.PENDING
    transaction_id: str | None = None
    paid_at: datetime | None = None


@dataclass(frozen=True)
class TrackingEvent:
    """Timestamped record of a booking status change."""

    status: str
    location: str | None
    timestamp: datetime
    notes: str = ""


@dataclass(frozen=True)
class BookingRequest:
    """Data submitted by a customer to create a booking.

    Optional fields are validated by the lifecycle so that a missing value is
    reported with the name of the field.
    """

    customer_id: str
    source_station_id: str
    destination_station_id: str
    distance_km: Decimal
    quote: PriceQuote | None
    contact_info: ContactInfo | None
    luggage_photos: tuple[LuggagePhoto, ...]
    security_items: tuple[SecurityItem, ...] = ()
    payment_method: PaymentMethod | None = None


@dataclass(frozen=True)
class Booking:
    """A customer's luggage transport booking.

    Instances are never modified; lifecycle transitions produce a new Booking
    with an updated status, tracking history and (on payment) payment info.
    """

    id: str
    booking_code: str
    customer_id: str
    source_station_id: str
    destination_station_id: str
    distance_km: Decimal
    quote: PriceQuote
    contact_info: ContactInfo
    luggage_photos: tuple[LuggagePhoto, ...]
    status: BookingStatus
    payment_info: PaymentInfo
    tracking_history: tuple[TrackingEvent, ...]
    created_at: datetime
    updated_at: datetime
    security_items: tuple[SecurityItem, ...] = field(default=())

    @property
    def current_location(self) -> str | None:
        """Location of the most recent tracking event that had one."""
        for event in reversed(self.tracking_history):
            if event.location:
                return event.location
        return None

    @property
    def total_estimated_value(self) -> Decimal:
        """Declared value of all security checklist items."""
        return sum((item.estimated_value for item in self.security_items), Decimal("0"))


@dataclass(frozen=True)
class StationWorkload:
    """Counts of bookings a station counter has to handle or has handled."""

    pending_pickups: int
    pending_deliveries: int
    completed_pickups: int
    completed_deliveries: int


@dataclass(frozen=True)
class StatusTotals:
    """Number and summed quote totals of a customer's bookings in one status."""

    count: int
    total_amount: Decimal


@dataclass(frozen=True)
class BookingStats:
    """A customer's booking history in numbers.

    ``total_spent`` only counts bookings whose payment has completed.
    """

    by_status: dict[BookingStatus, StatusTotals]
    total_bookings: int
    total_spent: Decimal
