"""Booking lifecycle states, events and the transition table."""

from enum import StrEnum


class BookingStatus(StrEnum):
    """Lifecycle state of a booking."""

    PENDING_PAYMENT = "pending_payment"
    PAYMENT_CONFIRMED = "payment_confirmed"
    LUGGAGE_COLLECTED = "luggage_collected"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class BookingEvent(StrEnum):
    """Action that moves a booking from one status to another."""

    CONFIRM_PAYMENT = "confirm_payment"
    ACCEPT_LUGGAGE = "accept_luggage"
    DISPATCH = "dispatch"
    DELIVER = "deliver"
    CANCEL = "cancel"


class OperationType(StrEnum):
    """What a counter does with a booking: hand-over at the source or at the destination."""

    PICKUP = "pickup"
    DELIVERY = "delivery"


INITIAL_STATUS = BookingStatus.PENDING_PAYMENT

# (current status, event) -> next status. Anything not listed is rejected.
TRANSITIONS: dict[tuple[BookingStatus, BookingEvent], BookingStatus] = {
    (BookingStatus.PENDING_PAYMENT, BookingEvent.CONFIRM_PAYMENT): BookingStatus.PAYMENT_CONFIRMED,
    (BookingStatus.PAYMENT_CONFIRMED, BookingEvent.ACCEPT_LUGGAGE): BookingStatus.LUGGAGE_COLLECTED,
    (BookingStatus.LUGGAGE_COLLECTED, BookingEvent.DISPATCH): BookingStatus.IN_TRANSIT,
    (BookingStatus.IN_TRANSIT, BookingEvent.DELIVER): BookingStatus.DELIVERED,
    (BookingStatus.PENDING_PAYMENT, BookingEvent.CANCEL): BookingStatus.CANCELLED,
    (BookingStatus.PAYMENT_CONFIRMED, BookingEvent.CANCEL): BookingStatus.CANCELLED,
}


def allowed_events(status: BookingStatus) -> set[BookingEvent]:
    """Return the events accepted in the given status."""
    return {event for (current, event) in TRANSITIONS if current == status}


def is_terminal(status: BookingStatus) -> bool:
    """Check whether no further transition leaves the given status."""
    return not allowed_events(status)
