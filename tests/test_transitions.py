"""Tests for the booking status transition table."""

import pytest

from travellite.application.services.booking_lifecycle import next_status
from travellite.domain.errors import InvalidStateError
from travellite.domain.models.booking_status import (
    INITIAL_STATUS,
    TRANSITIONS,
    BookingEvent,
    BookingStatus,
    allowed_events,
    is_terminal,
)


def test_initial_status_is_pending_payment() -> None:
    """Given a new booking, when checking its status, then it awaits payment."""
    assert INITIAL_STATUS == BookingStatus.PENDING_PAYMENT


def test_happy_path_reaches_delivered() -> None:
    """Given the forward events in order, when applying them, then the booking is delivered."""
    status = INITIAL_STATUS
    for event in (
        BookingEvent.CONFIRM_PAYMENT,
        BookingEvent.ACCEPT_LUGGAGE,
        BookingEvent.DISPATCH,
        BookingEvent.DELIVER,
    ):
        status = next_status(status, event)

    assert status == BookingStatus.DELIVERED


@pytest.mark.parametrize(
    ("status", "cancellable"),
    [
        (BookingStatus.PENDING_PAYMENT, True),
        (BookingStatus.PAYMENT_CONFIRMED, True),
        (BookingStatus.LUGGAGE_COLLECTED, False),
        (BookingStatus.IN_TRANSIT, False),
        (BookingStatus.DELIVERED, False),
        (BookingStatus.CANCELLED, False),
    ],
)
def test_cancel_only_before_hand_over(status: BookingStatus, cancellable: bool) -> None:
    """Given a status, when checking allowed events, then cancel is only allowed pre hand-over."""
    assert (BookingEvent.CANCEL in allowed_events(status)) is cancellable


def test_delivered_and_cancelled_are_terminal() -> None:
    """Given the end states, when checking for outgoing transitions, then there are none."""
    terminal = {status for status in BookingStatus if is_terminal(status)}

    assert terminal == {BookingStatus.DELIVERED, BookingStatus.CANCELLED}


def test_every_status_except_initial_is_reachable() -> None:
    """Given the transition table, when collecting targets, then all later statuses appear."""
    targets = set(TRANSITIONS.values())

    assert targets == set(BookingStatus) - {INITIAL_STATUS}


def test_unlisted_transition_is_rejected() -> None:
    """Given an event not allowed in the status, when looking it up, then InvalidStateError."""
    with pytest.raises(InvalidStateError) as exc_info:
        next_status(BookingStatus.DELIVERED, BookingEvent.CANCEL)

    assert exc_info.value.field == "status"
    assert "delivered" in exc_info.value.message


def test_custom_rejection_message_is_used() -> None:
    """Given a message, when a transition is rejected, then the message is reported."""
    with pytest.raises(InvalidStateError, match="not ready for dispatch"):
        next_status(
            BookingStatus.PAYMENT_CONFIRMED,
            BookingEvent.DISPATCH,
            "Booking is not ready for dispatch",
        )
