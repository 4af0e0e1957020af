"""Booking lifecycle: creation, guarded status transitions and tracking history."""

import logging
import re
import threading
import uuid
from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from travellite.application.locks import KeyedLock
from travellite.domain.errors import (
    BookingNotFoundError,
    ForbiddenError,
    InvalidStateError,
    ValidationError,
)
from travellite.domain.models.booking import (
    REQUIRED_PHOTO_ANGLES,
    Booking,
    BookingRequest,
    BookingStats,
    PaymentInfo,
    PaymentMethod,
    PaymentStatus,
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
from travellite.domain.models.principal import Principal, PrincipalRole

if TYPE_CHECKING:
    from travellite.domain.contracts import BookingCodeGenerator, Clock, TransactionIdGenerator
    from travellite.domain.ports import BookingRepository, ChecklistCatalog, StationCatalog

logger = logging.getLogger(__name__)

BOOKING_CODE_PATTERN = re.compile(r"^TL\d{8}[A-Z]{2,4}$")

BOOKING_CREATED = "booking_created"


def is_valid_booking_code(code: str) -> bool:
    """Check a booking code against the ``TL`` + 8 digits + 2-4 letters format."""
    return BOOKING_CODE_PATTERN.fullmatch(code) is not None


def next_status(
    current: BookingStatus, event: BookingEvent, message: str | None = None
) -> BookingStatus:
    """Look up the status an event leads to.

    Raises:
        InvalidStateError: If the transition table has no edge for (current, event).
    """
    target = TRANSITIONS.get((current, event))
    if target is None:
        action = event.value.replace("_", " ")
        raise InvalidStateError(
            message or f"Cannot {action} a booking in status {current.value}",
            field="status",
        )
    return target


class BookingLifecycle:
    """Creates bookings and moves them through their lifecycle.

    Every transition on a booking runs under that booking's lock, so two
    concurrent requests can never both act on the same observed status.
    """

    def __init__(
        self,
        repository: "BookingRepository",
        catalog: "StationCatalog",
        clock: "Clock",
        code_generator: "BookingCodeGenerator",
        transaction_ids: "TransactionIdGenerator",
        max_code_attempts: int = 5,
        checklist: "ChecklistCatalog | None" = None,
    ) -> None:
        """Initialize with storage, station lookup and identifier sources.

        When a checklist catalog is given, declared security items must name
        one of its items and that item's category.
        """
        self._repository = repository
        self._catalog = catalog
        self._clock = clock
        self._code_generator = code_generator
        self._transaction_ids = transaction_ids
        self._max_code_attempts = max_code_attempts
        self._checklist = checklist
        self._locks = KeyedLock()
        self._create_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def create(self, request: BookingRequest) -> Booking:
        """Validate a booking request and store it in the initial status.

        Raises:
            ValidationError: Naming the first missing or invalid field.
            StationNotFoundError: If either station is unknown to the catalog.
        """
        if request.source_station_id == request.destination_station_id:
            raise ValidationError(
                "Source and destination stations cannot be the same",
                field="destination_station_id",
            )
        self._catalog.lookup(request.source_station_id)
        self._catalog.lookup(request.destination_station_id)

        distance = _positive_distance(request.distance_km)
        self._validate_photos(request)
        if request.contact_info is None or not (request.contact_info.phone or "").strip():
            raise ValidationError("Contact phone number is required", field="contact_info.phone")
        if request.quote is None:
            raise ValidationError("A computed price quote is required", field="quote")
        self._validate_security_items(request)

        with self._create_lock:
            now = self._clock.now()
            booking_code = self._unique_booking_code(now)
            booking = Booking(
                id=uuid.uuid4().hex,
                booking_code=booking_code,
                customer_id=request.customer_id,
                source_station_id=request.source_station_id,
                destination_station_id=request.destination_station_id,
                distance_km=distance,
                quote=request.quote,
                contact_info=request.contact_info,
                luggage_photos=tuple(request.luggage_photos),
                security_items=tuple(request.security_items),
                status=INITIAL_STATUS,
                payment_info=PaymentInfo(method=request.payment_method, amount=request.quote.total),
                tracking_history=(
                    TrackingEvent(
                        status=BOOKING_CREATED,
                        location=request.source_station_id,
                        timestamp=now,
                        notes="Booking created successfully",
                    ),
                ),
                created_at=now,
                updated_at=now,
            )
            self._repository.add(booking)

        logger.info(
            f"Created booking {booking.booking_code} for customer {booking.customer_id}: "
            f"{booking.source_station_id} -> {booking.destination_station_id}, "
            f"total {booking.quote.total}"
        )
        return booking

    def _validate_photos(self, request: BookingRequest) -> None:
        photos = request.luggage_photos or ()
        if len(photos) != len(REQUIRED_PHOTO_ANGLES):
            raise ValidationError("Exactly 4 luggage images are required", field="luggage_photos")

        provided = [photo.angle for photo in photos]
        missing = [angle for angle in REQUIRED_PHOTO_ANGLES if angle not in provided]
        if missing:
            raise ValidationError(
                f"Missing required image angles: {', '.join(missing)}", field="luggage_photos"
            )
        for photo in photos:
            if not photo.url:
                raise ValidationError(
                    f"Image for angle {photo.angle} has no URL", field="luggage_photos"
                )

    def _validate_security_items(self, request: BookingRequest) -> None:
        if self._checklist is None:
            return
        for index, declared in enumerate(request.security_items):
            item = self._checklist.get_item(declared.item_id)
            if item is None:
                raise ValidationError(
                    f"Unknown checklist item '{declared.item_id}'",
                    field=f"security_items.{index}.item_id",
                )
            if item.category_id != declared.category_id:
                raise ValidationError(
                    f"Item '{declared.item_id}' is not in category '{declared.category_id}'",
                    field=f"security_items.{index}.category_id",
                )
            if declared.estimated_value < 0:
                raise ValidationError(
                    "Estimated value cannot be negative",
                    field=f"security_items.{index}.estimated_value",
                )

    def _unique_booking_code(self, now: datetime) -> str:
        for _ in range(self._max_code_attempts):
            code = self._code_generator.next_code(now)
            if not is_valid_booking_code(code):
                raise ValidationError(
                    f"Malformed booking code generated: {code!r}", field="booking_code"
                )
            if self._repository.find_by_code(code) is None:
                return code
            logger.debug(f"Booking code {code} already taken, generating another")
        raise ValidationError(
            f"Could not generate a unique booking code after {self._max_code_attempts} attempts",
            field="booking_code",
        )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def confirm_payment(self, booking_ref: str, payment_method: PaymentMethod) -> Booking:
        """Record a completed payment: pending_payment -> payment_confirmed."""
        booking_id = self._resolve_id(booking_ref)
        with self._locks.hold(booking_id):
            booking = self._load(booking_id)
            status = self._transition(
                booking,
                BookingEvent.CONFIRM_PAYMENT,
                f"Booking is not awaiting payment (status: {booking.status.value})",
            )
            now = self._clock.now()
            payment_info = PaymentInfo(
                method=payment_method,
                amount=booking.quote.total,
                status=PaymentStatus.COMPLETED,
                transaction_id=self._transaction_ids.next_transaction_id(now),
                paid_at=now,
            )
            updated = self._advance(
                replace(booking, payment_info=payment_info),
                status,
                location=booking.source_station_id,
                notes="Payment completed successfully",
                now=now,
            )
        logger.info(
            f"Payment {payment_info.transaction_id} confirmed for booking {booking.booking_code}"
        )
        return updated

    def accept_luggage(self, booking_ref: str, staff_station_id: str, notes: str = "") -> Booking:
        """Hand-over at the source counter: payment_confirmed -> luggage_collected."""
        booking_id = self._resolve_id(booking_ref)
        with self._locks.hold(booking_id):
            booking = self._load(booking_id)
            if staff_station_id != booking.source_station_id:
                self._reject_station(booking, staff_station_id, "pickup")
            status = self._transition(
                booking, BookingEvent.ACCEPT_LUGGAGE, "Booking is not ready for luggage acceptance"
            )
            return self._advance(
                booking,
                status,
                location=staff_station_id,
                notes=_join_notes("Luggage collected at counter.", notes),
            )

    def dispatch(self, booking_ref: str, staff_station_id: str, notes: str = "") -> Booking:
        """Send collected luggage on its way: luggage_collected -> in_transit."""
        booking_id = self._resolve_id(booking_ref)
        with self._locks.hold(booking_id):
            booking = self._load(booking_id)
            if staff_station_id != booking.source_station_id:
                self._reject_station(booking, staff_station_id, "dispatch")
            status = self._transition(
                booking, BookingEvent.DISPATCH, "Booking is not ready for dispatch"
            )
            return self._advance(
                booking,
                status,
                location=staff_station_id,
                notes=_join_notes(
                    f"Luggage dispatched to {booking.destination_station_id}.", notes
                ),
            )

    def deliver(
        self,
        booking_ref: str,
        staff_station_id: str,
        customer_verification: str = "",
        notes: str = "",
    ) -> Booking:
        """Hand luggage back at the destination counter: in_transit -> delivered."""
        booking_id = self._resolve_id(booking_ref)
        with self._locks.hold(booking_id):
            booking = self._load(booking_id)
            if staff_station_id != booking.destination_station_id:
                self._reject_station(booking, staff_station_id, "delivery")
            status = self._transition(
                booking, BookingEvent.DELIVER, "Booking is not ready for delivery"
            )
            verification = f"Customer: {customer_verification}." if customer_verification else ""
            return self._advance(
                booking,
                status,
                location=staff_station_id,
                notes=_join_notes("Luggage delivered.", verification, notes),
            )

    def cancel(
        self,
        booking_ref: str,
        reason: str = "",
        requested_by: Principal | None = None,
    ) -> Booking:
        """Cancel a booking that has not been handed over yet.

        Raises:
            ForbiddenError: If a customer tries to cancel someone else's booking.
            InvalidStateError: If the luggage has already been collected.
        """
        booking_id = self._resolve_id(booking_ref)
        with self._locks.hold(booking_id):
            booking = self._load(booking_id)
            if (
                requested_by is not None
                and requested_by.role is PrincipalRole.CUSTOMER
                and requested_by.id != booking.customer_id
            ):
                raise ForbiddenError("Access denied", field="booking_id")
            status = self._transition(
                booking, BookingEvent.CANCEL, "Booking cannot be cancelled at this stage"
            )
            return self._advance(
                booking,
                status,
                location=booking.current_location,
                notes=reason or "Cancelled by user",
            )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def lookup(self, booking_ref: str, staff_station_id: str) -> tuple[Booking, OperationType]:
        """Find a booking for a counter and tell whether it is a pickup or a delivery there.

        Raises:
            ForbiddenError: If the booking neither starts nor ends at the station.
        """
        booking = self._load(self._resolve_id(booking_ref))
        operation = _operation_at(booking, staff_station_id)
        if operation is None:
            raise ForbiddenError("Booking not associated with your station", field="station_id")
        return booking, operation

    def get(self, booking_ref: str, requested_by: Principal | None = None) -> Booking:
        """Fetch a booking, enforcing that callers only see bookings they are involved in."""
        booking = self._load(self._resolve_id(booking_ref))
        if requested_by is None or requested_by.role is PrincipalRole.ADMIN:
            return booking
        if requested_by.role is PrincipalRole.CUSTOMER and requested_by.id == booking.customer_id:
            return booking
        if requested_by.is_staff and _operation_at(booking, requested_by.station_id) is not None:
            return booking
        raise ForbiddenError("Access denied", field="booking_id")

    def list_for_customer(
        self, customer_id: str, status: BookingStatus | None = None
    ) -> list[Booking]:
        """List a customer's bookings, newest first."""
        bookings = [
            booking
            for booking in self._repository.list_for_customer(customer_id)
            if status is None or booking.status == status
        ]
        return sorted(bookings, key=lambda b: b.created_at, reverse=True)

    def booking_stats(self, customer_id: str) -> BookingStats:
        """Count and total a customer's bookings per status."""
        counts: dict[BookingStatus, int] = {}
        amounts: dict[BookingStatus, Decimal] = {}
        total_spent = Decimal("0")
        bookings = self._repository.list_for_customer(customer_id)
        for booking in bookings:
            counts[booking.status] = counts.get(booking.status, 0) + 1
            amounts[booking.status] = (
                amounts.get(booking.status, Decimal("0")) + booking.quote.total
            )
            if booking.payment_info.status == PaymentStatus.COMPLETED:
                total_spent += booking.quote.total
        return BookingStats(
            by_status={
                status: StatusTotals(count=counts[status], total_amount=amounts[status])
                for status in counts
            },
            total_bookings=len(bookings),
            total_spent=total_spent,
        )

    def pricing_profile(self, principal: Principal) -> tuple[str, int]:
        """Tier and prior booking count to price a customer's next booking with.

        Both come from server-side records: the tier from the principal and the
        count from the repository, ignoring cancelled bookings. A "new" customer
        who already has bookings is priced as "returning".
        """
        prior = sum(
            1
            for booking in self._repository.list_for_customer(principal.id)
            if booking.status != BookingStatus.CANCELLED
        )
        tier = principal.tier
        if tier == "new" and prior > 0:
            tier = "returning"
        return tier, prior

    def list_for_station(
        self,
        station_id: str,
        operation_type: OperationType | None = None,
        status: BookingStatus | None = None,
    ) -> list[tuple[Booking, OperationType]]:
        """List bookings a station counter handles, newest first, with their operation type."""
        result: list[tuple[Booking, OperationType]] = []
        for booking in self._repository.list_for_station(station_id):
            operation = _operation_at(booking, station_id)
            if operation is None:
                continue
            if operation_type is not None and operation != operation_type:
                continue
            if status is not None and booking.status != status:
                continue
            result.append((booking, operation))
        result.sort(key=lambda pair: pair[0].created_at, reverse=True)
        return result

    def station_summary(self, station_id: str) -> StationWorkload:
        """Count pending and completed hand-overs at a station."""
        after_pickup = {
            BookingStatus.LUGGAGE_COLLECTED,
            BookingStatus.IN_TRANSIT,
            BookingStatus.DELIVERED,
        }
        pending_pickups = pending_deliveries = completed_pickups = completed_deliveries = 0
        for booking in self._repository.list_for_station(station_id):
            if booking.source_station_id == station_id:
                if booking.status == BookingStatus.PAYMENT_CONFIRMED:
                    pending_pickups += 1
                elif booking.status in after_pickup:
                    completed_pickups += 1
            if booking.destination_station_id == station_id:
                if booking.status == BookingStatus.IN_TRANSIT:
                    pending_deliveries += 1
                elif booking.status == BookingStatus.DELIVERED:
                    completed_deliveries += 1
        return StationWorkload(
            pending_pickups=pending_pickups,
            pending_deliveries=pending_deliveries,
            completed_pickups=completed_pickups,
            completed_deliveries=completed_deliveries,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _resolve_id(self, booking_ref: str) -> str:
        """Map a booking id or booking code to the internal id."""
        booking = self._repository.get(booking_ref)
        if booking is None and is_valid_booking_code(booking_ref):
            booking = self._repository.find_by_code(booking_ref)
        if booking is None:
            raise BookingNotFoundError(booking_ref)
        return booking.id

    def _load(self, booking_id: str) -> Booking:
        booking = self._repository.get(booking_id)
        if booking is None:
            raise BookingNotFoundError(booking_id)
        return booking

    def _transition(self, booking: Booking, event: BookingEvent, message: str) -> BookingStatus:
        try:
            return next_status(booking.status, event, message)
        except InvalidStateError:
            logger.warning(
                f"Rejected {event.value} on booking {booking.booking_code} "
                f"in status {booking.status.value}"
            )
            raise

    def _reject_station(self, booking: Booking, station_id: str, operation: str) -> None:
        logger.warning(
            f"Station {station_id} attempted {operation} of booking {booking.booking_code} "
            f"({booking.source_station_id} -> {booking.destination_station_id})"
        )
        raise ForbiddenError(
            f"This booking is not for luggage {operation} at your station", field="station_id"
        )

    def _advance(
        self,
        booking: Booking,
        status: BookingStatus,
        location: str | None,
        notes: str,
        now: datetime | None = None,
    ) -> Booking:
        """Store the booking in its new status with one more tracking event."""
        now = now or self._clock.now()
        if booking.tracking_history:
            # Keep the history non-decreasing even if the clock steps back
            now = max(now, booking.tracking_history[-1].timestamp)
        event = TrackingEvent(status=status.value, location=location, timestamp=now, notes=notes)
        updated = replace(
            booking,
            status=status,
            tracking_history=(*booking.tracking_history, event),
            updated_at=now,
        )
        self._repository.save(updated)
        logger.info(f"Booking {booking.booking_code}: {booking.status.value} -> {status.value}")
        return updated


def _operation_at(booking: Booking, station_id: str | None) -> OperationType | None:
    if station_id is None:
        return None
    if station_id == booking.source_station_id:
        return OperationType.PICKUP
    if station_id == booking.destination_station_id:
        return OperationType.DELIVERY
    return None


def _join_notes(*parts: str) -> str:
    return " ".join(part.strip() for part in parts if part and part.strip())


def _positive_distance(value: object) -> Decimal:
    if value is None or isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise ValidationError("Valid distance is required", field="distance_km")
    distance = Decimal(str(value))
    if not distance.is_finite() or distance <= 0:
        raise ValidationError("Valid distance is required", field="distance_km")
    return distance
