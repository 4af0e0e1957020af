"""Thread-safe in-memory booking repository."""

import threading

from travellite.domain.errors import BookingNotFoundError, ValidationError
from travellite.domain.models.booking import Booking


class InMemoryBookingRepository:
    """Stores bookings in dicts keyed by id and by booking code."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._bookings: dict[str, Booking] = {}
        self._ids_by_code: dict[str, str] = {}

    def add(self, booking: Booking) -> None:
        with self._lock:
            if booking.id in self._bookings:
                raise ValidationError(f"Booking {booking.id} already exists", field="id")
            if booking.booking_code in self._ids_by_code:
                raise ValidationError(
                    f"Booking code {booking.booking_code} already in use", field="booking_code"
                )
            self._bookings[booking.id] = booking
            self._ids_by_code[booking.booking_code] = booking.id

    def get(self, booking_id: str) -> Booking | None:
        with self._lock:
            return self._bookings.get(booking_id)

    def find_by_code(self, booking_code: str) -> Booking | None:
        with self._lock:
            booking_id = self._ids_by_code.get(booking_code)
            return self._bookings.get(booking_id) if booking_id else None

    def save(self, booking: Booking) -> None:
        with self._lock:
            if booking.id not in self._bookings:
                raise BookingNotFoundError(booking.id)
            self._bookings[booking.id] = booking

    def list_for_customer(self, customer_id: str) -> list[Booking]:
        with self._lock:
            return [b for b in self._bookings.values() if b.customer_id == customer_id]

    def list_for_station(self, station_id: str) -> list[Booking]:
        with self._lock:
            return [
                b
                for b in self._bookings.values()
                if station_id in (b.source_station_id, b.destination_station_id)
            ]

    def list_all(self) -> list[Booking]:
        with self._lock:
            return list(self._bookings.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._bookings)
