"""Booking repository port."""

from typing import Protocol

from travellite.domain.models.booking import Booking


class BookingRepository(Protocol):
    """Port for storing bookings by id."""

    def add(self, booking: Booking) -> None:
        """Store a new booking."""
        ...

    def get(self, booking_id: str) -> Booking | None:
        """Get a booking by its internal id."""
        ...

    def find_by_code(self, booking_code: str) -> Booking | None:
        """Get a booking by its human-facing booking code."""
        ...

    def save(self, booking: Booking) -> None:
        """Replace the stored version of an existing booking."""
        ...

    def list_for_customer(self, customer_id: str) -> list[Booking]:
        """List all bookings made by a customer."""
        ...

    def list_for_station(self, station_id: str) -> list[Booking]:
        """List all bookings starting or ending at a station."""
        ...

    def list_all(self) -> list[Booking]:
        """List every stored booking."""
        ...
