"""Protocols for generating human-facing identifiers."""

from datetime import datetime
from typing import Protocol


class BookingCodeGenerator(Protocol):
    """Generates booking codes of the form ``TL`` + 8 digits + uppercase letters."""

    def next_code(self, now: datetime) -> str:
        """Generate a booking code.

        Args:
            now: Current time, used as the digit part of the code.

        Returns:
            A booking code, not guaranteed to be unique.
        """
        ...


class TransactionIdGenerator(Protocol):
    """Generates payment transaction ids."""

    def next_transaction_id(self, now: datetime) -> str:
        """Generate a transaction id for a payment made at ``now``."""
        ...
