"""Contracts for infrastructure the core depends on."""

from travellite.domain.contracts.clock import Clock
from travellite.domain.contracts.identifier_generator import (
    BookingCodeGenerator,
    TransactionIdGenerator,
)

__all__ = ["BookingCodeGenerator", "Clock", "TransactionIdGenerator"]
