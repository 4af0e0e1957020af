"""System adapters: wall clock and identifier generation."""

from travellite.adapters.system.clock import SystemClock
from travellite.adapters.system.identifiers import (
    RandomBookingCodeGenerator,
    RandomTransactionIdGenerator,
)

__all__ = ["RandomBookingCodeGenerator", "RandomTransactionIdGenerator", "SystemClock"]
