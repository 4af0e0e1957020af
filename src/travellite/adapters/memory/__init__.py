"""In-memory storage adapters."""

from travellite.adapters.memory.in_memory_booking_repository import InMemoryBookingRepository
from travellite.adapters.memory.in_memory_image_store import InMemoryImageStore

__all__ = ["InMemoryBookingRepository", "InMemoryImageStore"]
