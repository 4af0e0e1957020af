"""Adapters layer - external system integrations."""

from travellite.adapters.auth import StaticTokenAuthenticator
from travellite.adapters.catalog import InMemoryStationCatalog
from travellite.adapters.config import AppConfig
from travellite.adapters.memory import InMemoryBookingRepository, InMemoryImageStore
from travellite.adapters.system import (
    RandomBookingCodeGenerator,
    RandomTransactionIdGenerator,
    SystemClock,
)

__all__ = [
    "AppConfig",
    "InMemoryBookingRepository",
    "InMemoryImageStore",
    "InMemoryStationCatalog",
    "RandomBookingCodeGenerator",
    "RandomTransactionIdGenerator",
    "StaticTokenAuthenticator",
    "SystemClock",
]
