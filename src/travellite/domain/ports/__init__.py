"""Ports (interfaces) for the ports-and-adapters architecture."""

from travellite.domain.ports.authenticator import Authenticator
from travellite.domain.ports.booking_repository import BookingRepository
from travellite.domain.ports.checklist_catalog import ChecklistCatalog
from travellite.domain.ports.image_store import ImageStore
from travellite.domain.ports.station_catalog import StationCatalog

__all__ = [
    "Authenticator",
    "BookingRepository",
    "ChecklistCatalog",
    "ImageStore",
    "StationCatalog",
]
