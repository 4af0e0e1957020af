"""Application services."""

from travellite.application.services.booking_lifecycle import BookingLifecycle, next_status
from travellite.application.services.checklist_service import ChecklistService, ItemSort
from travellite.application.services.distance_calculator import haversine_km
from travellite.application.services.pricing_engine import PricingConfig, PricingEngine
from travellite.application.services.quote_service import QuoteService
from travellite.application.services.station_finder import StationFinder

__all__ = [
    "BookingLifecycle",
    "ChecklistService",
    "ItemSort",
    "PricingConfig",
    "PricingEngine",
    "QuoteService",
    "StationFinder",
    "haversine_km",
    "next_status",
]
