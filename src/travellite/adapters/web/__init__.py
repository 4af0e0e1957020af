"""Web adapter - JSON HTTP API over the booking core."""

from travellite.adapters.web.app import TravelLiteWebAdapter, create_app
from travellite.adapters.web.context import ApiServices

__all__ = ["ApiServices", "TravelLiteWebAdapter", "create_app"]
