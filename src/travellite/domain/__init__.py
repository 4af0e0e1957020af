"""Domain layer - core business models, errors and ports."""

from travellite.domain.errors import (
    ErrorKind,
    ForbiddenError,
    InvalidCoordinateError,
    InvalidDistanceError,
    InvalidStateError,
    NotFoundError,
    TravelLiteError,
    ValidationError,
)
from travellite.domain.models import Booking, BookingStatus, PriceQuote, Station
from travellite.domain.ports import BookingRepository, StationCatalog

__all__ = [
    "Booking",
    "BookingRepository",
    "BookingStatus",
    "ErrorKind",
    "ForbiddenError",
    "InvalidCoordinateError",
    "InvalidDistanceError",
    "InvalidStateError",
    "NotFoundError",
    "PriceQuote",
    "Station",
    "StationCatalog",
    "TravelLiteError",
    "ValidationError",
]
