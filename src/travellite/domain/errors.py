"""Error taxonomy for the booking core.

Every failure carries an ``ErrorKind`` so the transport around the core can
map it to a response without inspecting messages.
"""

from enum import StrEnum

from travellite.domain.models.error_details import ErrorDetails


class ErrorKind(StrEnum):
    """Discriminator for core failures."""

    VALIDATION = "validation_error"
    NOT_FOUND = "not_found"
    INVALID_STATE = "invalid_state"
    FORBIDDEN = "forbidden"
    INVALID_DISTANCE = "invalid_distance"
    INVALID_COORDINATE = "invalid_coordinate"
    UNAUTHENTICATED = "unauthenticated"


class TravelLiteError(Exception):
    """Base class for all failures raised by the booking core."""

    kind: ErrorKind = ErrorKind.VALIDATION

    def __init__(self, message: str, field: str | None = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)

    def to_details(self) -> ErrorDetails:
        """Describe the failure as a serialisable value."""
        return ErrorDetails(kind=self.kind.value, reason=self.message, field=self.field)


class ValidationError(TravelLiteError):
    """Malformed or missing input."""

    kind = ErrorKind.VALIDATION


class NotFoundError(TravelLiteError):
    """A referenced booking, station or checklist entry does not exist."""

    kind = ErrorKind.NOT_FOUND


class StationNotFoundError(NotFoundError):
    def __init__(self, station_id: str) -> None:
        super().__init__(f"Station not found: {station_id}", field="station_id")
        self.station_id = station_id


class BookingNotFoundError(NotFoundError):
    def __init__(self, booking_ref: str) -> None:
        super().__init__(f"Booking not found: {booking_ref}", field="booking_id")
        self.booking_ref = booking_ref


class CategoryNotFoundError(NotFoundError):
    def __init__(self, category_id: str) -> None:
        super().__init__(f"Category not found: {category_id}", field="category_id")
        self.category_id = category_id


class ItemNotFoundError(NotFoundError):
    def __init__(self, item_id: str) -> None:
        super().__init__(f"Item not found: {item_id}", field="item_id")
        self.item_id = item_id


class InvalidStateError(TravelLiteError):
    """The requested transition is not permitted from the booking's current status."""

    kind = ErrorKind.INVALID_STATE


class ForbiddenError(TravelLiteError):
    """The acting principal or station does not match the booking."""

    kind = ErrorKind.FORBIDDEN


class InvalidDistanceError(TravelLiteError):
    """Distance fed into pricing is zero, negative or not a number."""

    kind = ErrorKind.INVALID_DISTANCE


class InvalidCoordinateError(TravelLiteError):
    """A coordinate component is missing, not finite or out of range."""

    kind = ErrorKind.INVALID_COORDINATE


class UnauthenticatedError(TravelLiteError):
    """A token could not be resolved to a principal."""

    kind = ErrorKind.UNAUTHENTICATED
