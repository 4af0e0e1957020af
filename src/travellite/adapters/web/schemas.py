"""Request body models for the JSON API."""

import json
from datetime import datetime
from decimal import Decimal
from typing import Any, TypeVar

import pydantic
from pydantic import BaseModel, ConfigDict, Field
from starlette.requests import Request

from travellite.domain.errors import ValidationError
from travellite.domain.models.booking import PaymentMethod, PhotoAngle, RiskLevel

ModelT = TypeVar("ModelT", bound=BaseModel)


class _RequestModel(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)


class RouteQuoteRequest(_RequestModel):
    """Body of a route quote request."""

    source_station_id: str = Field(min_length=1)
    destination_station_id: str = Field(min_length=1)
    pickup_time: datetime | None = None


class EmergencyContactBody(_RequestModel):
    name: str
    phone: str
    relationship: str


class ContactInfoBody(_RequestModel):
    phone: str = ""
    email: str | None = None
    address: str | None = None
    emergency_contact: EmergencyContactBody | None = None


class LuggagePhotoBody(_RequestModel):
    angle: PhotoAngle
    url: str = Field(min_length=1)


class SecurityItemBody(_RequestModel):
    item_id: str
    category_id: str
    name: str
    estimated_value: Decimal = Field(default=Decimal("0"), ge=0)
    risk_level: RiskLevel = RiskLevel.LOW


class CreateBookingRequest(RouteQuoteRequest):
    """Body of a booking creation request.

    The price is always quoted server-side from the two stations.
    """

    contact_info: ContactInfoBody | None = None
    luggage_photos: list[LuggagePhotoBody] = Field(default_factory=list)
    security_items: list[SecurityItemBody] = Field(default_factory=list)
    payment_method: PaymentMethod | None = None


class CustomItemRequest(_RequestModel):
    """Body of a custom checklist item."""

    name: str = ""
    description: str = ""
    category_id: str = ""
    estimated_value: Decimal = Decimal("0")
    risk_level: RiskLevel = RiskLevel.MEDIUM
    fragile: bool = False
    brand: str | None = None
    tags: list[str] = Field(default_factory=list)


class PaymentRequest(_RequestModel):
    payment_method: PaymentMethod


class CancelRequest(_RequestModel):
    reason: str = ""


class CounterActionRequest(_RequestModel):
    notes: str = ""


class DeliveryRequest(CounterActionRequest):
    customer_verification: str = ""


def validate_payload(model: type[ModelT], data: Any) -> ModelT:
    """Validate decoded JSON against a request model.

    Raises:
        ValidationError: Naming the first offending field.
    """
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or None
        raise ValidationError(first.get("msg", "Invalid request body"), field=field) from None


async def parse_body(request: Request, model: type[ModelT]) -> ModelT:
    """Decode and validate a JSON request body; an empty body counts as ``{}``."""
    raw = await request.body()
    if not raw.strip():
        return validate_payload(model, {})
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        raise ValidationError("Request body must be valid JSON", field="body") from None
    return validate_payload(model, data)
