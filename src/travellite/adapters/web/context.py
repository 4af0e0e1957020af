"""Request context helpers: service access, authentication and query parsing."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from starlette.requests import Request

from travellite.domain.errors import ForbiddenError, UnauthenticatedError, ValidationError
from travellite.domain.models.principal import Principal
from travellite.domain.models.station import StationType

if TYPE_CHECKING:
    from travellite.application.services import (
        BookingLifecycle,
        ChecklistService,
        PricingEngine,
        QuoteService,
        StationFinder,
    )
    from travellite.domain.contracts import Clock
    from travellite.domain.ports import Authenticator, ImageStore


@dataclass(frozen=True)
class ApiServices:
    """Everything the HTTP handlers call into."""

    lifecycle: "BookingLifecycle"
    quotes: "QuoteService"
    pricing: "PricingEngine"
    stations: "StationFinder"
    authenticator: "Authenticator"
    images: "ImageStore"
    clock: "Clock"
    checklist: "ChecklistService"


def services(request: Request) -> ApiServices:
    return request.app.state.services


def authenticate(request: Request) -> Principal:
    """Resolve the bearer token in the Authorization header.

    Raises:
        UnauthenticatedError: If the header is missing or the token is unknown.
    """
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise UnauthenticatedError("Access token required", field="authorization")
    return services(request).authenticator.resolve(token.strip())


def optional_principal(request: Request) -> Principal | None:
    """Authenticate when an Authorization header is present, else ``None``."""
    if not request.headers.get("Authorization"):
        return None
    return authenticate(request)


def require_staff(request: Request) -> Principal:
    """Authenticate and insist on a station counter principal."""
    principal = authenticate(request)
    if not principal.is_staff or not principal.station_id:
        raise ForbiddenError("Staff access required", field="authorization")
    return principal


def int_param(request: Request, name: str, default: int) -> int:
    value = request.query_params.get(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"{name} must be an integer", field=name) from None


def float_param(request: Request, name: str, default: float | None = None) -> float:
    value = request.query_params.get(name)
    if value is None or value == "":
        if default is None:
            raise ValidationError(f"{name} is required", field=name)
        return default
    try:
        return float(value)
    except ValueError:
        raise ValidationError(f"{name} must be a number", field=name) from None


def station_type_param(request: Request, name: str = "type") -> StationType | None:
    value = request.query_params.get(name)
    if not value:
        return None
    try:
        return StationType(value.lower())
    except ValueError:
        raise ValidationError(
            f"{name} must be one of {', '.join(t.value for t in StationType)}", field=name
        ) from None
