"""Customer booking endpoints and luggage photo upload."""

from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from travellite.adapters.web.context import authenticate, services
from travellite.adapters.web.schemas import (
    CancelRequest,
    CreateBookingRequest,
    PaymentRequest,
    parse_body,
)
from travellite.adapters.web.serializers import booking_stats_to_dict, booking_to_dict
from travellite.domain.errors import NotFoundError, ValidationError
from travellite.domain.models.booking import (
    BookingRequest,
    ContactInfo,
    EmergencyContact,
    LuggagePhoto,
    PhotoAngle,
    SecurityItem,
)
from travellite.domain.models.booking_status import BookingStatus
from travellite.domain.models.route_quote import RouteQuote


def _to_booking_request(
    customer_id: str, body: CreateBookingRequest, route: RouteQuote
) -> BookingRequest:
    contact = None
    if body.contact_info is not None:
        emergency = body.contact_info.emergency_contact
        contact = ContactInfo(
            phone=body.contact_info.phone,
            email=body.contact_info.email,
            address=body.contact_info.address,
            emergency_contact=(
                EmergencyContact(
                    name=emergency.name, phone=emergency.phone, relationship=emergency.relationship
                )
                if emergency
                else None
            ),
        )
    return BookingRequest(
        customer_id=customer_id,
        source_station_id=body.source_station_id,
        destination_station_id=body.destination_station_id,
        distance_km=route.distance_km,
        quote=route.quote,
        contact_info=contact,
        luggage_photos=tuple(LuggagePhoto(angle=p.angle, url=p.url) for p in body.luggage_photos),
        security_items=tuple(
            SecurityItem(
                item_id=item.item_id,
                category_id=item.category_id,
                name=item.name,
                estimated_value=item.estimated_value,
                risk_level=item.risk_level,
            )
            for item in body.security_items
        ),
        payment_method=body.payment_method,
    )


async def create_booking(request: Request) -> JSONResponse:
    principal = authenticate(request)
    body = await parse_body(request, CreateBookingRequest)
    api = services(request)
    user_tier, prior = await run_in_threadpool(api.lifecycle.pricing_profile, principal)
    route = api.quotes.quote_route(
        body.source_station_id,
        body.destination_station_id,
        pickup_time=body.pickup_time,
        user_tier=user_tier,
        prior_booking_count=prior,
    )
    booking = await run_in_threadpool(
        api.lifecycle.create, _to_booking_request(principal.id, body, route)
    )
    return JSONResponse(
        {"success": True, "data": {"booking": booking_to_dict(booking)}}, status_code=201
    )


async def list_bookings(request: Request) -> JSONResponse:
    principal = authenticate(request)
    status_value = request.query_params.get("status")
    try:
        status = BookingStatus(status_value) if status_value else None
    except ValueError:
        raise ValidationError(f"Unknown booking status '{status_value}'", field="status") from None
    bookings = services(request).lifecycle.list_for_customer(principal.id, status)
    return JSONResponse(
        {
            "success": True,
            "data": {"bookings": [booking_to_dict(b) for b in bookings], "count": len(bookings)},
        }
    )


async def booking_stats(request: Request) -> JSONResponse:
    principal = authenticate(request)
    stats = services(request).lifecycle.booking_stats(principal.id)
    return JSONResponse({"success": True, "data": booking_stats_to_dict(stats)})


async def get_booking(request: Request) -> JSONResponse:
    principal = authenticate(request)
    booking = services(request).lifecycle.get(request.path_params["booking_ref"], principal)
    return JSONResponse({"success": True, "data": {"booking": booking_to_dict(booking)}})


async def confirm_payment(request: Request) -> JSONResponse:
    principal = authenticate(request)
    body = await parse_body(request, PaymentRequest)
    lifecycle = services(request).lifecycle
    booking_ref = request.path_params["booking_ref"]
    lifecycle.get(booking_ref, principal)
    booking = await run_in_threadpool(lifecycle.confirm_payment, booking_ref, body.payment_method)
    return JSONResponse({"success": True, "data": {"booking": booking_to_dict(booking)}})


async def cancel_booking(request: Request) -> JSONResponse:
    principal = authenticate(request)
    body = await parse_body(request, CancelRequest)
    booking = await run_in_threadpool(
        services(request).lifecycle.cancel,
        request.path_params["booking_ref"],
        body.reason,
        principal,
    )
    return JSONResponse({"success": True, "data": {"booking": booking_to_dict(booking)}})


async def upload_image(request: Request) -> JSONResponse:
    authenticate(request)
    angle_value = request.path_params["angle"]
    try:
        angle = PhotoAngle(angle_value)
    except ValueError:
        raise ValidationError(f"Unknown image angle '{angle_value}'", field="angle") from None
    content_type = request.headers.get("Content-Type", "").split(";")[0].strip()
    data = await request.body()
    url = services(request).images.store(angle, data, content_type)
    return JSONResponse(
        {"success": True, "data": {"angle": angle.value, "url": url}}, status_code=201
    )


async def serve_image(request: Request) -> Response:
    name = request.path_params["name"]
    stored = services(request).images.fetch(name)
    if stored is None:
        raise NotFoundError(f"Image not found: {name}", field="name")
    data, content_type = stored
    return Response(content=data, media_type=content_type)


routes = [
    Route("/api/v1/bookings", create_booking, methods=["POST"]),
    Route("/api/v1/bookings", list_bookings, methods=["GET"]),
    Route("/api/v1/bookings/stats", booking_stats, methods=["GET"]),
    Route("/api/v1/bookings/{booking_ref}", get_booking, methods=["GET"]),
    Route("/api/v1/bookings/{booking_ref}/payment", confirm_payment, methods=["POST"]),
    Route("/api/v1/bookings/{booking_ref}/cancel", cancel_booking, methods=["POST"]),
    Route("/api/v1/images/{angle}", upload_image, methods=["POST"]),
    Route("/images/{name}", serve_image, methods=["GET"]),
]
