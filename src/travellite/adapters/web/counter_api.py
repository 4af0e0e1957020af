"""Station counter endpoints for staff: lookup, hand-over, dispatch and delivery."""

from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from travellite.adapters.web.context import require_staff, services
from travellite.adapters.web.schemas import CounterActionRequest, DeliveryRequest, parse_body
from travellite.adapters.web.serializers import (
    booking_to_dict,
    counter_booking_to_dict,
    workload_to_dict,
)
from travellite.domain.errors import ValidationError
from travellite.domain.models.booking_status import BookingStatus, OperationType


def _enum_param(request: Request, name: str, enum_type: type) -> object | None:
    value = request.query_params.get(name)
    if not value:
        return None
    try:
        return enum_type(value)
    except ValueError:
        raise ValidationError(f"Unknown {name} '{value}'", field=name) from None


async def station_bookings(request: Request) -> JSONResponse:
    staff = require_staff(request)
    pairs = services(request).lifecycle.list_for_station(
        staff.station_id,
        operation_type=_enum_param(request, "operation_type", OperationType),
        status=_enum_param(request, "status", BookingStatus),
    )
    return JSONResponse(
        {
            "success": True,
            "data": {
                "station_id": staff.station_id,
                "bookings": [counter_booking_to_dict(b, op) for b, op in pairs],
                "count": len(pairs),
            },
        }
    )


async def station_summary(request: Request) -> JSONResponse:
    staff = require_staff(request)
    workload = services(request).lifecycle.station_summary(staff.station_id)
    return JSONResponse(
        {
            "success": True,
            "data": {"station_id": staff.station_id, "summary": workload_to_dict(workload)},
        }
    )


async def lookup_booking(request: Request) -> JSONResponse:
    staff = require_staff(request)
    booking, operation = services(request).lifecycle.lookup(
        request.path_params["booking_ref"], staff.station_id
    )
    return JSONResponse(
        {"success": True, "data": {"booking": counter_booking_to_dict(booking, operation)}}
    )


async def accept_luggage(request: Request) -> JSONResponse:
    staff = require_staff(request)
    body = await parse_body(request, CounterActionRequest)
    booking = await run_in_threadpool(
        services(request).lifecycle.accept_luggage,
        request.path_params["booking_ref"],
        staff.station_id,
        body.notes,
    )
    return JSONResponse({"success": True, "data": {"booking": booking_to_dict(booking)}})


async def dispatch_luggage(request: Request) -> JSONResponse:
    staff = require_staff(request)
    body = await parse_body(request, CounterActionRequest)
    booking = await run_in_threadpool(
        services(request).lifecycle.dispatch,
        request.path_params["booking_ref"],
        staff.station_id,
        body.notes,
    )
    return JSONResponse({"success": True, "data": {"booking": booking_to_dict(booking)}})


async def deliver_luggage(request: Request) -> JSONResponse:
    staff = require_staff(request)
    body = await parse_body(request, DeliveryRequest)
    booking = await run_in_threadpool(
        services(request).lifecycle.deliver,
        request.path_params["booking_ref"],
        staff.station_id,
        body.customer_verification,
        body.notes,
    )
    return JSONResponse({"success": True, "data": {"booking": booking_to_dict(booking)}})


routes = [
    Route("/api/v1/counter/bookings", station_bookings, methods=["GET"]),
    Route("/api/v1/counter/summary", station_summary, methods=["GET"]),
    Route("/api/v1/counter/bookings/{booking_ref}", lookup_booking, methods=["GET"]),
    Route("/api/v1/counter/bookings/{booking_ref}/accept", accept_luggage, methods=["POST"]),
    Route("/api/v1/counter/bookings/{booking_ref}/dispatch", dispatch_luggage, methods=["POST"]),
    Route("/api/v1/counter/bookings/{booking_ref}/deliver", deliver_luggage, methods=["POST"]),
]
