"""Starlette application for the TravelLite booking API."""

import logging
from typing import Any

from starlette.applications import Starlette
from starlette.exceptions import HTTPException
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from travellite.adapters.config import AppConfig
from travellite.adapters.web import (
    bookings_api,
    checklist_api,
    counter_api,
    pricing_api,
    stations_api,
)
from travellite.adapters.web.context import ApiServices
from travellite.adapters.web.rate_limit_middleware import RateLimitMiddleware
from travellite.domain.errors import ErrorKind, TravelLiteError

logger = logging.getLogger(__name__)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.INVALID_STATE: 400,
    ErrorKind.INVALID_DISTANCE: 400,
    ErrorKind.INVALID_COORDINATE: 400,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
}

_KIND_BY_STATUS: dict[int, str] = {404: "not_found", 405: "method_not_allowed"}


def _error_response(
    status_code: int, kind: str, reason: str, field: str | None = None
) -> JSONResponse:
    return JSONResponse(
        {"success": False, "error": {"kind": kind, "reason": reason, "field": field}},
        status_code=status_code,
    )


async def handle_core_error(request: Request, exc: TravelLiteError) -> Response:
    """Map a core failure to a status code by its kind."""
    status_code = STATUS_BY_KIND.get(exc.kind, 400)
    details = exc.to_details()
    logger.info(
        f"{request.method} {request.url.path} -> {status_code} {details.kind}: {details.reason}"
    )
    return _error_response(status_code, details.kind, details.reason, details.field)


async def handle_http_error(_request: Request, exc: HTTPException) -> Response:
    kind = _KIND_BY_STATUS.get(exc.status_code, "http_error")
    return _error_response(exc.status_code, kind, str(exc.detail))


async def handle_unexpected_error(request: Request, exc: Exception) -> Response:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return _error_response(500, "internal_error", "Internal server error")


async def healthz(_request: Request) -> Response:
    """Health check endpoint for load balancers and monitoring."""
    return Response(content="Ok", media_type="text/plain")


def create_app(api_services: ApiServices, config: AppConfig | None = None) -> Starlette:
    """Build the ASGI application around already wired services."""
    config = config or AppConfig()
    routes: list[Any] = [Route("/healthz", healthz, methods=["GET"])]
    routes.extend(stations_api.routes)
    routes.extend(pricing_api.routes)
    routes.extend(bookings_api.routes)
    routes.extend(counter_api.routes)
    routes.extend(checklist_api.routes)

    app = Starlette(
        routes=routes,
        middleware=[
            Middleware(RateLimitMiddleware, requests_per_minute=config.rate_limit_per_minute)
        ],
        exception_handlers={
            TravelLiteError: handle_core_error,
            HTTPException: handle_http_error,
            Exception: handle_unexpected_error,
        },
    )
    app.state.services = api_services
    return app


class TravelLiteWebAdapter:
    """Serves the booking API with uvicorn."""

    def __init__(self, api_services: ApiServices, config: AppConfig) -> None:
        self.config = config
        self.app = create_app(api_services, config)
        self._server: Any = None

    async def start(self) -> None:
        """Start the web server and block until it exits."""
        import uvicorn

        logger.info(f"Starting TravelLite API on {self.config.host}:{self.config.port}")
        server_config = uvicorn.Config(
            self.app,
            host=self.config.host,
            port=self.config.port,
            log_level=self.config.log_level.lower(),
        )
        self._server = uvicorn.Server(server_config)
        await self._server.serve()

    async def stop(self) -> None:
        """Stop the web server."""
        if self._server:
            self._server.should_exit = True
