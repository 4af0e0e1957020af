"""Per-client rate limiting for the booking API, backed by throttled-py."""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from throttled import RateLimiterType, Throttled, rate_limiter, store

logger = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER_SECONDS = 60.0


def extract_client_ip(request: Request) -> str:
    """Identify the client, preferring the first address in X-Forwarded-For.

    Behind a reverse proxy the direct peer is the proxy itself, so the
    original client is taken from the left end of the forwarded chain.
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        client_ip = forwarded_for.split(",")[0].strip()
        if client_ip:
            return client_ip

    if request.client and request.client.host:
        return request.client.host

    logger.warning("Could not determine client IP, using 'unknown'")
    return "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Token-bucket limit on requests per client IP.

    A limit of 0 or less disables throttling. Paths in ``exempt_paths``
    (health checks) are never throttled.
    """

    def __init__(
        self,
        app: Callable,
        requests_per_minute: int = 100,
        exempt_paths: tuple[str, ...] = ("/healthz",),
    ) -> None:
        """Initialize rate limiting middleware.

        Args:
            app: The ASGI application to wrap.
            requests_per_minute: Requests allowed per client IP per minute.
            exempt_paths: Request paths that bypass the limit.
        """
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.exempt_paths = frozenset(exempt_paths)
        self.enabled = requests_per_minute > 0
        self.quota = (
            rate_limiter.per_min(requests_per_minute, burst=requests_per_minute)
            if self.enabled
            else None
        )
        # One bucket per client IP, all in the same store
        self.bucket_store = store.MemoryStore()
        if self.enabled:
            logger.info(f"Rate limiting enabled: {requests_per_minute} requests per minute per IP")
        else:
            logger.info("Rate limiting disabled")

    def _extract_retry_after(self, result: Any) -> float:
        """Seconds until the client may retry, taken from a throttled-py result."""
        state = getattr(result, "state", None)
        if state is not None and hasattr(state, "retry_after"):
            return float(state.retry_after)
        if hasattr(result, "retry_after"):
            return float(result.retry_after)
        return DEFAULT_RETRY_AFTER_SECONDS

    def _create_rate_limit_response(self, client_ip: str, retry_after: float) -> Response:
        """Build the 429 response in the API's error envelope."""
        logger.warning(f"Rate limit exceeded for IP {client_ip}, retry after {retry_after} seconds")
        return JSONResponse(
            {
                "success": False,
                "error": {
                    "kind": "rate_limited",
                    "reason": "Rate limit exceeded. Please try again later.",
                    "field": None,
                },
            },
            status_code=429,
            headers={"Retry-After": str(max(1, int(retry_after)))},
        )

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Reject the request with 429 once the client's bucket is empty."""
        if not self.enabled or request.url.path in self.exempt_paths:
            return await call_next(request)

        client_ip = extract_client_ip(request)
        throttle = Throttled(
            key=client_ip,
            using=RateLimiterType.TOKEN_BUCKET.value,
            quota=self.quota,
            store=self.bucket_store,
        )
        result = throttle.limit()
        if result.limited:
            return self._create_rate_limit_response(client_ip, self._extract_retry_after(result))

        response: Response = await call_next(request)
        return response
