"""Behavior-focused tests for the per-client rate limit."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from travellite.adapters.web.rate_limit_middleware import (
    DEFAULT_RETRY_AFTER_SECONDS,
    RateLimitMiddleware,
    extract_client_ip,
)


def make_request(
    path: str = "/api/v1/pricing/tiers", host: str | None = "192.168.1.1"
) -> MagicMock:
    request = MagicMock()
    request.headers = {}
    request.url.path = path
    if host is None:
        request.client = None
    else:
        request.client = MagicMock()
        request.client.host = host
    return request


class TestExtractClientIp:
    """Client identification."""

    def test_when_forwarded_chain_then_returns_first_ip(self) -> None:
        """Given an X-Forwarded-For chain, when extracting, then the original client is used."""
        request = make_request(host=None)
        request.headers = {"X-Forwarded-For": "  203.0.113.50 , 70.41.3.18, 150.172.238.178"}

        assert extract_client_ip(request) == "203.0.113.50"

    def test_when_forwarded_header_empty_then_uses_peer(self) -> None:
        """Given an empty X-Forwarded-For, when extracting, then the direct peer is used."""
        request = make_request(host="10.0.0.1")
        request.headers = {"X-Forwarded-For": ""}

        assert extract_client_ip(request) == "10.0.0.1"

    def test_when_no_client_info_then_unknown(self) -> None:
        """Given neither header nor peer, when extracting, then 'unknown' is returned."""
        assert extract_client_ip(make_request(host=None)) == "unknown"

    def test_when_peer_has_no_host_then_unknown(self) -> None:
        """Given a peer without host, when extracting, then 'unknown' is returned."""
        request = make_request()
        request.client.host = None

        assert extract_client_ip(request) == "unknown"


class TestRetryAfter:
    """Retry-After extraction and the 429 response."""

    def test_state_retry_after_wins(self) -> None:
        """Given a result with state.retry_after, when extracting, then that value is used."""
        middleware = RateLimitMiddleware(app=MagicMock(), requests_per_minute=100)
        result = MagicMock()
        result.state.retry_after = 12.5

        assert middleware._extract_retry_after(result) == 12.5

    def test_missing_retry_after_falls_back_to_default(self) -> None:
        """Given a result without retry information, when extracting, then the default is used."""
        middleware = RateLimitMiddleware(app=MagicMock(), requests_per_minute=100)

        retry_after = middleware._extract_retry_after(MagicMock(spec=[]))
        assert retry_after == DEFAULT_RETRY_AFTER_SECONDS

    def test_limited_response_uses_error_envelope(self) -> None:
        """Given an exceeded limit, when building the response, then it is a JSON 429."""
        middleware = RateLimitMiddleware(app=MagicMock(), requests_per_minute=100)

        response = middleware._create_rate_limit_response("192.168.1.1", 0.2)

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "1"
        body = json.loads(response.body)
        assert body["success"] is False
        assert body["error"]["kind"] == "rate_limited"


class TestDispatch:
    """Dispatch behaviour."""

    @pytest.mark.asyncio
    async def test_when_disabled_then_requests_pass_through(self) -> None:
        """Given a limit of 0, when dispatching, then throttling is skipped."""
        middleware = RateLimitMiddleware(app=MagicMock(), requests_per_minute=0)
        call_next = AsyncMock(return_value="ok")

        for _ in range(5):
            assert await middleware.dispatch(make_request(), call_next) == "ok"

        assert middleware.enabled is False
        assert call_next.call_count == 5

    @pytest.mark.asyncio
    async def test_when_limit_exceeded_then_429(self) -> None:
        """Given a limit of 1, when a client sends two requests, then the second is rejected."""
        middleware = RateLimitMiddleware(app=MagicMock(), requests_per_minute=1)
        call_next = AsyncMock(return_value="ok")

        first = await middleware.dispatch(make_request(), call_next)
        second = await middleware.dispatch(make_request(), call_next)

        assert first == "ok"
        assert second.status_code == 429
        assert "Retry-After" in second.headers
        assert call_next.call_count == 1

    @pytest.mark.asyncio
    async def test_clients_have_separate_buckets(self) -> None:
        """Given a limit of 1, when two clients send one request each, then both pass."""
        middleware = RateLimitMiddleware(app=MagicMock(), requests_per_minute=1)
        call_next = AsyncMock(return_value="ok")

        assert await middleware.dispatch(make_request(host="10.0.0.1"), call_next) == "ok"
        assert await middleware.dispatch(make_request(host="10.0.0.2"), call_next) == "ok"

    @pytest.mark.asyncio
    async def test_health_check_is_exempt(self) -> None:
        """Given an exhausted bucket, when the health check is called, then it still passes."""
        middleware = RateLimitMiddleware(app=MagicMock(), requests_per_minute=1)
        call_next = AsyncMock(return_value="ok")
        await middleware.dispatch(make_request(), call_next)

        response = await middleware.dispatch(make_request(path="/healthz"), call_next)

        assert response == "ok"
        assert call_next.call_count == 2
