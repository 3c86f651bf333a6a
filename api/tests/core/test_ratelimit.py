"""Tests for rate limiting helpers in core.ratelimit."""

from unittest.mock import MagicMock

import pytest
from starlette.requests import Request

from core.ratelimit import _get_request_identifier, rate_limit_exceeded_handler


def _request(client_host: str = "203.0.113.9") -> Request:
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/api/chat",
        "headers": [],
        "query_string": b"",
        "client": (client_host, 12345),
        "server": ("test", 80),
        "scheme": "http",
    }
    return Request(scope)


@pytest.mark.unit
class TestRequestIdentifier:
    def test_vendor_id_preferred(self):
        request = _request()
        request.state.vendor_id = 7
        assert _get_request_identifier(request) == "vendor_id:7"

    def test_customer_id_used(self):
        request = _request()
        request.state.customer_id = 42
        assert _get_request_identifier(request) == "customer_id:42"

    def test_falls_back_to_client_address(self):
        assert _get_request_identifier(_request("198.51.100.4")) == "198.51.100.4"


@pytest.mark.unit
class TestRateLimitExceededHandler:
    def test_returns_429_envelope_with_retry_after(self):
        exc = MagicMock()
        exc.detail = "10 per 1 minute"
        exc.retry_after = 30

        response = rate_limit_exceeded_handler(_request(), exc)

        assert response.status_code == 429
        assert response.headers["retry-after"] == "30"
        assert response.body == (
            b'{"ok":false,"error":"Rate limit exceeded. Please slow down."}'
        )
