"""ASGI middleware: request context/timing and security headers."""

from __future__ import annotations

import time
import uuid

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from core.logger import bind_contextvars, clear_contextvars, get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = b"x-request-id"
DURATION_HEADER = b"x-request-duration-ms"


def _incoming_request_id(scope: Scope) -> str | None:
    for name, value in scope.get("headers", []):
        if name == REQUEST_ID_HEADER:
            request_id = value.decode("latin-1").strip()
            # Ignore absurd client-supplied ids
            if request_id and len(request_id) <= 128:
                return request_id
    return None


class RequestContextMiddleware:
    """Binds a request id to the log context and reports request duration.

    Propagates ``x-request-id`` (or generates one), stamps
    ``x-request-duration-ms`` on the response, and emits a single
    ``request.completed`` line per request.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = _incoming_request_id(scope) or uuid.uuid4().hex
        clear_contextvars()
        bind_contextvars(request_id=request_id)

        start = time.perf_counter()
        status_code = 500

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                duration_ms = (time.perf_counter() - start) * 1000
                headers: list[tuple[bytes, bytes]] = list(message.get("headers", []))
                headers.append((REQUEST_ID_HEADER, request_id.encode("latin-1")))
                headers.append((DURATION_HEADER, f"{duration_ms:.2f}".encode()))
                message["headers"] = headers
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            logger.info(
                "request.completed",
                method=scope.get("method"),
                path=scope.get("path"),
                status_code=status_code,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )
            clear_contextvars()


class SecurityHeadersMiddleware:
    """Adds security headers to every JSON response."""

    SECURITY_HEADERS: list[tuple[bytes, bytes]] = [
        (b"x-content-type-options", b"nosniff"),
        (b"x-frame-options", b"DENY"),
        (b"referrer-policy", b"strict-origin-when-cross-origin"),
        (b"content-security-policy", b"default-src 'none'; frame-ancestors 'none'"),
        (b"strict-transport-security", b"max-age=31536000; includeSubDomains"),
    ]

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        is_docs = scope.get("path", "").startswith(("/docs", "/redoc"))

        async def send_wrapper(message: Message) -> None:
            if message.get("type") == "http.response.start":
                headers: list[tuple[bytes, bytes]] = list(message.get("headers", []))
                headers.extend(
                    header
                    for header in self.SECURITY_HEADERS
                    if not (is_docs and header[0] == b"content-security-policy")
                )
                message["headers"] = headers
            await send(message)

        await self.app(scope, receive, send_wrapper)
