"""HTTP client for the OpenAI-compatible chat-completions API.

Provides a connection-pooled ``httpx.AsyncClient`` shared by all chat
requests, plus ``create_chat_completion`` which wraps the POST with retry
(transient transport errors only) and a circuit breaker.

For business logic using this client, see services/chat_service.py
"""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
from circuitbreaker import circuit
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from core.config import get_settings
from core.logger import get_logger

logger = get_logger(__name__)

_llm_http_client: httpx.AsyncClient | None = None
_llm_client_lock = asyncio.Lock()

# Exceptions that should trigger retry and circuit breaker
RETRIABLE_EXCEPTIONS: tuple[type[Exception], ...] = (httpx.TransportError,)


class LLMClientError(Exception):
    """Raised when the chat-completions API cannot be used."""


class LLMNotConfiguredError(LLMClientError):
    """OPENAI_API_KEY is not set."""


class LLMUpstreamError(LLMClientError):
    """The API answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Chat completions returned HTTP {status_code}")
        self.status_code = status_code
        self.body = body


async def get_llm_http_client() -> httpx.AsyncClient:
    """Get or create the shared HTTP client.

    Uses connection pooling to reduce overhead from per-request client creation.
    Guarded by an asyncio.Lock so concurrent first requests create one client.
    """
    global _llm_http_client

    if _llm_http_client is not None and not _llm_http_client.is_closed:
        return _llm_http_client

    async with _llm_client_lock:
        if _llm_http_client is not None and not _llm_http_client.is_closed:
            return _llm_http_client

        settings = get_settings()
        _llm_http_client = httpx.AsyncClient(
            base_url=settings.openai_base_url,
            timeout=settings.http_timeout,
            limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
        )
        return _llm_http_client


async def close_llm_http_client() -> None:
    """Close the shared HTTP client (called on application shutdown)."""
    global _llm_http_client
    if _llm_http_client is not None and not _llm_http_client.is_closed:
        await _llm_http_client.aclose()
    _llm_http_client = None


@circuit(
    failure_threshold=5,
    recovery_timeout=60,
    expected_exception=RETRIABLE_EXCEPTIONS,
    name="chat_completions_circuit",
)
@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential_jitter(multiplier=0.5, max=4),
    retry=retry_if_exception_type(RETRIABLE_EXCEPTIONS),
    reraise=True,
)
async def create_chat_completion(messages: list[dict[str, str]]) -> dict[str, Any]:
    """POST ``messages`` to ``/chat/completions`` and return the decoded body.

    Raises:
        LLMNotConfiguredError: No API key configured.
        LLMUpstreamError: Non-2xx response; carries the upstream body.
        httpx.TransportError: Network failure after retries are exhausted.
    """
    settings = get_settings()
    if not settings.openai_api_key:
        raise LLMNotConfiguredError("OPENAI_API_KEY is not configured")

    client = await get_llm_http_client()
    response = await client.post(
        "/chat/completions",
        json={"model": settings.openai_model, "messages": messages},
        headers={"Authorization": f"Bearer {settings.openai_api_key}"},
    )

    if response.is_error:
        raise LLMUpstreamError(response.status_code, response.text)

    return response.json()
