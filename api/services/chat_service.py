"""Chat assistant proxy.

Forwards a single user message, prefixed by a fixed persona prompt, to the
chat-completions API and returns the assistant's text. Failures are turned
into ``ChatReplyError`` carrying the reply text and status the client sees;
the upstream/internal detail only goes to the log.
"""

from typing import Any

from circuitbreaker import CircuitBreakerError

from core.llm_client import (
    RETRIABLE_EXCEPTIONS,
    LLMNotConfiguredError,
    LLMUpstreamError,
    create_chat_completion,
)
from core.logger import get_logger
from services.coercion import is_blank

logger = get_logger(__name__)

SYSTEM_PROMPT = (
    "You are Nibash Assistant, a friendly expert on furniture, interior design, "
    "and home improvement."
)

NO_MESSAGE_REPLY = "No message provided."
UPSTREAM_ERROR_REPLY = "OpenAI API returned an error."
SERVER_ERROR_REPLY = "Sorry, something went wrong on the server."
EMPTY_REPLY = "No reply"


class ChatReplyError(Exception):
    """A chat failure, already phrased for the client."""

    def __init__(self, reply: str, status_code: int) -> None:
        super().__init__(reply)
        self.reply = reply
        self.status_code = status_code


def build_messages(message: str) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": message},
    ]


def extract_reply(body: Any) -> str:
    """``choices[0].message.content`` or "No reply" when any part is missing."""
    try:
        content = body["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return EMPTY_REPLY
    return content if isinstance(content, str) and content else EMPTY_REPLY


async def get_reply(message: Any) -> str:
    """Ask the assistant.

    Raises:
        ChatReplyError: 400 for an empty message, 500 for any upstream or
            transport failure.
    """
    if is_blank(message) or not isinstance(message, str):
        raise ChatReplyError(NO_MESSAGE_REPLY, 400)

    try:
        body = await create_chat_completion(build_messages(message))
    except LLMUpstreamError as e:
        logger.error(
            "chat.upstream.error", status_code=e.status_code, upstream_body=e.body
        )
        raise ChatReplyError(UPSTREAM_ERROR_REPLY, 500) from e
    except LLMNotConfiguredError as e:
        logger.error("chat.not_configured")
        raise ChatReplyError(SERVER_ERROR_REPLY, 500) from e
    except CircuitBreakerError as e:
        logger.error("chat.circuit_open")
        raise ChatReplyError(SERVER_ERROR_REPLY, 500) from e
    except RETRIABLE_EXCEPTIONS as e:
        logger.error("chat.transport.failed", error_type=type(e).__name__)
        raise ChatReplyError(SERVER_ERROR_REPLY, 500) from e
    except ValueError as e:
        # 2xx with a body that is not JSON
        logger.error("chat.response.invalid", error=str(e))
        raise ChatReplyError(SERVER_ERROR_REPLY, 500) from e

    reply = extract_reply(body)
    logger.info("chat.replied", reply_chars=len(reply))
    return reply
