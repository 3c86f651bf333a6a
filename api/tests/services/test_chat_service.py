"""Unit tests for services.chat_service.

``create_chat_completion`` is patched where the service imports it, so no
HTTP traffic happens.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from circuitbreaker import CircuitBreakerError

from core.llm_client import LLMNotConfiguredError, LLMUpstreamError
from services.chat_service import (
    SYSTEM_PROMPT,
    ChatReplyError,
    build_messages,
    extract_reply,
    get_reply,
)


def _completion(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@pytest.mark.unit
class TestBuildMessages:
    def test_system_prompt_first(self):
        messages = build_messages("Is mahogany durable?")
        assert messages == [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": "Is mahogany durable?"},
        ]
        assert "Nibash Assistant" in SYSTEM_PROMPT


@pytest.mark.unit
class TestExtractReply:
    def test_content(self):
        assert extract_reply(_completion("Yes.")) == "Yes."

    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"choices": []},
            {"choices": [{}]},
            {"choices": [{"message": {}}]},
            _completion(None),
            _completion(""),
            None,
            "text",
        ],
    )
    def test_missing_content_is_no_reply(self, body):
        assert extract_reply(body) == "No reply"


@pytest.mark.unit
class TestGetReply:
    @pytest.mark.parametrize("message", [None, "", "   ", 42, ["hi"]])
    async def test_empty_message_is_400_without_upstream_call(self, message):
        with patch(
            "services.chat_service.create_chat_completion", new_callable=AsyncMock
        ) as mock_create:
            with pytest.raises(ChatReplyError) as exc_info:
                await get_reply(message)

        assert exc_info.value.status_code == 400
        assert exc_info.value.reply == "No message provided."
        mock_create.assert_not_called()

    async def test_success(self):
        with patch(
            "services.chat_service.create_chat_completion",
            new_callable=AsyncMock,
            return_value=_completion("Use a damp cloth."),
        ) as mock_create:
            reply = await get_reply("How do I clean a rattan chair?")

        assert reply == "Use a damp cloth."
        mock_create.assert_awaited_once_with(
            build_messages("How do I clean a rattan chair?")
        )

    @pytest.mark.parametrize(
        ("error", "reply"),
        [
            (LLMUpstreamError(401, '{"error": "bad key"}'), "OpenAI API returned an error."),
            (LLMNotConfiguredError("no key"), "Sorry, something went wrong on the server."),
            (CircuitBreakerError(MagicMock()), "Sorry, something went wrong on the server."),
            (httpx.ConnectError("refused"), "Sorry, something went wrong on the server."),
            (ValueError("Expecting value"), "Sorry, something went wrong on the server."),
        ],
    )
    async def test_failures_become_500_replies(self, error, reply):
        with patch(
            "services.chat_service.create_chat_completion",
            new_callable=AsyncMock,
            side_effect=error,
        ):
            with pytest.raises(ChatReplyError) as exc_info:
                await get_reply("Hello")

        assert exc_info.value.status_code == 500
        assert exc_info.value.reply == reply
        assert "bad key" not in exc_info.value.reply
