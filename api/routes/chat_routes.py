"""Chat assistant endpoint.

Answers ``{"reply": ...}`` on success and failure alike, unlike the rest of
the API. The body is read by hand so that a malformed one also gets the
``reply`` shape instead of the validation error envelope.
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from core.ratelimit import EXTERNAL_API_LIMIT, limiter
from schemas import ChatReply, ChatRequest
from services.chat_service import ChatReplyError, get_reply

router = APIRouter(prefix="/api", tags=["chat"])


async def read_chat_request(request: Request) -> ChatRequest:
    """Parse the body; anything that is not a JSON object carries no message."""
    try:
        payload = await request.json()
    except ValueError:
        return ChatRequest()
    if not isinstance(payload, dict):
        return ChatRequest()
    return ChatRequest.model_validate(payload)


@router.post(
    "/chat",
    response_model=ChatReply,
    responses={
        400: {"model": ChatReply, "description": "No message provided"},
        500: {"model": ChatReply, "description": "Upstream or server failure"},
    },
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": ChatRequest.model_json_schema()}}
        }
    },
)
@limiter.limit(EXTERNAL_API_LIMIT)
async def chat(request: Request):
    body = await read_chat_request(request)
    try:
        reply = await get_reply(body.message)
    except ChatReplyError as e:
        return JSONResponse(status_code=e.status_code, content={"reply": e.reply})
    return ChatReply(reply=reply)
