"""Text relay endpoint.

Forwards a single user message, prefixed with the fixed system prompt, to
the provider's completion endpoint and returns the reply.
"""

import logging

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from src.api.dependencies import get_kimi_client
from src.api.errors import InvalidInput, ServerError
from src.models.schemas import ChatMessage, ChatRequest, ReplyResponse
from src.relay.errors import ProviderError
from src.relay.kimi import KimiClient
from src.relay.prompts import SYSTEM_PROMPT

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])


async def _parse_chat_request(request: Request) -> ChatRequest:
    """Read and validate the JSON body.

    Raises:
        InvalidInput: Body is not JSON, or ``message`` is missing,
            not a string, or empty.
    """
    try:
        payload = await request.json()
        return ChatRequest.model_validate(payload)
    except (ValueError, ValidationError) as e:
        logger.info(f"Rejected chat request: {e}")
        raise InvalidInput() from e


@router.post(
    "/chat",
    response_model=ReplyResponse,
    responses={400: {"model": ReplyResponse}, 500: {"model": ReplyResponse}},
)
async def chat_relay(
    request: Request,
    kimi: KimiClient = Depends(get_kimi_client),
) -> ReplyResponse:
    """Relay one user message to Kimi.

    Accepts ``{"message": str}`` and returns ``{"reply": str}``.

    Raises:
        400: Missing, non-string, or empty message.
        500: Any provider failure (details are logged, not returned).
    """
    chat_request = await _parse_chat_request(request)

    messages = [
        ChatMessage(role="system", content=SYSTEM_PROMPT),
        ChatMessage(role="user", content=chat_request.message),
    ]

    try:
        reply = await kimi.create_chat_completion(messages)
    except ProviderError as e:
        logger.error(f"Chat completion failed: {e}")
        raise ServerError() from e

    return ReplyResponse(reply=reply)
