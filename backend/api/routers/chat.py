"""
Streaming chat endpoint.

Routes: POST /chat

Relays the model's reply as a UI message stream (Server-Sent Events).

Dependencies: backend.application.services.chat_service, backend.models
System role: Chat streaming HTTP API
"""

import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse

from backend.api.deps import get_chat_service
from backend.application.services.chat_service import ChatService
from backend.core.exceptions import PersistenceError
from backend.models.chat import ChatRequest
from backend.models.common import ErrorResponse
from backend.models.streaming import (
    UI_MESSAGE_STREAM_HEADERS,
    StreamPart,
    StreamPartType,
    done_frame,
)

logger = logging.getLogger(__name__)
router = APIRouter(tags=["chat"])


async def encode_stream(parts: AsyncGenerator[StreamPart, None]) -> AsyncGenerator[str, None]:
    """
    Encode stream parts as SSE frames.

    The [DONE] sentinel is only sent when the stream ended without an error.
    Closing the encoder closes `parts`, and with it the provider stream.
    """
    failed = False
    try:
        async for part in parts:
            if part.type is StreamPartType.ERROR:
                failed = True
            yield part.to_sse()
        if not failed:
            yield done_frame()
    finally:
        await parts.aclose()


@router.post("/chat", responses={500: {"model": ErrorResponse}})
async def chat(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> StreamingResponse:
    """
    Stream an assistant reply for the given history.

    The conversation is resolved (or created) and the user turn stored before
    the response starts; the reply is stored once the provider finishes.

    Args:
        request: ChatRequest with optional conversationId and prior turns
        chat_service: Injected ChatService

    Returns:
        StreamingResponse: text/event-stream UI message stream

    Raises:
        HTTPException(500): Conversation could not be resolved
    """
    try:
        prepared = await chat_service.prepare_chat(request)
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=e.message)

    return StreamingResponse(
        encode_stream(chat_service.stream_chat(prepared)),
        media_type="text/event-stream",
        headers={
            **UI_MESSAGE_STREAM_HEADERS,
            "X-Conversation-ID": str(prepared.conversation_id),
        },
    )
