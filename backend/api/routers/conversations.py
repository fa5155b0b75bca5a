"""
Conversation API endpoints.

Routes:
- GET /conversations - List conversations, most recently updated first
- POST /conversations - Create an empty conversation
- GET /conversations/{id}/messages - Messages of a conversation, oldest first
- DELETE /conversations/{id} - Delete a conversation and its messages

Dependencies: backend.application.services, backend.models
System role: Conversation management HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from backend.api.deps import get_conversation_service
from backend.application.services.conversation_service import ConversationService
from backend.core.exceptions import ConversationNotFoundError
from backend.models.common import ErrorResponse
from backend.models.conversation import ConversationResponse, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/conversations", tags=["conversations"])


@router.get("", response_model=list[ConversationResponse], responses={500: {"model": ErrorResponse}})
async def list_conversations(
    conversation_service: ConversationService = Depends(get_conversation_service),
) -> list[ConversationResponse]:
    """
    List all conversations ordered by last update, newest first.

    Raises:
        HTTPException(500): Retrieval failed
    """
    try:
        conversations = await conversation_service.list_conversations()
        return [ConversationResponse(**c) for c in conversations]
    except Exception as e:
        logger.exception("Failed to fetch conversations", extra={"error_type": type(e).__name__})
        raise HTTPException(status_code=500, detail="Failed to fetch conversations")


@router.post("", response_model=ConversationResponse, responses={500: {"model": ErrorResponse}})
async def create_conversation(
    conversation_service: ConversationService = Depends(get_conversation_service),
) -> ConversationResponse:
    """
    Create a new empty conversation.

    Raises:
        HTTPException(500): Creation failed
    """
    try:
        conversation = await conversation_service.create_conversation()
        return ConversationResponse(**conversation)
    except Exception as e:
        logger.exception("Failed to create conversation", extra={"error_type": type(e).__name__})
        raise HTTPException(status_code=500, detail="Failed to create conversation")


@router.get(
    "/{conversation_id}/messages",
    response_model=list[MessageResponse],
    responses={500: {"model": ErrorResponse}},
)
async def get_messages(
    conversation_id: str,
    conversation_service: ConversationService = Depends(get_conversation_service),
) -> list[MessageResponse]:
    """
    Get a conversation's messages in creation order.

    An unknown id yields an empty list, not a 404.

    Args:
        conversation_id: Conversation id from the path

    Raises:
        HTTPException(500): Retrieval failed
    """
    try:
        messages = await conversation_service.get_messages(conversation_id)
        return [MessageResponse(**m) for m in messages]
    except Exception as e:
        logger.exception(
            "Failed to fetch messages",
            extra={"conversation_id": conversation_id, "error_type": type(e).__name__},
        )
        raise HTTPException(status_code=500, detail="Failed to fetch messages")


@router.delete(
    "/{conversation_id}",
    status_code=204,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def delete_conversation(
    conversation_id: UUID,
    conversation_service: ConversationService = Depends(get_conversation_service),
) -> None:
    """
    Delete a conversation by ID.

    Raises:
        HTTPException(404): Conversation not found
        HTTPException(500): Deletion failed
    """
    try:
        await conversation_service.delete_conversation(conversation_id)
    except ConversationNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception as e:
        logger.exception(
            "Failed to delete conversation",
            extra={"conversation_id": str(conversation_id), "error_type": type(e).__name__},
        )
        raise HTTPException(status_code=500, detail="Failed to delete conversation")
