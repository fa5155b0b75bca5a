"""
Conversation service orchestrator.

Coordinates conversation lifecycle operations and message reads.

Dependencies: backend.boundary.db.CRUD, backend.boundary.db.models
System role: Conversation use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.CRUD.conversation_crud import conversation_crud
from backend.boundary.db.CRUD.message_crud import message_crud
from backend.boundary.db.models.conversation_model import ConversationModel
from backend.boundary.db.models.message_model import MessageModel
from backend.core.exceptions import ConversationNotFoundError

logger = logging.getLogger(__name__)


def conversation_to_dict(conversation: ConversationModel) -> dict:
    """Plain dict view of a conversation row."""
    return {
        "id": conversation.id,
        "title": conversation.title,
        "created_at": conversation.created_at,
        "updated_at": conversation.updated_at,
    }


def message_to_dict(message: MessageModel) -> dict:
    """Plain dict view of a message row."""
    return {
        "id": message.id,
        "role": message.role.value,
        "content": message.content,
        "created_at": message.created_at,
    }


def parse_conversation_id(value: str | UUID) -> UUID | None:
    """Parse a path id; malformed ids cannot match any row, so they map to None."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(value)
    except (TypeError, ValueError):
        return None


class ConversationService:
    """Conversation service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize conversation service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def list_conversations(self) -> list[dict]:
        """
        Get every conversation, most recently updated first.

        Returns:
            list[dict]: Conversation dicts with id, title, created_at, updated_at
        """
        conversations = await conversation_crud.list_recent(self.db)
        return [conversation_to_dict(c) for c in conversations]

    async def create_conversation(self) -> dict:
        """
        Create a new empty conversation.

        Returns:
            dict: Created conversation
        """
        conversation = await conversation_crud.create(self.db)
        await self.db.commit()
        logger.info("Conversation created", extra={"conversation_id": str(conversation.id)})
        return conversation_to_dict(conversation)

    async def get_messages(self, conversation_id: str | UUID) -> list[dict]:
        """
        Get a conversation's messages, oldest first.

        Unknown or malformed ids yield an empty list rather than an error.

        Args:
            conversation_id: Conversation id as received on the path

        Returns:
            list[dict]: Message dicts with id, role, content, created_at
        """
        parsed = parse_conversation_id(conversation_id)
        if parsed is None:
            return []
        messages = await message_crud.list_for_conversation(self.db, parsed)
        return [message_to_dict(m) for m in messages]

    async def delete_conversation(self, conversation_id: UUID) -> None:
        """
        Delete a conversation and its messages.

        Args:
            conversation_id: Conversation UUID

        Raises:
            ConversationNotFoundError: If the conversation does not exist
        """
        if not await conversation_crud.exists(self.db, conversation_id):
            raise ConversationNotFoundError(str(conversation_id))

        deleted_messages = await message_crud.delete_for_conversation(self.db, conversation_id)
        await conversation_crud.delete_by_id(self.db, conversation_id)
        await self.db.commit()
        logger.info(
            "Conversation deleted",
            extra={"conversation_id": str(conversation_id), "deleted_messages": deleted_messages},
        )
