"""
Message CRUD operations.

Provides append and ordered reads for MessageModel rows scoped to a
conversation.

Dependencies: sqlalchemy, backend.boundary.db.models
System role: Message persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.base import utcnow
from backend.boundary.db.models.message_model import MessageModel, MessageRole
from backend.boundary.db.CRUD.base_crud import BaseCRUD
from backend.boundary.db.CRUD.conversation_crud import conversation_crud


class MessageCRUD(BaseCRUD[MessageModel]):
    """CRUD operations for MessageModel."""

    def __init__(self) -> None:
        """Initialize MessageCRUD with MessageModel."""
        super().__init__(MessageModel)

    async def append(
        self,
        session: AsyncSession,
        conversation_id: UUID,
        role: MessageRole,
        content: str,
        id: UUID | None = None,
    ) -> MessageModel:
        """
        Insert a message and bump the conversation's updated_at.

        Args:
            session: Async database session
            conversation_id: Owning conversation UUID
            role: USER or ASSISTANT
            content: Text content
            id: Pre-assigned message UUID (generated when None)

        Returns:
            Created MessageModel
        """
        now = utcnow()
        fields = {
            "conversation_id": conversation_id,
            "role": role,
            "content": content,
            "created_at": now,
        }
        if id is not None:
            fields["id"] = id
        message = await self.create(session, **fields)
        await conversation_crud.touch(session, conversation_id, at=now)
        return message

    async def list_for_conversation(
        self,
        session: AsyncSession,
        conversation_id: UUID,
    ) -> Sequence[MessageModel]:
        """
        Retrieve a conversation's messages, oldest first.

        Args:
            session: Async database session
            conversation_id: Conversation UUID

        Returns:
            Sequence of MessageModels (empty for an unknown conversation)
        """
        stmt = (
            select(MessageModel)
            .where(MessageModel.conversation_id == conversation_id)
            .order_by(MessageModel.created_at.asc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_for_conversation(
        self,
        session: AsyncSession,
        conversation_id: UUID,
    ) -> int:
        """Number of stored messages in a conversation."""
        stmt = select(func.count(MessageModel.id)).where(
            MessageModel.conversation_id == conversation_id
        )
        result = await session.execute(stmt)
        return result.scalar_one()

    async def first_user_message(
        self,
        session: AsyncSession,
        conversation_id: UUID,
    ) -> MessageModel | None:
        """Earliest USER message of a conversation, if any."""
        stmt = (
            select(MessageModel)
            .where(
                MessageModel.conversation_id == conversation_id,
                MessageModel.role == MessageRole.USER,
            )
            .order_by(MessageModel.created_at.asc())
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_for_conversation(
        self,
        session: AsyncSession,
        conversation_id: UUID,
    ) -> int:
        """
        Delete every message of a conversation.

        Returns:
            Number of deleted rows
        """
        stmt = delete(MessageModel).where(MessageModel.conversation_id == conversation_id)
        result = await session.execute(stmt)
        return result.rowcount


message_crud = MessageCRUD()
