"""
Conversation CRUD operations.

Dependencies: sqlalchemy, backend.boundary.db.models
System role: Conversation persistence operations
"""

from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy import or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.base import utcnow
from backend.boundary.db.models.conversation_model import ConversationModel
from backend.boundary.db.CRUD.base_crud import BaseCRUD


class ConversationCRUD(BaseCRUD[ConversationModel]):
    """
    CRUD operations for ConversationModel.

    Adds ordering, row locking, idempotent creation and write-once titles.
    """

    def __init__(self) -> None:
        """Initialize ConversationCRUD with ConversationModel."""
        super().__init__(ConversationModel)

    async def list_recent(self, session: AsyncSession) -> Sequence[ConversationModel]:
        """
        Retrieve every conversation, most recently updated first.

        Args:
            session: Async database session

        Returns:
            Sequence of ConversationModels ordered by updated_at descending
        """
        stmt = select(ConversationModel).order_by(
            ConversationModel.updated_at.desc(),
            ConversationModel.created_at.desc(),
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_for_update(
        self,
        session: AsyncSession,
        id: UUID,
    ) -> ConversationModel | None:
        """
        Retrieve a conversation and lock its row until the transaction ends.

        Backends without row locks (SQLite) ignore FOR UPDATE.

        Args:
            session: Async database session
            id: Conversation UUID

        Returns:
            Locked ConversationModel, None if not found
        """
        stmt = select(ConversationModel).where(ConversationModel.id == id).with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_or_create(
        self,
        session: AsyncSession,
        id: UUID | None = None,
    ) -> tuple[ConversationModel, bool]:
        """
        Return the conversation with the given id, creating it when absent.

        Calling twice with the same id yields the same row. A concurrent
        insert of the same id is resolved by rolling back and re-reading, so
        call this first in a fresh transaction.

        Args:
            session: Async database session
            id: Client-supplied conversation UUID, or None for a fresh one

        Returns:
            (conversation, created) tuple
        """
        if id is not None:
            existing = await self.get_by_id(session, id)
            if existing is not None:
                return existing, False

        fields = {"id": id} if id is not None else {}
        try:
            conversation = await self.create(session, **fields)
        except IntegrityError:
            await session.rollback()
            existing = await self.get_by_id(session, id)
            if existing is None:
                raise
            return existing, False
        return conversation, True

    async def touch(
        self,
        session: AsyncSession,
        id: UUID,
        at: datetime | None = None,
    ) -> bool:
        """
        Bump updated_at after a message is appended.

        Args:
            session: Async database session
            id: Conversation UUID
            at: Timestamp to record (defaults to now)

        Returns:
            True if the conversation exists
        """
        return await self.update_by_id(session, id, updated_at=at or utcnow())

    async def set_title_if_absent(
        self,
        session: AsyncSession,
        id: UUID,
        title: str,
    ) -> bool:
        """
        Write the title only when none is stored yet.

        NULL and the empty string both count as no title. The guard is part
        of the UPDATE, so a title is never overwritten even if two writers
        get here.

        Args:
            session: Async database session
            id: Conversation UUID
            title: Derived title

        Returns:
            True if this call set the title
        """
        stmt = (
            update(ConversationModel)
            .where(
                ConversationModel.id == id,
                or_(ConversationModel.title.is_(None), ConversationModel.title == ""),
            )
            .values(title=title)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount > 0


conversation_crud = ConversationCRUD()
