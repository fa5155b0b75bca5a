"""
Generic CRUD operations keyed by UUID primary key.

ConversationCRUD and MessageCRUD build their queries on top of these.
Nothing here commits: methods flush, and the caller owns the transaction.

Dependencies: sqlalchemy
System role: Shared persistence primitives
"""

from typing import Generic, TypeVar
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    CRUD primitives for one mapped class.

    Attributes:
        model: Mapped class with a UUID `id` column
    """

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def create(self, session: AsyncSession, **fields) -> ModelT:
        """
        Insert a row and load its server-side defaults.

        Args:
            session: Async database session
            **fields: Column values; omitted ones take their defaults

        Returns:
            The inserted instance, refreshed
        """
        instance = self.model(**fields)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_by_id(self, session: AsyncSession, id: UUID) -> ModelT | None:
        """Row with the given id, or None."""
        result = await session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def exists(self, session: AsyncSession, id: UUID) -> bool:
        """Whether a row with the given id is stored, without loading it."""
        result = await session.execute(select(self.model.id).where(self.model.id == id))
        return result.scalar_one_or_none() is not None

    async def update_by_id(self, session: AsyncSession, id: UUID, **values) -> bool:
        """
        Issue a single UPDATE for one row.

        Returns:
            False when no row matched
        """
        result = await session.execute(
            update(self.model).where(self.model.id == id).values(**values)
        )
        return result.rowcount > 0

    async def delete_by_id(self, session: AsyncSession, id: UUID) -> bool:
        """
        Issue a single DELETE for one row.

        Returns:
            False when no row matched
        """
        result = await session.execute(delete(self.model).where(self.model.id == id))
        return result.rowcount > 0
