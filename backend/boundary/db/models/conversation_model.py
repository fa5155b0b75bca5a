"""
Conversation ORM model.

A titled, timestamped container for an ordered sequence of messages.

Dependencies: sqlalchemy, backend.boundary.db.base
System role: Conversation persistence
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.boundary.db.base import Base, UUIDMixin, TimestampMixin


class ConversationModel(Base, UUIDMixin, TimestampMixin):
    """
    Conversation ORM model.

    Created empty, either explicitly or on the first chat request. The title
    is derived once from the first user message and never rewritten.
    updated_at is bumped whenever a message is appended.

    Attributes:
        id: UUID primary key (auto-generated)
        title: Derived display title, NULL until the first exchange completes
        messages: Messages in creation order
        created_at: Conversation creation timestamp (UTC)
        updated_at: Last append timestamp (UTC)
    """

    __tablename__ = "conversations"

    title: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
        default=None,
        doc="Derived title (first user message, truncated)",
    )

    messages = relationship(
        "MessageModel",
        back_populates="conversation",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="MessageModel.created_at",
    )
