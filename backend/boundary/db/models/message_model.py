"""
Message ORM model.

One immutable user or assistant turn belonging to exactly one conversation.

Dependencies: sqlalchemy, backend.boundary.db.base
System role: Message persistence
"""

import enum
from uuid import UUID

from sqlalchemy import Enum, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.boundary.db.base import Base, UUIDMixin, CreatedAtMixin


class MessageRole(str, enum.Enum):
    """
    Author of a stored turn.

    USER: Sent by the person chatting
    ASSISTANT: Completed reply from the model provider
    """

    USER = "USER"
    ASSISTANT = "ASSISTANT"


class MessageModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Message ORM model.

    Rows are never updated after insert. Within a conversation they are
    ordered by created_at ascending, which is the only replay order.

    Attributes:
        id: UUID primary key (auto-generated or pre-assigned by the stream)
        role: USER or ASSISTANT
        content: Plain text content
        conversation_id: Owning conversation
        created_at: Insert timestamp (UTC)
    """

    __tablename__ = "messages"

    role: Mapped[MessageRole] = mapped_column(
        Enum(MessageRole, name="message_role"),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    conversation_id: Mapped[UUID] = mapped_column(
        ForeignKey("conversations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    conversation = relationship("ConversationModel", back_populates="messages")
