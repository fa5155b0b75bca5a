"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin, CreatedAtMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Connection management
  - ConversationModel, MessageModel, MessageRole: Domain entities
  - conversation_crud, message_crud: CRUD operation singletons

Dependencies: sqlalchemy, backend.configs
System role: Database adapter providing persistent storage for conversations
and their messages.
"""

from backend.boundary.db.base import Base, CreatedAtMixin, TimestampMixin, UUIDMixin, utcnow
from backend.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from backend.boundary.db.models.conversation_model import ConversationModel
from backend.boundary.db.models.message_model import MessageModel, MessageRole
from backend.boundary.db.CRUD import (
    BaseCRUD,
    ConversationCRUD,
    MessageCRUD,
    conversation_crud,
    message_crud,
)

__all__ = [
    # Base classes
    "Base",
    "CreatedAtMixin",
    "TimestampMixin",
    "UUIDMixin",
    "utcnow",
    # Connection
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "ConversationModel",
    "MessageModel",
    "MessageRole",
    # CRUD classes
    "BaseCRUD",
    "ConversationCRUD",
    "MessageCRUD",
    # CRUD singletons
    "conversation_crud",
    "message_crud",
]
