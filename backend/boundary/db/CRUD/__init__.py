"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from backend.boundary.db.CRUD import conversation_crud, message_crud

    conversations = await conversation_crud.list_recent(db)
"""

from backend.boundary.db.CRUD.base_crud import BaseCRUD
from backend.boundary.db.CRUD.conversation_crud import ConversationCRUD, conversation_crud
from backend.boundary.db.CRUD.message_crud import MessageCRUD, message_crud

__all__ = [
    "BaseCRUD",
    "ConversationCRUD",
    "conversation_crud",
    "MessageCRUD",
    "message_crud",
]
