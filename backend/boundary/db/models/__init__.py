"""
Database models package.

Exports:
  - ConversationModel: Conversation ORM model
  - MessageModel, MessageRole: Message ORM model and role enum

Dependencies: sqlalchemy, backend.boundary.db.base
System role: Database model definitions for domain entities
"""

from backend.boundary.db.models.conversation_model import ConversationModel
from backend.boundary.db.models.message_model import MessageModel, MessageRole

__all__ = [
    "ConversationModel",
    "MessageModel",
    "MessageRole",
]
