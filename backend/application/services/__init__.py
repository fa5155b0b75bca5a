"""Service orchestrators."""

from .chat_service import ChatService, PreparedChat
from .conversation_service import ConversationService

__all__ = [
    "ChatService",
    "ConversationService",
    "PreparedChat",
]
