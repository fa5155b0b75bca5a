"""
Core business logic module.

Contains the exception hierarchy, title derivation and the model provider
adapter. Nothing here touches HTTP or the database.
"""

from backend.core.exceptions import (
    ChatAppException,
    ConversationNotFoundError,
    PersistenceError,
    ProviderError,
)
from backend.core.title import derive_title, should_set_title
from backend.core.completion_streamer import CompletionStreamer

__all__ = [
    # Exceptions
    "ChatAppException",
    "ConversationNotFoundError",
    "PersistenceError",
    "ProviderError",
    # Business logic
    "derive_title",
    "should_set_title",
    "CompletionStreamer",
]
