"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_chat_service,
    get_completion_streamer,
    get_conversation_service,
    get_service_cache,
    get_session_factory,
)

__all__ = [
    "get_chat_service",
    "get_completion_streamer",
    "get_conversation_service",
    "get_service_cache",
    "get_session_factory",
]
