"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: backend.configs, backend.application, backend.boundary, backend.core
System role: DI container for service injection
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from backend.configs import get_settings
from backend.boundary.db import get_async_db, get_async_session_factory
from backend.application.services import ChatService, ConversationService
from backend.core.completion_streamer import CompletionStreamer


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self):
        self._completion_streamer = None

    @property
    def completion_streamer(self) -> CompletionStreamer:
        """Get cached completion streamer (chat model client)."""
        if self._completion_streamer is None:
            settings = get_settings()
            self._completion_streamer = CompletionStreamer.from_settings(settings.llm)
        return self._completion_streamer

    def clear(self) -> None:
        """Clear all cached instances."""
        self._completion_streamer = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the async session factory for services that manage their own sessions."""
    return get_async_session_factory()


def get_completion_streamer() -> CompletionStreamer:
    """Get the shared completion streamer (created on first use)."""
    return get_service_cache().completion_streamer


def get_conversation_service(db: AsyncSession = Depends(get_async_db)) -> ConversationService:
    """
    Get conversation service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        ConversationService: Conversation service instance
    """
    return ConversationService(db=db)


def get_chat_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    streamer: CompletionStreamer = Depends(get_completion_streamer),
) -> ChatService:
    """
    Get chat service instance.

    The service opens its own sessions because the streamed response
    outlives the request-scoped session.

    Args:
        session_factory: Async session factory (injected via Depends)
        streamer: Completion streamer (injected via Depends)

    Returns:
        ChatService: Chat service instance
    """
    return ChatService(session_factory=session_factory, streamer=streamer)
