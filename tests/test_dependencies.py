"""
Test suite for dependency injection container.

Tests factory functions for service creation and the service cache.

System role: Verification of DI container
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from backend.api.deps import (
    get_chat_service,
    get_completion_streamer,
    get_conversation_service,
    get_service_cache,
)
from backend.api.deps.dependencies import ServiceCache
from backend.application.services import ChatService, ConversationService


@pytest.fixture
def mock_db_session() -> AsyncSession:
    """Provide mock async database session."""
    return AsyncMock(spec=AsyncSession)


class TestGetConversationService:
    """Test suite for get_conversation_service factory."""

    def test_should_bind_session(self, mock_db_session: AsyncSession) -> None:
        """Test the service receives the request-scoped session."""
        # Act
        service = get_conversation_service(db=mock_db_session)

        # Assert
        assert isinstance(service, ConversationService)
        assert service.db is mock_db_session


class TestGetChatService:
    """Test suite for get_chat_service factory."""

    def test_should_wire_factory_and_streamer(self) -> None:
        # Arrange
        session_factory = MagicMock()
        streamer = MagicMock()

        # Act
        service = get_chat_service(session_factory=session_factory, streamer=streamer)

        # Assert
        assert isinstance(service, ChatService)
        assert service.session_factory is session_factory
        assert service.streamer is streamer


class TestServiceCache:
    """Test suite for ServiceCache."""

    def test_streamer_should_be_built_once(self) -> None:
        """Test the chat model client is created lazily and reused."""
        # Arrange
        cache = ServiceCache()

        with patch("backend.api.deps.dependencies.CompletionStreamer.from_settings") as from_settings:
            from_settings.return_value = MagicMock()

            # Act
            first = cache.completion_streamer
            second = cache.completion_streamer

        # Assert
        assert first is second
        from_settings.assert_called_once()

    def test_clear_should_drop_streamer(self) -> None:
        cache = ServiceCache()

        with patch("backend.api.deps.dependencies.CompletionStreamer.from_settings") as from_settings:
            from_settings.side_effect = [MagicMock(), MagicMock()]
            first = cache.completion_streamer
            cache.clear()
            second = cache.completion_streamer

        assert first is not second

    def test_get_completion_streamer_should_use_global_cache(self) -> None:
        sentinel = MagicMock()
        cache = get_service_cache()

        with patch.object(ServiceCache, "completion_streamer", new=sentinel):
            assert get_completion_streamer() is sentinel

        assert get_service_cache() is cache



class TestDepsExports:
    """Test suite for the backend.api.deps re-exports."""

    def test_should_export_only_route_dependencies(self) -> None:
        import backend.api.deps as deps

        assert set(deps.__all__) == {
            "get_chat_service",
            "get_completion_streamer",
            "get_conversation_service",
            "get_service_cache",
            "get_session_factory",
        }
