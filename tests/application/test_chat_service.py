"""
Test suite for ChatService.

Drives prepare_chat() and stream_chat() against the in-memory SQLite
database with a recording chat model, covering title derivation,
best-effort persistence, provider failures and client disconnects.

System role: Verification of chat service orchestration layer
"""

import uuid

import pytest

from backend.application.services.chat_service import ChatService
from backend.boundary.db.CRUD.conversation_crud import conversation_crud
from backend.boundary.db.CRUD.message_crud import message_crud
from backend.core.completion_streamer import PROVIDER_ERROR_MESSAGE, CompletionStreamer
from backend.core.exceptions import PersistenceError
from backend.models.chat import ChatRequest
from backend.models.streaming import StreamPart, StreamPartType
from tests.helpers import FlakySessionFactory, RecordingChatModel, assistant_turn, user_turn


def _request(*turns: dict, conversation_id: uuid.UUID | None = None) -> ChatRequest:
    payload = {"messages": list(turns)}
    if conversation_id is not None:
        payload["conversationId"] = str(conversation_id)
    return ChatRequest.model_validate(payload)


async def _collect(service: ChatService, request: ChatRequest) -> tuple[uuid.UUID, list[StreamPart]]:
    prepared = await service.prepare_chat(request)
    parts = [part async for part in service.stream_chat(prepared)]
    return prepared.conversation_id, parts


def _metadata(parts: list[StreamPart]) -> dict:
    return next(p for p in parts if p.type is StreamPartType.MESSAGE_METADATA).data["messageMetadata"]


def _text(parts: list[StreamPart]) -> str:
    return "".join(p.data["delta"] for p in parts if p.type is StreamPartType.TEXT_DELTA)


@pytest.fixture
def chat_service(session_factory, streamer) -> ChatService:
    """ChatService wired to the test database and recording model."""
    return ChatService(session_factory=session_factory, streamer=streamer)


async def _stored(session_factory, conversation_id: uuid.UUID):
    async with session_factory() as db:
        conversation = await conversation_crud.get_by_id(db, conversation_id)
        messages = await message_crud.list_for_conversation(db, conversation_id)
        return conversation, list(messages)


class TestChatServiceFirstExchange:
    """Test suite for a conversation's first exchange."""

    @pytest.mark.asyncio
    async def test_should_emit_parts_in_wire_order(self, chat_service: ChatService) -> None:
        """Test the stream frames text between start and finish."""
        # Act
        _, parts = await _collect(chat_service, _request(user_turn("Hello")))

        # Assert
        types = [p.type for p in parts]
        assert types[:3] == [StreamPartType.START, StreamPartType.START_STEP, StreamPartType.TEXT_START]
        assert types[-4:] == [
            StreamPartType.TEXT_END,
            StreamPartType.FINISH_STEP,
            StreamPartType.MESSAGE_METADATA,
            StreamPartType.FINISH,
        ]
        assert _text(parts) == "Hello from the model"

    @pytest.mark.asyncio
    async def test_should_store_both_messages_and_set_title(
        self, chat_service: ChatService, session_factory
    ) -> None:
        """Test 'Hello' becomes the title once the reply is stored."""
        # Act
        conversation_id, parts = await _collect(chat_service, _request(user_turn("Hello")))

        # Assert
        conversation, messages = await _stored(session_factory, conversation_id)
        assert conversation.title == "Hello"
        assert [(m.role.value, m.content) for m in messages] == [
            ("USER", "Hello"),
            ("ASSISTANT", "Hello from the model"),
        ]
        assert _metadata(parts)["title"] == "Hello"

    @pytest.mark.asyncio
    async def test_announced_id_should_match_stored_assistant_message(
        self, chat_service: ChatService, session_factory
    ) -> None:
        """Test the start part id is the stored assistant message id."""
        # Act
        conversation_id, parts = await _collect(chat_service, _request(user_turn("Hello")))

        # Assert
        _, messages = await _stored(session_factory, conversation_id)
        metadata = _metadata(parts)
        assert parts[0].data["messageId"] == str(messages[1].id)
        assert metadata["assistantMessage"]["id"] == str(messages[1].id)
        assert metadata["userMessage"]["id"] == str(messages[0].id)
        assert metadata["userMessage"]["role"] == "USER"
        assert metadata["conversationId"] == str(conversation_id)

    @pytest.mark.asyncio
    async def test_long_first_message_should_be_truncated(
        self, chat_service: ChatService, session_factory
    ) -> None:
        # Arrange
        content = "0123456789" * 6

        # Act
        conversation_id, _ = await _collect(chat_service, _request(user_turn(content)))

        # Assert
        conversation, _ = await _stored(session_factory, conversation_id)
        assert conversation.title == content[:50] + "..."

    @pytest.mark.asyncio
    async def test_fifty_char_message_should_be_used_whole(
        self, chat_service: ChatService, session_factory
    ) -> None:
        content = "y" * 50

        conversation_id, _ = await _collect(chat_service, _request(user_turn(content)))

        conversation, _ = await _stored(session_factory, conversation_id)
        assert conversation.title == content


class TestChatServiceFollowUp:
    """Test suite for exchanges on an existing conversation."""

    @pytest.mark.asyncio
    async def test_second_exchange_should_keep_title(
        self, chat_service: ChatService, session_factory
    ) -> None:
        """Test the title is set once and never rewritten."""
        # Arrange
        conversation_id, _ = await _collect(chat_service, _request(user_turn("Hello")))

        # Act
        _, parts = await _collect(
            chat_service,
            _request(
                user_turn("Hello"),
                assistant_turn("Hello from the model"),
                user_turn("Tell me something else entirely"),
                conversation_id=conversation_id,
            ),
        )

        # Assert
        conversation, messages = await _stored(session_factory, conversation_id)
        assert conversation.title == "Hello"
        assert _metadata(parts)["title"] == "Hello"
        assert len(messages) == 4

    @pytest.mark.asyncio
    async def test_should_forward_full_history_to_model(
        self, chat_service: ChatService, recording_model: RecordingChatModel
    ) -> None:
        # Act
        await _collect(
            chat_service,
            _request(user_turn("one"), assistant_turn("two"), user_turn("three")),
        )

        # Assert
        assert [m.content for m in recording_model.calls[0]] == ["one", "two", "three"]

    @pytest.mark.asyncio
    async def test_conversation_id_should_be_reused(
        self, chat_service: ChatService, conversation_id: uuid.UUID
    ) -> None:
        """Test a client-supplied id is created once and then reused."""
        # Act
        first = await chat_service.prepare_chat(_request(user_turn("a"), conversation_id=conversation_id))
        second = await chat_service.prepare_chat(_request(user_turn("b"), conversation_id=conversation_id))

        # Assert
        assert first.conversation_id == second.conversation_id == conversation_id
        assert first.created is True
        assert second.created is False

    @pytest.mark.asyncio
    async def test_history_ending_with_assistant_should_not_store_user_turn(
        self, chat_service: ChatService, session_factory
    ) -> None:
        """Test only the reply is stored and no title is derived."""
        # Act
        conversation_id, parts = await _collect(
            chat_service,
            _request(user_turn("Hi"), assistant_turn("Hello")),
        )

        # Assert
        conversation, messages = await _stored(session_factory, conversation_id)
        assert [m.role.value for m in messages] == ["ASSISTANT"]
        assert conversation.title is None
        assert _metadata(parts)["userMessage"] is None


class TestChatServiceFailures:
    """Test suite for provider and store failures."""

    @pytest.mark.asyncio
    async def test_provider_error_should_end_with_error_part(
        self, session_factory
    ) -> None:
        """Test a provider failure yields an error part and stores no reply."""
        # Arrange
        model = RecordingChatModel(reply="partial answer here", fail_after=1)
        service = ChatService(session_factory, CompletionStreamer(model=model, model_id="test-model"))

        # Act
        conversation_id, parts = await _collect(service, _request(user_turn("Hello")))

        # Assert
        assert parts[-1].type is StreamPartType.ERROR
        assert parts[-1].data["errorText"] == PROVIDER_ERROR_MESSAGE
        assert StreamPartType.FINISH not in [p.type for p in parts]
        conversation, messages = await _stored(session_factory, conversation_id)
        assert [m.role.value for m in messages] == ["USER"]
        assert conversation.title is None

    @pytest.mark.asyncio
    async def test_unreachable_store_should_fail_prepare(self, session_factory, streamer) -> None:
        # Arrange
        service = ChatService(FlakySessionFactory(session_factory, healthy_sessions=0), streamer)

        # Act & Assert
        with pytest.raises(PersistenceError):
            await service.prepare_chat(_request(user_turn("Hello")))

    @pytest.mark.asyncio
    async def test_store_failure_after_resolve_should_still_stream(
        self, session_factory, streamer
    ) -> None:
        """Test message persistence failures do not interrupt the reply."""
        # Arrange
        service = ChatService(FlakySessionFactory(session_factory, healthy_sessions=1), streamer)

        # Act
        conversation_id, parts = await _collect(service, _request(user_turn("Hello")))

        # Assert
        metadata = _metadata(parts)
        assert _text(parts) == "Hello from the model"
        assert parts[-1].type is StreamPartType.FINISH
        assert metadata["userMessage"] is None
        assert metadata["assistantMessage"] is None
        assert metadata["title"] is None
        _, messages = await _stored(session_factory, conversation_id)
        assert messages == []

    @pytest.mark.asyncio
    async def test_reply_store_failure_should_keep_user_turn(
        self, session_factory, streamer
    ) -> None:
        """Test a failure storing the reply still finishes the stream with the user record."""
        # Arrange
        service = ChatService(FlakySessionFactory(session_factory, healthy_sessions=2), streamer)

        # Act
        conversation_id, parts = await _collect(service, _request(user_turn("Hello")))

        # Assert
        metadata = _metadata(parts)
        assert _text(parts) == "Hello from the model"
        assert parts[-1].type is StreamPartType.FINISH
        assert metadata["userMessage"]["content"] == "Hello"
        assert metadata["assistantMessage"] is None
        assert metadata["title"] is None
        conversation, messages = await _stored(session_factory, conversation_id)
        assert [m.role.value for m in messages] == ["USER"]
        assert conversation.title is None


class TestChatServiceCancellation:
    """Test suite for consumers that stop reading early."""

    @pytest.mark.asyncio
    async def test_closing_stream_should_close_model_and_discard_reply(
        self, chat_service: ChatService, recording_model: RecordingChatModel, session_factory
    ) -> None:
        """Test a disconnect mid-reply keeps the user turn only."""
        # Arrange
        prepared = await chat_service.prepare_chat(_request(user_turn("Hello")))
        stream = chat_service.stream_chat(prepared)

        # Act
        received = []
        async for part in stream:
            received.append(part)
            if part.type is StreamPartType.TEXT_DELTA:
                break
        await stream.aclose()

        # Assert
        assert recording_model.closed is True
        conversation, messages = await _stored(session_factory, prepared.conversation_id)
        assert [m.role.value for m in messages] == ["USER"]
        assert conversation.title is None
