"""
Chat service for streamed conversational replies.

Orchestrates the chat flow: resolve the conversation, persist the user turn,
relay the provider stream, then persist the assistant reply and derive the
title in one transaction. Persistence around the stream is best effort: a
store failure is logged and the user still receives the streamed answer.

Dependencies: backend.core, backend.boundary.db, backend.models
System role: Chat service orchestration layer
"""

import asyncio
import logging
import uuid
from collections.abc import AsyncGenerator
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from backend.boundary.db.CRUD.conversation_crud import conversation_crud
from backend.boundary.db.CRUD.message_crud import message_crud
from backend.boundary.db.models.message_model import MessageRole
from backend.application.services.conversation_service import message_to_dict
from backend.core.completion_streamer import CompletionStreamer
from backend.core.exceptions import PersistenceError, ProviderError
from backend.core.title import derive_title, should_set_title
from backend.models.chat import ChatRequest, UIMessage
from backend.models.conversation import MessageResponse
from backend.models.streaming import StreamPart, StreamPartType
from backend.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


@dataclass
class PreparedChat:
    """
    State carried from request handling into the response stream.

    Attributes:
        conversation_id: Resolved conversation
        created: Whether this request created the conversation
        turns: Full history to forward to the provider
        user_message: Persisted user turn, None if absent or not stored
    """

    conversation_id: UUID
    created: bool
    turns: list[UIMessage]
    user_message: dict | None = None


def _wire_message(message: dict | None) -> dict | None:
    """Serialize a message dict the way the messages endpoint does."""
    if message is None:
        return None
    return MessageResponse(**message).model_dump(mode="json", by_alias=True)


class ChatService:
    """
    Chat service for streamed replies.

    Opens its own short-lived database sessions, because the response stream
    outlives the request handler.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        streamer: CompletionStreamer,
    ) -> None:
        """
        Initialize chat service.

        Args:
            session_factory: Factory for async database sessions
            streamer: Provider adapter used for completions
        """
        self.session_factory = session_factory
        self.streamer = streamer

    async def prepare_chat(self, request: ChatRequest) -> PreparedChat:
        """
        Resolve the conversation and persist the inbound user turn.

        Args:
            request: Chat request with optional conversation id and history

        Returns:
            PreparedChat: Inputs for stream_chat()

        Raises:
            PersistenceError: If the conversation cannot be resolved
        """
        try:
            async with self.session_factory() as db:
                conversation, created = await conversation_crud.get_or_create(
                    db, request.conversation_id
                )
                conversation_id = conversation.id
                await db.commit()
        except Exception as e:
            log_exception_with_context(
                logger,
                "Failed to resolve conversation",
                e,
                conversation_id=request.conversation_id,
            )
            raise PersistenceError("Failed to resolve conversation", operation="resolve") from e

        prepared = PreparedChat(
            conversation_id=conversation_id,
            created=created,
            turns=list(request.messages),
        )
        logger.info(
            f"{__name__}:prepare_chat - conversation_id={conversation_id} created={created} "
            f"turns={len(request.messages)}"
        )

        user_turn = request.last_user_turn
        if user_turn is not None:
            prepared.user_message = await self._persist_user_turn(conversation_id, user_turn.text)
        return prepared

    async def _persist_user_turn(self, conversation_id: UUID, content: str) -> dict | None:
        try:
            async with self.session_factory() as db:
                message = await message_crud.append(db, conversation_id, MessageRole.USER, content)
                await db.commit()
                return message_to_dict(message)
        except Exception as e:
            log_exception_with_context(
                logger,
                "Failed to persist user message",
                e,
                conversation_id=conversation_id,
                content_length=len(content),
            )
            return None

    async def _persist_assistant_reply(
        self,
        conversation_id: UUID,
        message_id: UUID,
        content: str,
    ) -> tuple[dict | None, str | None]:
        """
        Store the reply and maybe set the title, atomically.

        The conversation row is locked first, so concurrent completions for
        the same conversation serialize on it.

        Returns:
            (assistant message dict or None, current title)
        """
        try:
            async with self.session_factory() as db:
                conversation = await conversation_crud.get_for_update(db, conversation_id)
                if conversation is None:
                    logger.warning(
                        "Conversation removed before reply was stored",
                        extra={"conversation_id": str(conversation_id)},
                    )
                    return None, None

                title = conversation.title
                message = await message_crud.append(
                    db, conversation_id, MessageRole.ASSISTANT, content, id=message_id
                )
                count = await message_crud.count_for_conversation(db, conversation_id)
                if should_set_title(count, title):
                    first_user = await message_crud.first_user_message(db, conversation_id)
                    if first_user is not None:
                        candidate = derive_title(first_user.content)
                        if await conversation_crud.set_title_if_absent(db, conversation_id, candidate):
                            title = candidate
                await db.commit()
                return message_to_dict(message), title
        except Exception as e:
            log_exception_with_context(
                logger,
                "Failed to persist assistant reply",
                e,
                conversation_id=conversation_id,
                message_id=message_id,
                content_length=len(content),
            )
            return None, None

    async def stream_chat(self, prepared: PreparedChat) -> AsyncGenerator[StreamPart, None]:
        """
        Relay the provider stream as UI message stream parts.

        Flow:
        1. Announce the assistant message id
        2. Relay provider text as text-delta parts
        3. Persist the reply and derive the title
        4. Send canonical records as message metadata, then finish

        A provider failure yields an error part and ends the stream without
        storing a reply. If the consumer stops early (client disconnect), the
        provider stream is closed and nothing further is stored.

        Args:
            prepared: Result of prepare_chat()

        Yields:
            StreamPart: Parts in wire order
        """
        conversation_id = prepared.conversation_id
        assistant_id = uuid.uuid4()
        text_id = f"text-{assistant_id.hex[:12]}"
        full_answer = ""
        text_started = False

        yield StreamPart.start(str(assistant_id))
        yield StreamPart(type=StreamPartType.START_STEP)

        tokens = self.streamer.astream(prepared.turns)
        try:
            async for token in tokens:
                if not text_started:
                    text_started = True
                    yield StreamPart(type=StreamPartType.TEXT_START, data={"id": text_id})
                full_answer += token
                yield StreamPart.text_delta(text_id, token)
        except ProviderError as e:
            logger.error(
                f"{__name__}:stream_chat - provider failed conversation_id={conversation_id}: {e}"
            )
            yield StreamPart.error(e.message)
            return
        except (asyncio.CancelledError, GeneratorExit):
            logger.info(
                f"{__name__}:stream_chat - client went away, reply discarded "
                f"conversation_id={conversation_id} partial_len={len(full_answer)}"
            )
            raise
        finally:
            await tokens.aclose()

        if text_started:
            yield StreamPart(type=StreamPartType.TEXT_END, data={"id": text_id})
        yield StreamPart(type=StreamPartType.FINISH_STEP)

        assistant_message, title = await self._persist_assistant_reply(
            conversation_id, assistant_id, full_answer
        )
        logger.info(
            f"{__name__}:stream_chat - END conversation_id={conversation_id} "
            f"answer_len={len(full_answer)} stored={assistant_message is not None}"
        )

        yield StreamPart.metadata({
            "conversationId": str(conversation_id),
            "title": title,
            "userMessage": _wire_message(prepared.user_message),
            "assistantMessage": _wire_message(assistant_message),
        })
        yield StreamPart(type=StreamPartType.FINISH)
