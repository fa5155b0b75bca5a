"""
Client chat session state.

Holds the conversation list, the selected conversation and its live
transcript. Local updates are optimistic; the stream's message metadata
replaces local ids and timestamps with the stored ones.

Dependencies: frontend.api_client, frontend.models
System role: Client state controller for the chat UI
"""

import enum
import logging
from collections.abc import AsyncIterator
from typing import Any

import httpx

from frontend.api_client import ChatApiClient, ChatClientError, ChatStreamError
from frontend.models import ConversationItem, TranscriptMessage, local_id

logger = logging.getLogger(__name__)


class SessionStatus(str, enum.Enum):
    """
    Lifecycle of the in-flight exchange.

    READY: Idle, input accepted
    SUBMITTED: Request sent, no reply part received yet
    STREAMING: Reply text arriving
    ERROR: Last exchange failed
    """

    READY = "ready"
    SUBMITTED = "submitted"
    STREAMING = "streaming"
    ERROR = "error"


class ChatSession:
    """
    Explicit page-level state for one chat client.

    Created empty; load() fills the conversation list and reset() returns to
    the initial state. Only the selected conversation's transcript is held;
    other transcripts are fetched again on select().
    """

    def __init__(self, api: ChatApiClient) -> None:
        self.api = api
        self.reset()

    def reset(self) -> None:
        """Drop all local state."""
        self.conversations: list[ConversationItem] = []
        self.selected_conversation_id: str | None = None
        self.transcript: list[TranscriptMessage] = []
        self.status = SessionStatus.READY
        self.error: str | None = None

    @property
    def is_busy(self) -> bool:
        return self.status in (SessionStatus.SUBMITTED, SessionStatus.STREAMING)

    @property
    def selected_conversation(self) -> ConversationItem | None:
        for conversation in self.conversations:
            if conversation.id == self.selected_conversation_id:
                return conversation
        return None

    async def load(self) -> list[ConversationItem]:
        """Fetch the conversation list from the server."""
        self.conversations = await self.api.list_conversations()
        return self.conversations

    async def new_conversation(self) -> ConversationItem:
        """Create an empty conversation on the server and select it."""
        conversation = await self.api.create_conversation()
        self.conversations.insert(0, conversation)
        self.selected_conversation_id = conversation.id
        self.transcript = []
        return conversation

    async def select(self, conversation_id: str) -> list[TranscriptMessage]:
        """Select a conversation and fetch its stored transcript."""
        self.selected_conversation_id = conversation_id
        self.transcript = await self.api.get_messages(conversation_id)
        return self.transcript

    async def delete(self, conversation_id: str) -> None:
        """Delete a conversation; clears the selection when it was active."""
        await self.api.delete_conversation(conversation_id)
        self.conversations = [c for c in self.conversations if c.id != conversation_id]
        if self.selected_conversation_id == conversation_id:
            self.selected_conversation_id = None
            self.transcript = []

    async def submit(self, text: str) -> AsyncIterator[str]:
        """
        Send a user message and stream the reply into the transcript.

        Blank input, or input while an exchange is in flight, is ignored. After
        a provider failure the session switches to the conversation the server
        stored the user turn in. Stopping early leaves the session ready.

        Args:
            text: User input

        Yields:
            str: Reply text deltas as they arrive

        Raises:
            ChatStreamError: The provider failed mid-stream
            ChatClientError: The server rejected the request
        """
        if not text.strip() or self.is_busy:
            return

        user_message = TranscriptMessage(role="user", content=text)
        self.transcript.append(user_message)
        history = [m.to_ui_message() for m in self.transcript]
        assistant_message: TranscriptMessage | None = None
        self.status = SessionStatus.SUBMITTED
        self.error = None

        parts = self.api.stream_chat(history, self.selected_conversation_id)
        try:
            async for part in parts:
                part_type = part["type"]
                if part_type == "start":
                    assistant_message = TranscriptMessage(
                        id=part.get("messageId") or local_id(),
                        role="assistant",
                    )
                    self.transcript.append(assistant_message)
                    self.status = SessionStatus.STREAMING
                elif part_type == "text-delta" and assistant_message is not None:
                    assistant_message.content += part["delta"]
                    yield part["delta"]
                elif part_type == "message-metadata":
                    self._reconcile(part["messageMetadata"], user_message, assistant_message)
        except ChatStreamError as e:
            self.status = SessionStatus.ERROR
            self.error = str(e)
            logger.warning(
                "Chat stream failed",
                extra={"error_msg": str(e), "conversation_id": e.conversation_id},
            )
            if e.conversation_id:
                await self._resync(e.conversation_id)
            raise
        except Exception as e:
            self.status = SessionStatus.ERROR
            self.error = str(e)
            raise
        finally:
            await parts.aclose()
            # Consumer stopped early or was cancelled
            if self.is_busy:
                self.status = SessionStatus.READY

        self.status = SessionStatus.READY
        await self.load()

    async def _resync(self, conversation_id: str) -> None:
        """
        Adopt the conversation a failed exchange was stored in.

        The transcript is replaced with the stored one, so the partial reply
        is dropped and the stored user turn is not sent again elsewhere.
        """
        try:
            await self.select(conversation_id)
            await self.load()
        except (ChatClientError, httpx.HTTPError) as e:
            logger.warning(
                "Could not reload conversation after failed exchange",
                extra={"conversation_id": conversation_id, "error_msg": str(e)},
            )

    def _reconcile(
        self,
        metadata: dict[str, Any],
        user_message: TranscriptMessage,
        assistant_message: TranscriptMessage | None,
    ) -> None:
        """Merge the stored records into the transcript by id."""
        self.selected_conversation_id = metadata["conversationId"]
        if metadata.get("userMessage"):
            user_message.merge_server(metadata["userMessage"])
        if metadata.get("assistantMessage") and assistant_message is not None:
            assistant_message.merge_server(metadata["assistantMessage"])
