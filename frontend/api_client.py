"""
HTTP client for the chat API.

Dependencies: httpx, backend.models.streaming
System role: Client transport for conversations and streamed chat
"""

import logging
from collections.abc import AsyncIterator
from typing import Any

import httpx

from backend.models.streaming import StreamPartType, decode_sse_line
from frontend.models import ConversationItem, TranscriptMessage

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000/api/v1"


class ChatClientError(Exception):
    """Raised when the API answers with an error status."""

    def __init__(self, status_code: int, detail: str) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"{status_code}: {detail}")


class ChatStreamError(Exception):
    """
    Raised when the chat stream reports a provider failure.

    Attributes:
        conversation_id: Conversation the server resolved for the request,
            from the X-Conversation-ID header
    """

    def __init__(self, message: str, conversation_id: str | None = None) -> None:
        super().__init__(message)
        self.conversation_id = conversation_id


def _detail(response: httpx.Response) -> str:
    try:
        return response.json().get("detail", response.text)
    except ValueError:
        return response.text


class ChatApiClient:
    """
    Async client for the conversation and chat routes.

    Usage:
        async with ChatApiClient("http://localhost:8000/api/v1") as api:
            conversations = await api.list_conversations()
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        client: httpx.AsyncClient | None = None,
        timeout: float = 60.0,
    ) -> None:
        """
        Initialize client.

        Args:
            base_url: API root including the version prefix
            client: Pre-built httpx client (e.g. bound to an ASGI transport)
            timeout: Request timeout in seconds when building our own client
        """
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def __aenter__(self) -> "ChatApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        response = await self._client.request(method, url, **kwargs)
        if response.is_error:
            raise ChatClientError(response.status_code, _detail(response))
        return response

    async def list_conversations(self) -> list[ConversationItem]:
        """GET /conversations."""
        response = await self._request("GET", "/conversations")
        return [ConversationItem.model_validate(item) for item in response.json()]

    async def create_conversation(self) -> ConversationItem:
        """POST /conversations."""
        response = await self._request("POST", "/conversations")
        return ConversationItem.model_validate(response.json())

    async def get_messages(self, conversation_id: str) -> list[TranscriptMessage]:
        """GET /conversations/{id}/messages."""
        response = await self._request("GET", f"/conversations/{conversation_id}/messages")
        return [TranscriptMessage.from_server(item) for item in response.json()]

    async def delete_conversation(self, conversation_id: str) -> None:
        """DELETE /conversations/{id}."""
        await self._request("DELETE", f"/conversations/{conversation_id}")

    async def stream_chat(
        self,
        messages: list[dict[str, Any]],
        conversation_id: str | None = None,
    ) -> AsyncIterator[dict[str, Any]]:
        """
        POST /chat and yield decoded stream parts as they arrive.

        Args:
            messages: Prior turns in UI message shape, oldest first
            conversation_id: Conversation to continue, None for a new one

        Yields:
            dict: Stream parts ("start", "text-delta", "message-metadata", ...)

        Raises:
            ChatClientError: Non-2xx response before streaming
            ChatStreamError: The stream carried an error part
        """
        payload: dict[str, Any] = {"messages": messages}
        if conversation_id is not None:
            payload["conversationId"] = conversation_id

        async with self._client.stream("POST", "/chat", json=payload) as response:
            if response.is_error:
                await response.aread()
                raise ChatClientError(response.status_code, _detail(response))

            resolved_id = response.headers.get("X-Conversation-ID")
            async for line in response.aiter_lines():
                part = decode_sse_line(line)
                if part is None:
                    continue
                if part["type"] == "done":
                    return
                if part["type"] == StreamPartType.ERROR.value:
                    raise ChatStreamError(part.get("errorText", "stream failed"), resolved_id)
                yield part
