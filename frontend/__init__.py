"""
Client side of the chat application.

Exports:
  - ChatApiClient: async HTTP client for the conversation and chat routes
  - ChatSession: explicit client state (conversation list, selection, transcript)
"""

from frontend.api_client import ChatApiClient, ChatClientError, ChatStreamError
from frontend.models import ConversationItem, TranscriptMessage
from frontend.session import ChatSession, SessionStatus

__all__ = [
    "ChatApiClient",
    "ChatClientError",
    "ChatSession",
    "ChatStreamError",
    "ConversationItem",
    "SessionStatus",
    "TranscriptMessage",
]
