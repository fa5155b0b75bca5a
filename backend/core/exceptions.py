"""
Exception hierarchy for the chat application.

Three failure categories reach the HTTP layer differently: a missing
conversation maps to 404, a store failure before streaming maps to 500, and a
provider failure during streaming becomes an error part in the stream.

Dependencies: None (pure domain layer)
System role: Shared error types for services and routers
"""

from typing import Any


class ChatAppException(Exception):
    """
    Base class for application errors.

    Attributes:
        message: Client-safe description, used as the HTTP detail or stream errorText
        details: Context for logs (ids, operation, model)
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"


class ConversationNotFoundError(ChatAppException):
    """No conversation exists with the requested id."""

    def __init__(self, conversation_id: str) -> None:
        super().__init__(
            f"Conversation not found: {conversation_id}",
            {"conversation_id": conversation_id},
        )


class PersistenceError(ChatAppException):
    """
    The relational store could not complete an operation.

    Args:
        message: Error message
        operation: Failed step (resolve, list, create, read, delete)
    """

    def __init__(self, message: str, operation: str | None = None) -> None:
        super().__init__(message, {"operation": operation} if operation else None)


class ProviderError(ChatAppException):
    """
    The model provider failed or timed out mid-completion.

    Args:
        message: Error message, forwarded to the client as errorText
        model: Model identifier that was streaming
    """

    def __init__(self, message: str, model: str | None = None) -> None:
        super().__init__(message, {"model": model} if model else None)
