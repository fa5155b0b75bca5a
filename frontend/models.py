"""
Client-side view models.

Dependencies: pydantic, backend.models.common
System role: Local state records for the chat session
"""

from datetime import datetime, timezone
from typing import Any, Literal
import uuid

from pydantic import Field

from backend.models.common import APIModel


def local_id() -> str:
    """Temporary id for a record the server has not confirmed yet."""
    return f"local-{uuid.uuid4().hex}"


class ConversationItem(APIModel):
    """Sidebar entry for one conversation."""

    id: str
    title: str | None = None
    created_at: datetime
    updated_at: datetime


class TranscriptMessage(APIModel):
    """
    One message in the live transcript.

    Attributes:
        id: Server id once persisted, a local- id before that
        role: "user" or "assistant"
        content: Text, grows while the assistant reply streams
        created_at: Server timestamp once persisted, local clock before
        persisted: Whether id and created_at come from the server
    """

    id: str = Field(default_factory=local_id)
    role: Literal["user", "assistant"]
    content: str = ""
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    persisted: bool = False

    @classmethod
    def from_server(cls, payload: dict[str, Any]) -> "TranscriptMessage":
        """Build from a stored message as returned by the API."""
        return cls(
            id=str(payload["id"]),
            role=payload["role"].lower(),
            content=payload["content"],
            created_at=payload["createdAt"],
            persisted=True,
        )

    def merge_server(self, payload: dict[str, Any]) -> None:
        """Adopt the canonical id and timestamp of the stored copy."""
        stored = TranscriptMessage.from_server(payload)
        self.id = stored.id
        self.created_at = stored.created_at
        self.content = stored.content
        self.persisted = True

    def to_ui_message(self) -> dict[str, Any]:
        """Turn shape expected by the chat endpoint."""
        return {
            "id": self.id,
            "role": self.role,
            "parts": [{"type": "text", "text": self.content}],
        }
