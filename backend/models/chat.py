"""
Chat domain models and schemas.

Request schema for the streaming chat endpoint. Turns follow the UI message
shape: a role plus typed content parts, of which only "text" parts are read.

Dependencies: pydantic
System role: Chat API contracts
"""

import uuid
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from backend.models.common import APIModel


class MessagePart(BaseModel):
    """One typed content part of a turn. Non-text parts are carried but ignored."""

    model_config = ConfigDict(extra="allow")

    type: str
    text: str | None = None


class UIMessage(BaseModel):
    """A prior conversation turn as sent by the client."""

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    role: Literal["system", "user", "assistant"]
    parts: list[MessagePart] = Field(default_factory=list)

    @property
    def text(self) -> str:
        """Concatenated text of all "text" parts."""
        return "".join(part.text or "" for part in self.parts if part.type == "text")


class ChatRequest(APIModel):
    """Request schema for POST /chat."""

    conversation_id: uuid.UUID | None = Field(
        default=None,
        description="Conversation to append to; created with this id when absent, new one when omitted",
    )
    messages: list[UIMessage] = Field(min_length=1, description="Ordered prior turns, oldest first")

    @property
    def last_user_turn(self) -> UIMessage | None:
        """The final turn when it was authored by the user."""
        last = self.messages[-1]
        return last if last.role == "user" else None
