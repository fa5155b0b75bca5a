"""
Conversation domain models and schemas.

Request/response schemas for conversation and message operations.

Dependencies: pydantic
System role: Conversation API contracts
"""

from datetime import datetime
from typing import Literal
import uuid

from pydantic import Field

from backend.models.common import APIModel


class ConversationResponse(APIModel):
    """A conversation as listed in the sidebar."""

    id: uuid.UUID
    title: str | None = Field(default=None, description="Derived title, null until the first exchange")
    created_at: datetime
    updated_at: datetime


class MessageResponse(APIModel):
    """A stored message, in conversation order."""

    id: uuid.UUID
    role: Literal["USER", "ASSISTANT"]
    content: str
    created_at: datetime
