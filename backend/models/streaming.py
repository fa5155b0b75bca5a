"""
Streaming event schemas for the chat endpoint.

Implements the UI message stream protocol: Server-Sent Events whose data
lines are JSON parts ("start", "text-delta", "finish", ...) and a final
"[DONE]" sentinel.

Dependencies: pydantic
System role: Streaming protocol schemas
"""

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

DONE_SENTINEL = "[DONE]"

UI_MESSAGE_STREAM_HEADERS = {
    "x-vercel-ai-ui-message-stream": "v1",
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


class StreamPartType(str, Enum):
    """Server-to-client stream part types."""

    START = "start"
    START_STEP = "start-step"
    TEXT_START = "text-start"
    TEXT_DELTA = "text-delta"
    TEXT_END = "text-end"
    FINISH_STEP = "finish-step"
    MESSAGE_METADATA = "message-metadata"
    FINISH = "finish"
    ERROR = "error"


class StreamPart(BaseModel):
    """
    One part of the UI message stream.

    Attributes:
        type: Part type identifier
        data: Part-specific fields, flattened next to "type" on the wire
    """

    type: StreamPartType
    data: dict[str, Any] = Field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON-serializable wire object."""
        return {"type": self.type.value, **self.data}

    def to_sse(self) -> str:
        """Encode as one SSE frame."""
        return f"data: {json.dumps(self.to_dict(), separators=(',', ':'))}\n\n"

    @classmethod
    def start(cls, message_id: str) -> "StreamPart":
        return cls(type=StreamPartType.START, data={"messageId": message_id})

    @classmethod
    def text_delta(cls, text_id: str, delta: str) -> "StreamPart":
        return cls(type=StreamPartType.TEXT_DELTA, data={"id": text_id, "delta": delta})

    @classmethod
    def metadata(cls, metadata: dict[str, Any]) -> "StreamPart":
        return cls(type=StreamPartType.MESSAGE_METADATA, data={"messageMetadata": metadata})

    @classmethod
    def error(cls, error_text: str) -> "StreamPart":
        return cls(type=StreamPartType.ERROR, data={"errorText": error_text})


def done_frame() -> str:
    """Terminal SSE frame sent after a successful stream."""
    return f"data: {DONE_SENTINEL}\n\n"


def decode_sse_line(line: str) -> dict[str, Any] | None:
    """
    Decode one line of the stream.

    Args:
        line: A raw line (without trailing newline)

    Returns:
        The part as a dict, {"type": "done"} for the sentinel, or None for
        blank lines, comments and non-data fields
    """
    if not line.startswith("data:"):
        return None
    payload = line[len("data:"):].strip()
    if not payload:
        return None
    if payload == DONE_SENTINEL:
        return {"type": "done"}
    return json.loads(payload)
