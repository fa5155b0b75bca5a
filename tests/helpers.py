"""
Test doubles and payload builders shared across the suite.

System role: Test helpers (chat model doubles, flaky store, UI turns)
"""

import itertools
import uuid

from langchain_core.language_models.fake_chat_models import GenericFakeChatModel
from langchain_core.messages import AIMessage, AIMessageChunk


class RecordingChatModel:
    """
    Chat model double that records the history it was called with.

    Streams `reply` word by word and notes whether its stream was closed.
    """

    def __init__(self, reply: str = "Hello from the model", fail_after: int | None = None) -> None:
        self.reply = reply
        self.fail_after = fail_after
        self.calls: list[list] = []
        self.closed = False

    async def astream(self, messages):
        self.calls.append(list(messages))
        try:
            for index, word in enumerate(self.reply.split(" ")):
                if self.fail_after is not None and index >= self.fail_after:
                    raise RuntimeError("upstream 503")
                yield AIMessageChunk(content=word if index == 0 else f" {word}")
        finally:
            self.closed = True


class FlakySessionFactory:
    """Session factory that stops working after a number of sessions."""

    def __init__(self, factory, healthy_sessions: int) -> None:
        self.factory = factory
        self.healthy_sessions = healthy_sessions
        self.opened = 0

    def __call__(self):
        self.opened += 1
        if self.opened > self.healthy_sessions:
            raise ConnectionRefusedError("store unreachable")
        return self.factory()


def fake_chat_model(reply: str = "Hi there friend") -> GenericFakeChatModel:
    """LangChain fake chat model that streams `reply` on every call."""
    return GenericFakeChatModel(messages=itertools.cycle([AIMessage(content=reply)]))


def user_turn(text: str) -> dict:
    """A user turn in UI message shape."""
    return {"id": uuid.uuid4().hex, "role": "user", "parts": [{"type": "text", "text": text}]}


def assistant_turn(text: str) -> dict:
    """An assistant turn in UI message shape."""
    return {"id": uuid.uuid4().hex, "role": "assistant", "parts": [{"type": "text", "text": text}]}

