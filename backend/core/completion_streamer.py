"""
Streamed completions from the hosted chat model.

Converts UI turns into LangChain messages, calls the provider's astream(),
and yields text chunks as they arrive. Nothing is buffered.

Dependencies: langchain, langchain_core, backend.configs
System role: Model provider adapter for the chat streaming endpoint
"""

import asyncio
import logging
from collections.abc import AsyncGenerator, Sequence

from langchain.chat_models import init_chat_model
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from backend.configs.llm import LLMSettings
from backend.core.exceptions import ProviderError
from backend.models.chat import UIMessage
from backend.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

PROVIDER_ERROR_MESSAGE = "Model provider error"
TIMEOUT_ERROR_MESSAGE = "Completion exceeded time limit"

_ROLE_TO_MESSAGE = {
    "system": SystemMessage,
    "user": HumanMessage,
    "assistant": AIMessage,
}


def to_langchain_messages(
    turns: Sequence[UIMessage],
    system_prompt: str | None = None,
) -> list[BaseMessage]:
    """
    Convert UI turns to LangChain chat messages, preserving order.

    Args:
        turns: Prior turns, oldest first
        system_prompt: Optional system message placed first

    Returns:
        list[BaseMessage]: Provider-ready history
    """
    messages: list[BaseMessage] = []
    if system_prompt:
        messages.append(SystemMessage(content=system_prompt))
    for turn in turns:
        messages.append(_ROLE_TO_MESSAGE[turn.role](content=turn.text))
    return messages


def chunk_text(content) -> str:
    """Flatten chunk content, which providers send as a string or a list of blocks."""
    if isinstance(content, list):
        return "".join(
            item if isinstance(item, str) else (item.get("text", "") if isinstance(item, dict) else str(item))
            for item in content
        )
    return str(content) if content else ""


class CompletionStreamer:
    """
    Streams one completion per call from a LangChain chat model.

    Provider failures and timeouts surface as ProviderError. Closing the
    generator early closes the provider stream.
    """

    def __init__(
        self,
        model: BaseChatModel,
        model_id: str,
        max_duration_seconds: float = 30,
        system_prompt: str | None = None,
    ) -> None:
        """
        Initialize streamer.

        Args:
            model: LangChain chat model supporting astream()
            model_id: Model identifier, for logs and errors
            max_duration_seconds: Deadline for the whole completion
            system_prompt: Optional system message prepended to every history
        """
        self.model = model
        self.model_id = model_id
        self.max_duration_seconds = max_duration_seconds
        self.system_prompt = system_prompt

    @classmethod
    def from_settings(cls, settings: LLMSettings) -> "CompletionStreamer":
        """
        Build a streamer for the configured provider and model.

        Args:
            settings: LLM settings (provider, model, temperature, ...)

        Returns:
            CompletionStreamer: Ready-to-use streamer
        """
        kwargs = {}
        if settings.temperature is not None:
            kwargs["temperature"] = settings.temperature
        model = init_chat_model(settings.model, model_provider=settings.provider, **kwargs)
        logger.info(
            "Chat model initialized",
            extra={"provider": settings.provider, "model": settings.model},
        )
        return cls(
            model=model,
            model_id=settings.model,
            max_duration_seconds=settings.max_duration_seconds,
            system_prompt=settings.system_prompt,
        )

    async def astream(self, turns: Sequence[UIMessage]) -> AsyncGenerator[str, None]:
        """
        Stream completion text for the given history.

        Args:
            turns: Full conversation history, oldest first

        Yields:
            str: Non-empty text chunks in provider order

        Raises:
            ProviderError: If the provider fails or the deadline passes
        """
        messages = to_langchain_messages(turns, self.system_prompt)
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.max_duration_seconds
        stream = self.model.astream(messages)
        chunk_count = 0

        logger.info(f"{__name__}:astream - START model={self.model_id} history_len={len(messages)}")
        try:
            while True:
                remaining = deadline - loop.time()
                if remaining <= 0:
                    raise ProviderError(TIMEOUT_ERROR_MESSAGE, model=self.model_id)
                try:
                    chunk = await asyncio.wait_for(stream.__anext__(), timeout=remaining)
                except StopAsyncIteration:
                    break
                except asyncio.TimeoutError as e:
                    raise ProviderError(TIMEOUT_ERROR_MESSAGE, model=self.model_id) from e
                except Exception as e:
                    log_exception_with_context(
                        logger, "Model provider failed mid-stream", e, model=self.model_id
                    )
                    raise ProviderError(PROVIDER_ERROR_MESSAGE, model=self.model_id) from e

                text = chunk_text(chunk.content)
                if text:
                    chunk_count += 1
                    yield text
        finally:
            await stream.aclose()

        logger.info(f"{__name__}:astream - END model={self.model_id} chunks={chunk_count}")
