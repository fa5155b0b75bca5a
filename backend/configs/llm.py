"""
Language model provider settings.

Selects the hosted chat model used for streamed completions.

Dependencies: pydantic, pydantic_settings
System role: Provider configuration for the chat streaming endpoint
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from backend.configs.base import BaseSettings


class LLMSettings(BaseSettings):
    """Chat model configuration (LLM_* environment variables)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LLM_",
        case_sensitive=False,
        extra="ignore",
    )

    provider: str = Field(default="openai", description="LangChain model provider key")
    model: str = Field(default="gpt-4o", description="Fixed model identifier")
    temperature: float | None = Field(default=None, description="Sampling temperature")
    max_duration_seconds: int = Field(
        default=30,
        description="Upper bound on a single streamed completion",
    )
    system_prompt: str | None = Field(
        default=None,
        description="Optional system message prepended to every history",
    )
