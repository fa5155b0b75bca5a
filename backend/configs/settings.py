"""
Aggregated application settings.

Dependencies: pydantic, backend.configs.*
System role: Single configuration object handed to the app factory
"""

from functools import lru_cache

from pydantic import Field

from backend.configs.api import APISettings
from backend.configs.base import BaseSettings
from backend.configs.database import DatabaseSettings
from backend.configs.llm import LLMSettings


class Settings(BaseSettings):
    """
    Top-level settings.

    Each section reads its own prefixed environment variables when the
    Settings object is built.
    """

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    api: APISettings = Field(default_factory=APISettings)


@lru_cache
def get_settings() -> Settings:
    """Settings read once per process; tests pass their own to create_app()."""
    return Settings()
