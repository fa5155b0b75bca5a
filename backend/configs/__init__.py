"""
Configuration package.

pydantic-settings classes per concern, aggregated by Settings:
  - DatabaseSettings (POSTGRES_*, DATABASE_URL)
  - LLMSettings (LLM_*)
  - APISettings (API_*)
"""

from backend.configs.api import APISettings
from backend.configs.database import DatabaseSettings
from backend.configs.llm import LLMSettings
from backend.configs.settings import Settings, get_settings

__all__ = [
    "APISettings",
    "DatabaseSettings",
    "LLMSettings",
    "Settings",
    "get_settings",
]
