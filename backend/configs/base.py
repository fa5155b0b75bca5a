"""
Shared settings base.

Every settings class reads the process environment and an optional .env
file. Subclasses add their own env_prefix.

Dependencies: pydantic, pydantic_settings
System role: Common fields for all configuration classes
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Fields common to the whole deployment (unprefixed env vars)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(default="development", description="Deployment name, logged at startup")
    debug: bool = Field(default=False, description="Verbose error output")
    log_level: str = Field(default="INFO", description="Root log level passed to configure_logging()")
