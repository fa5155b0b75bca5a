"""
HTTP server settings.

Dependencies: pydantic, pydantic_settings
System role: uvicorn and CORS configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from backend.configs.base import BaseSettings


class APISettings(BaseSettings):
    """API server configuration (API_* environment variables)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="API_",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8000, description="Bind port")
    cors_origins: list[str] = Field(default_factory=lambda: ["*"], description="Allowed CORS origins")
    create_tables_on_startup: bool = Field(
        default=True,
        description="Run metadata.create_all when the app starts",
    )
