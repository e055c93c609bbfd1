"""Application configuration from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Admin backend REST API
    admin_api_url: str = Field(
        default="http://localhost:3000/api",
        description="Admin backend base URL",
    )
    admin_api_token: str = Field(default="", description="Bearer token for the admin API")
    admin_api_timeout: float = Field(default=15.0, gt=0, description="Request timeout, seconds")

    # Cascade
    cascade_concurrency: int = Field(
        default=8,
        ge=1,
        description="Max concurrent per-user updates during a cascade",
    )

    # Edit sessions
    session_ttl: float = Field(
        default=1800.0,
        gt=0,
        description="Seconds an untouched edit session is kept",
    )
    session_max: int = Field(default=1000, ge=1, description="Max open edit sessions")

    # HTTP service
    cors_origins: str = Field(
        default="http://localhost:5173",
        description="Comma-separated allowed CORS origins",
    )

    # Application
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Environment name",
    )
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["text", "json"] = Field(default="text", description="Log output format")
    debug: bool = Field(default=False, description="Debug mode")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
