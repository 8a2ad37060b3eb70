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
        env_prefix="DYNASCHEMA_",
        case_sensitive=False,
    )

    # Limits
    limit_count: int = Field(
        default=5000,
        description="Ceiling used when counting totals for list operations",
    )
    max_roles: int = Field(
        default=100,
        description="Maximum number of roles or permissions accepted in one list",
    )
    relationship_max_depth: int = Field(
        default=3,
        ge=1,
        description="Maximum nesting depth walked by the relationship resolver",
    )
    array_index_length: int = Field(
        default=255,
        description="Key length used for array attributes in indexes",
    )

    # Application
    service_name: str = Field(default="dynaschema", description="Service name in logs")
    environment: Literal["development", "staging", "production", "test"] = Field(
        default="development",
        description="Environment name",
    )
    log_level: str = Field(default="INFO", description="Logging level")
    log_json: bool = Field(default=False, description="Emit logs as JSON lines")
    debug: bool = Field(default=False, description="Debug mode")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
