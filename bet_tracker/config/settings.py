"""
Configuration management using pydantic-settings.

Loads configuration from environment variables and .env file.
"""
from decimal import Decimal
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaginationSettings(BaseSettings):
    """Page size limits for list endpoints."""

    model_config = SettingsConfigDict(env_prefix="PAGINATION_")

    default_limit: int = Field(
        default=20,
        description="Default page size for picks and parlays",
    )
    bankroll_default_limit: int = Field(
        default=50,
        description="Default page size for bankroll history",
    )
    max_limit: int = Field(
        default=100,
        description="Largest page size a client may request",
    )


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Database
    database_url: str = Field(
        default="sqlite:///bet_tracker.db",
        description="Database connection URL",
    )

    # Sessions
    secret_key: str = Field(
        default="dev-only-secret-key-change-me-in-production",
        description="Key used to sign session tokens",
    )
    jwt_algorithm: str = Field(default="HS256")
    session_ttl_minutes: int = Field(
        default=60 * 24 * 30,
        description="Lifetime of an issued session token",
    )

    # Demo mode serves sample data to signed-out readers
    demo_mode: bool = Field(default=True)

    # Bankroll
    default_starting_bankroll: Decimal = Field(
        default=Decimal("1000.00"),
        description="Starting bankroll assigned to new accounts",
    )

    # HTTP
    cors_origins: list[str] = Field(
        default=["http://localhost:3000"],
        description="Origins allowed to call the API from a browser",
    )

    # Logging
    log_level: str = Field(default="INFO")
    log_file: Optional[str] = Field(default="logs/bet_tracker.log")
    debug: bool = Field(default=False)

    pagination: PaginationSettings = Field(default_factory=PaginationSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return v.upper()

    @field_validator("session_ttl_minutes")
    @classmethod
    def validate_session_ttl(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("session_ttl_minutes must be positive")
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
