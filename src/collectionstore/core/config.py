"""Configuration management for CollectionStore.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. The database connection is selected by
the deployment environment name unless an explicit URL is provided.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATABASE_URLS: dict[str, str] = {
    "development": "sqlite+aiosqlite:///./data/collectionstore.db",
    "testing": "sqlite+aiosqlite:///:memory:",
}


class Settings(BaseSettings):
    """Application configuration settings.

    Settings are loaded from environment variables and .env files.
    All configuration values are validated at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="COLLECTIONSTORE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    app_name: str = "CollectionStore"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"

    # Database Settings
    database_url: str | None = Field(
        default=None,
        description="Explicit database URL; overrides the per-environment default",
    )
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_pool_recycle: int = 3600
    db_echo: bool = False
    db_operation_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Seconds a single store operation may take before it fails",
    )

    # Migration Settings
    migrations_path: str = "alembic"

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    @model_validator(mode="after")
    def validate_production_database(self) -> "Settings":
        """Require an explicit database URL in production."""
        if self.is_production and not self.database_url:
            raise ValueError(
                "COLLECTIONSTORE_DATABASE_URL must be set when the environment is production."
            )
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == "testing"

    @property
    def resolved_database_url(self) -> str:
        """Get the database URL for the current environment."""
        if self.database_url:
            return self.database_url
        return DEFAULT_DATABASE_URLS[self.environment]

    @property
    def database_url_sync(self) -> str:
        """Get synchronous database URL for tools that cannot use async drivers."""
        url = self.resolved_database_url
        if url.startswith("sqlite+aiosqlite"):
            return url.replace("sqlite+aiosqlite", "sqlite")
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql")
        return url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Cached application settings instance.
    """
    return Settings()
