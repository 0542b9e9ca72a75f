"""
Configuration Settings

This module defines application configuration using Pydantic Settings.
All configuration is loaded from environment variables or .env file.

Design Decisions:
- Uses pydantic-settings for type-safe configuration
- Defaults to PostgreSQL on the `warplink-db` host, built from DB_USER/DB_PASSWORD
- DATABASE_URL overrides the default entirely (SQLite works for local runs and tests)
- ENVIRONMENT=prod requires TLS on the database connection
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["Settings", "get_settings", "BASE_DIR"]

BASE_DIR = Path(__file__).resolve().parent.parent.parent

DEFAULT_DB_HOST = "warplink-db:5432"
DEFAULT_DB_NAME = "warplink"
PRODUCTION = "prod"

_ASYNC_DRIVERS = {
    "postgres://": "postgresql+asyncpg://",
    "postgresql://": "postgresql+asyncpg://",
    "sqlite://": "sqlite+aiosqlite://",
}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Server Configuration
    HOST: str = Field(default="0.0.0.0", description="Bind address")
    PORT: int = Field(default=3000, description="Listen port")
    ENVIRONMENT: str = Field(
        default="dev",
        description="Deployment environment; 'prod' requires TLS to the database"
    )
    LOG_LEVEL: str = Field(default="INFO", description="Root log level")

    # Database Configuration
    DATABASE_URL: Optional[str] = Field(
        default=None,
        description="Database connection string; built from DB_USER/DB_PASSWORD when unset"
    )
    DB_USER: str = Field(default="postgres")
    DB_PASSWORD: str = Field(default="postgres")
    DB_POOL_SIZE: int = Field(default=20, ge=1, description="Connection pool capacity")
    DB_POOL_TIMEOUT: float = Field(
        default=30.0,
        gt=0,
        description="Seconds to wait for a pooled connection before failing"
    )
    HEALTH_ACQUIRE_TIMEOUT: float = Field(
        default=2.0,
        gt=0,
        description="Upper bound in seconds on the health check's connection acquire"
    )
    RUN_MIGRATIONS: bool = Field(
        default=True,
        description="Run alembic upgrade head during startup"
    )

    # Short Code Configuration
    MAX_CODE_ATTEMPTS: int = Field(
        default=10,
        ge=1,
        description="Candidate codes tried before giving up with 503"
    )
    INSERT_CONFLICT_RETRIES: int = Field(
        default=1,
        ge=0,
        description="Regenerations allowed after a unique violation at insert time"
    )
    MAX_URL_LENGTH: int = Field(default=2048, ge=1, description="Longest accepted long URL")

    # Application Configuration
    BASE_URL: Optional[str] = Field(
        default=None,
        description="Public origin for short links; derived from the Host header when unset"
    )

    @property
    def is_prod(self) -> bool:
        return self.ENVIRONMENT == PRODUCTION

    @property
    def sqlalchemy_url(self) -> str:
        """Connection string with an async driver and, in prod, the TLS directive."""
        url = self.DATABASE_URL or (
            f"postgres://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{DEFAULT_DB_HOST}/{DEFAULT_DB_NAME}"
        )
        for prefix, replacement in _ASYNC_DRIVERS.items():
            if url.startswith(prefix):
                url = replacement + url[len(prefix):]
                break

        if self.is_prod:
            directive = "ssl=require" if "+asyncpg" in url else "sslmode=require"
            separator = "&" if "?" in url else "?"
            url = f"{url}{separator}{directive}"
        return url


@lru_cache
def get_settings() -> Settings:
    """Settings read once from the process environment."""
    return Settings()
