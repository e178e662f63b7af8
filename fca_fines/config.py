"""
Configuration management for the FCA Fines API.

Supports multiple environments (local, development, production) with
different database and site URL configurations.

Responsibility: Centralized configuration and environment management
"""

from enum import Enum
from typing import Optional, List
import json
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_BASE_URL = "https://fcafines.memaconsultants.com"


class Environment(str, Enum):
    """Deployment environment"""
    LOCAL = "local"
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class DatabaseConfig(BaseSettings):
    """Database configuration"""

    # Connection settings - first matching env var wins (Neon/Vercel/Railway names)
    database_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "NEON_FCA_FINES_URL",
            "DATABASE_URL",
            "POSTGRES_URL",
            "database_url",
        ),
    )
    driver: str = Field(default="postgresql+asyncpg")
    host: Optional[str] = Field(default="localhost")
    port: Optional[int] = Field(default=5432)
    database: str = Field(default="fca_fines")
    username: Optional[str] = Field(default=None)
    password: Optional[str] = Field(default=None)

    # Connection pool settings
    pool_size: int = Field(default=5)
    max_overflow: int = Field(default=10)
    pool_timeout: int = Field(default=30)
    pool_recycle: int = Field(default=1800)

    # Query settings
    echo: bool = Field(default=False)

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True
    )

    def _host_url(self, driver: str) -> str:
        """Build a URL from host/port/credentials for the given driver."""
        auth = ""
        if self.username:
            auth = self.username
            if self.password:
                auth = f"{auth}:{self.password}"
            auth = f"{auth}@"

        host_port = self.host or "localhost"
        if self.port:
            host_port = f"{host_port}:{self.port}"

        return f"{driver}://{auth}{host_port}/{self.database}"

    @property
    def connection_string(self) -> str:
        """
        Build async database connection string.

        Returns:
            SQLAlchemy connection string using the asyncpg driver
        """
        if self.database_url:
            url = self.database_url
            # Hosted providers hand out plain postgres:// URLs
            if url.startswith("postgres://"):
                url = url.replace("postgres://", "postgresql://", 1)
            if "+psycopg" in url:
                url = url.replace("+psycopg", "+asyncpg", 1)
            elif url.startswith("postgresql://"):
                url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
            return url

        if not self.driver.startswith("postgresql"):
            raise ValueError(
                f"Unsupported database driver '{self.driver}'. Configure a PostgreSQL connection."
            )

        return self._host_url(self.driver)

    @property
    def sync_connection_string(self) -> str:
        """
        Build synchronous database connection string for Alembic migrations.

        Returns:
            SQLAlchemy sync connection string (psycopg driver)
        """
        return self.connection_string.replace("+asyncpg", "+psycopg", 1)


class AppConfig(BaseSettings):
    """Application configuration"""

    # Environment
    environment: Environment = Field(default=Environment.LOCAL)
    debug: bool = Field(default=False)

    # Application metadata
    app_name: str = Field(default="FCA Fines API")
    app_version: str = Field(default="1.0.0")

    # Logging
    log_level: str = Field(default="INFO")

    # API settings
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000)

    # Public site root used for absolute redirect targets
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        validation_alias=AliasChoices("APP_BASE_URL", "NEXT_PUBLIC_BASE_URL", "base_url"),
    )

    # Digest verification links are valid for this long
    verification_token_ttl_hours: int = Field(default=24, ge=1)

    # CORS settings
    cors_origins: List[str] = Field(
        default=["http://localhost:5173", "http://localhost:3000"],
        description="Allowed CORS origins (JSON list or comma-separated in env)"
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Redirect targets are built as f"{base_url}?..."."""
        return v.rstrip("/")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from JSON string or comma-separated list"""
        if isinstance(v, list):
            return v
        if isinstance(v, str):
            v = v.strip()
            if (v.startswith('"') and v.endswith('"')) or (v.startswith("'") and v.endswith("'")):
                v = v[1:-1]
            if v.startswith("["):
                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    pass
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v


class Settings(BaseSettings):
    """
    Global settings container.

    Loads configuration from:
    1. Environment variables
    2. .env file
    3. Default values

    Example:
        # Local development
        settings = Settings()

        # Explicit configuration (tests, scripts)
        settings = Settings(
            app=AppConfig(base_url="https://example.test"),
            db=DatabaseConfig(database_url="postgresql://localhost/fca_fines")
        )
    """

    app: AppConfig = Field(default_factory=AppConfig)
    db: DatabaseConfig = Field(default_factory=DatabaseConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
