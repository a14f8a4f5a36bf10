"""
Application Configuration Module

This module uses Pydantic Settings for type-safe configuration management.

Settings are read from environment variables (case-insensitive) and from a
local .env file. The database connection is described by discrete
parameters (DB_HOST, DB_PORT, DB_USER, DB_NAME, DB_SSL_MODE, DB_PASSWORD),
which are assembled into a SQLAlchemy URL. DATABASE_URL, when set, takes
precedence over the assembled URL (tests point it at SQLite).

PATTERN: Settings Singleton
===========================
A single Settings instance is cached with @lru_cache, so the .env file is
read once and every module sees the same values. Invalid values raise a
ValidationError on first access, which makes a bad configuration fatal at
startup.

Usage:
    from crud_app.config import get_settings

    settings = get_settings()
    print(settings.sqlalchemy_url)
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    SECURITY NOTE:
    ==============
    secret_key has a validator: placeholder values or short keys raise
    errors at startup, so the service never signs tokens with a default.
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_name: str = Field(
        default="crud-app",
        description="Application name displayed in docs and logs"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode (detailed errors, SQL echo, auto-reload)"
    )
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind the server to"
    )
    port: int = Field(
        default=8080,
        description="Port to bind the server to"
    )
    environment: str = Field(
        default="development",
        description="Environment: development, staging, production"
    )
    shutdown_timeout: int = Field(
        default=10,
        ge=0,
        description="Seconds to wait for in-flight requests on shutdown"
    )

    # -------------------------------------------------------------------------
    # Database Settings
    # -------------------------------------------------------------------------
    db_host: str = Field(default="localhost", description="PostgreSQL host")
    db_port: int = Field(default=5432, description="PostgreSQL port")
    db_user: str = Field(default="postgres", description="PostgreSQL user")
    db_name: str = Field(default="postgres", description="PostgreSQL database name")
    db_ssl_mode: str = Field(
        default="disable",
        description="libpq sslmode (disable, require, verify-full, ...)"
    )
    db_password: str = Field(default="", description="PostgreSQL password")
    database_url: str | None = Field(
        default=None,
        description="Full SQLAlchemy URL; overrides the DB_* parameters when set"
    )
    db_pool_size: int = Field(
        default=5,
        description="Number of permanent database connections"
    )
    db_max_overflow: int = Field(
        default=10,
        description="Maximum additional connections during high load"
    )
    db_auto_create: bool = Field(
        default=True,
        description="Create missing tables at startup"
    )

    # -------------------------------------------------------------------------
    # Security Settings
    # -------------------------------------------------------------------------
    secret_key: str = Field(
        default="REPLACE_WITH_YOUR_GENERATED_SECRET_KEY",
        description="Key used to sign access tokens"
    )
    access_token_ttl_minutes: int = Field(
        default=15,
        gt=0,
        description="Lifetime of JWT access tokens"
    )
    refresh_token_ttl_days: int = Field(
        default=30,
        gt=0,
        description="Lifetime of refresh tokens"
    )

    # -------------------------------------------------------------------------
    # Logging Settings
    # -------------------------------------------------------------------------
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------
    @property
    def sqlalchemy_url(self) -> URL:
        """
        Build the SQLAlchemy connection URL.

        URL.create() escapes credentials, so passwords containing '@' or
        '/' need no manual quoting.
        """
        if self.database_url:
            return make_url(self.database_url)

        return URL.create(
            drivername="postgresql+psycopg2",
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
            query={"sslmode": self.db_ssl_mode},
        )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that log_level is a valid Python logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: str) -> str:
        """
        Validate that secret_key is not a placeholder value.

        Raises:
            ValueError: If secret key is a placeholder or too short
        """
        placeholder_indicators = [
            "REPLACE_WITH",
            "change-me",
            "your-secret",
            "generate-with",
        ]

        for indicator in placeholder_indicators:
            if indicator.lower() in v.lower():
                raise ValueError(
                    "SECRET_KEY contains a placeholder value. "
                    "Generate a secure key with: openssl rand -hex 32"
                )

        if len(v) < 32:
            raise ValueError(
                "SECRET_KEY must be at least 32 characters long. "
                "Generate a secure key with: openssl rand -hex 32"
            )

        return v

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is a known value."""
        valid_envs = {"development", "staging", "production"}
        if v.lower() not in valid_envs:
            raise ValueError(f"environment must be one of {valid_envs}")
        return v.lower()


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    First call creates the Settings instance (reading .env and validating);
    later calls return the same object.
    """
    return Settings()
