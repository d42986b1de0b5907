"""
Configuration settings for RescueLink Backend.

Uses Pydantic Settings for environment variable management.
"""

import os
from typing import List, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_env_file() -> str:
    """Get the appropriate environment file based on ENV setting."""
    env_file = f".env.{os.getenv('ENV', 'development')}"
    if os.path.exists(env_file):
        return env_file
    return ".env"


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Environment
    ENV: str = Field(default="development")
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: str = Field(default="INFO")

    # Logging Control
    ENABLE_FILE_LOGGING: bool = Field(default=True)
    ENABLE_REQUEST_LOGGING: bool = Field(default=True)

    # Application
    APP_NAME: str = Field(default="RescueLink Backend")
    VERSION: str = Field(default="1.0.0")

    # Server
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=5000)

    origins: List[str] = [
        "http://localhost:3000",  # frontend URL
        "http://localhost:5173",
    ]

    DATABASE_URL: Optional[str] = Field(default="sqlite+aiosqlite:///./rescuelink.db")
    PRODUCTION_DATABASE_URL: Optional[str] = Field(default=None)

    DATABASE_POOL_SIZE: int = Field(default=10)
    DATABASE_MAX_OVERFLOW: int = Field(default=20)

    @property
    def database_url(self) -> str:
        if self.ENV == "production":
            return self.PRODUCTION_DATABASE_URL or ""
        return self.DATABASE_URL or ""

    # Security
    SECRET_KEY: str = Field(..., min_length=1)
    ALGORITHM: str = Field(default="HS256")
    ACCESS_TOKEN_EXPIRE_DAYS: int = Field(default=1)
    REMEMBER_ME_EXPIRE_DAYS: int = Field(default=30)

    # Zone resolution
    ZONE_RESOLVER: str = Field(default="heuristic")  # heuristic | nominatim
    NOMINATIM_BASE_URL: str = Field(default="https://nominatim.openstreetmap.org")
    NOMINATIM_USER_AGENT: str = Field(default="RescueLink/1.0")
    NOMINATIM_TIMEOUT: float = Field(default=10.0)

    # Sentry (Optional)
    SENTRY_DSN: Optional[str] = Field(default=None)
    SENTRY_ENVIRONMENT: str = Field(default="development")

    @field_validator("SECRET_KEY")
    @classmethod
    def secret_key_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("SECRET_KEY must be set to a non-empty value")
        return value

    @field_validator("ZONE_RESOLVER")
    @classmethod
    def known_zone_resolver(cls, value: str) -> str:
        value = value.lower()
        if value not in ("heuristic", "nominatim"):
            raise ValueError("ZONE_RESOLVER must be 'heuristic' or 'nominatim'")
        return value


# Raises at import when SECRET_KEY is absent.
settings = Settings(_env_file=get_env_file())
