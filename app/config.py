"""Application configuration settings."""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key shared with the auth service to verify JWT tokens",
        min_length=1,
    )
    jwt_algorithm: str = Field(
        default="HS256",
        description="Algorithm used to sign access tokens",
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    app_timezone: str = Field(
        default="UTC",
        description="Timezone used to store and present notification timestamps",
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173"],
        description="Origins allowed to call the API from a browser",
    )
    announcement_message_limit: int = Field(
        default=160,
        description="Maximum characters of an event description used in announcements",
        gt=0,
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


def setup_logging() -> None:
    """Configure the root logger with a single console handler."""

    settings = get_settings()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    # basicConfig leaves already configured handlers (uvicorn, pytest) alone.
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger().setLevel(level)


__all__ = ["Settings", "get_settings", "reset_settings_cache", "setup_logging"]
