"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./notifications.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key used to verify the JWT bearer tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    application_name: str = Field(
        default="bookyoonnotificationservice",
        description="Prefix of the alert headers attached to REST responses",
        min_length=1,
    )
    api_prefix: str = Field(
        default="/api",
        description="Path prefix under which the REST routers are mounted",
    )
    cors_allowed_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:4200"],
        description="Origins allowed to call the API from a browser",
    )
    default_page_size: int = Field(
        default=20,
        description="Page size used by listings when the client sends none",
        gt=0,
    )
    max_page_size: int = Field(
        default=2000,
        description="Largest page size a client may request",
        gt=0,
    )
    log_level: str = Field(
        default="INFO",
        description="Level applied to the root logger when the application starts",
    )

    @field_validator("api_prefix")
    @classmethod
    def _normalize_api_prefix(cls, value: str) -> str:
        stripped = value.strip().rstrip("/")
        if stripped and not stripped.startswith("/"):
            stripped = f"/{stripped}"
        return stripped

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
