from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Environment-driven application configuration."""

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "Launch Dashboard"
    APP_ENV: str = Field(default="production", validation_alias=AliasChoices("APP_ENV", "NODE_ENV"))
    HOST: str = "0.0.0.0"
    PORT: int = 8089
    LOG_LEVEL: str = "INFO"

    # Shared secret for the settings area. Empty disables login entirely.
    PASSWORD: str = ""

    AUTH_COOKIE_NAME: str = "auth"
    AUTH_COOKIE_VALUE: str = "yes"
    AUTH_COOKIE_MAX_AGE: int = 60 * 60 * 24 * 7
    PROTECTED_PREFIX: str = "/settings"
    LOGIN_REDIRECT_DEFAULT: str = "/settings"

    UPSTREAM_BASE_URL: str = "https://launch-server.onrender.com"
    UPSTREAM_STATUS_PATH: str = "/status"
    UPSTREAM_MONTE_CARLO_PATH: str = "/montecarlo"
    UPSTREAM_TIMEOUT: float | None = None

    STATUS_VALIDATION: Literal["off", "warn", "strict"] = "warn"

    @field_validator("APP_ENV", mode="before")
    @classmethod
    def normalise_env(cls, value: object) -> str:
        return str(value or "production").strip().lower()

    @field_validator("UPSTREAM_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("UPSTREAM_TIMEOUT", mode="before")
    @classmethod
    def empty_timeout_is_none(cls, value: object) -> object:
        if value in ("", None):
            return None
        return value

    @property
    def is_development(self) -> bool:
        return self.APP_ENV in {"development", "dev"}

    @property
    def secure_cookies(self) -> bool:
        return not self.is_development

    @property
    def status_url(self) -> str:
        return f"{self.UPSTREAM_BASE_URL}{self.UPSTREAM_STATUS_PATH}"

    @property
    def monte_carlo_url(self) -> str:
        return f"{self.UPSTREAM_BASE_URL}{self.UPSTREAM_MONTE_CARLO_PATH}"


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    return AppSettings()
