"""Application configuration."""

import os
from datetime import date, datetime
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    haircuts_api_url: str = "http://127.0.0.1:8000"
    http_timeout_seconds: float = 10
    timezone: str = "America/Argentina/Buenos_Aires"
    default_base_price: float = 8000
    cors_origins: str | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_cors_origins(raw: str | None) -> list[str]:
    """Parse a comma-separated list of allowed browser origins."""
    if raw is None:
        return []
    cleaned = raw.strip()
    if cleaned == "*":
        return ["*"]
    return [origin.strip() for origin in cleaned.split(",") if origin.strip()]


def local_today(timezone_name: str) -> date:
    """Return the current calendar date in a timezone."""
    return datetime.now(tz=ZoneInfo(timezone_name)).date()
