# Settings - environment-driven configuration for pocketcal.
# Created: 2026-10-18

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """pocketcal settings.

    Values come from ``POCKETCAL_*`` environment variables, then ``.env``,
    then the defaults below.
    """

    model_config = SettingsConfigDict(
        env_prefix="POCKETCAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # OAuth client registration
    google_oauth_client_id: str | None = None
    google_oauth_client_secret: str | None = None
    google_oauth_redirect_uri: str = "http://localhost:8888/oauth/callback"

    # Endpoints
    oauth_auth_url: str = "https://accounts.google.com/o/oauth2/auth"
    oauth_token_url: str = "https://oauth2.googleapis.com/token"
    calendar_api_base: str = "https://www.googleapis.com/calendar/v3"

    # Transport
    http_timeout: float = Field(default=15.0, gt=0)
    token_expiry_skew: float = Field(default=60.0, ge=0)  # seconds

    config_dir: Path = Path.home() / ".pocketcal"


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings (cached)."""
    return Settings()


def get_config_dir() -> Path:
    """Get/create the pocketcal config directory."""
    d = get_settings().config_dir
    d.mkdir(parents=True, exist_ok=True)
    return d
