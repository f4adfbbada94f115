"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    public_base_url: str = "http://localhost:8000"
    feed_page_size: int = 20
    feed_session_ttl_seconds: int = 3600
    avatars_bucket: str = "avatars"
    oauth_providers: str = "google"
    session_cookie_secure: bool = False
    environment: str = _ENVIRONMENT
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_oauth_providers(raw: str | None) -> frozenset[str]:
    """Parse the enabled OAuth provider names from env."""
    if raw is None:
        return frozenset()
    providers = {chunk.strip().lower() for chunk in raw.split(",")}
    providers.discard("")
    return frozenset(providers)
