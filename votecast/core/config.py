"""Configuration management for the VoteCast service."""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = Field(default="VoteCast")
    version: str = Field(default="0.1.0")
    docs_url: str | None = Field(default="/docs")
    redoc_url: str | None = Field(default="/redoc")
    openapi_url: str = Field(default="/openapi.json")

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)

    database_url: str = Field(default="postgresql+psycopg://votecast:votecast@db:5432/votecast")
    database_require_ssl: bool = Field(default=False)
    auto_create_schema: bool = Field(default=True)

    session_secret: str = Field(default="vote-secret-key")
    session_cookie_name: str = Field(default="votecast_session")
    session_ttl_seconds: int = Field(default=86400)
    session_cookie_secure: bool = Field(default=False)

    google_client_id: str | None = Field(default=None)
    google_client_secret: str | None = Field(default=None)
    callback_url: str = Field(default="/auth/google/callback")
    google_authorize_url: str = Field(default="https://accounts.google.com/o/oauth2/v2/auth")
    google_token_url: str = Field(default="https://oauth2.googleapis.com/token")
    google_userinfo_url: str = Field(default="https://openidconnect.googleapis.com/v1/userinfo")
    oauth_timeout_seconds: float = Field(default=10.0)

    # Shared secret guarding /api/results. Unset means nobody can read results.
    admin_key: str | None = Field(default=None)

    enable_metrics: bool = Field(default=True)
    enable_tracing: bool = Field(default=False)
    otel_exporter_endpoint: str | None = Field(default=None)
    audit_log_enabled: bool = Field(default=True)

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()


__all__ = ["Settings", "get_settings"]
