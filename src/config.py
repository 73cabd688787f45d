"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.constants import GENERATION_TIMEOUT, SESSION_TTL_SECONDS


class Settings(BaseSettings):
    """Application settings loaded once from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
    )

    # App
    app_env: Literal["development", "production", "test"] = "development"
    app_name: str = "README Generator"
    app_url: str = "http://localhost:3000"
    client_url: str = "http://localhost:3000"

    # GitHub OAuth
    github_client_id: str = ""
    github_client_secret: str = ""
    github_redirect_uri: str | None = None
    github_oauth_scope: str = "repo"

    # Gemini
    gemini_api_key: str = ""
    gemini_model: str = "gemini-1.5-flash"
    generation_timeout: float = GENERATION_TIMEOUT

    # Sessions
    session_backend: Literal["memory", "redis"] | None = None
    redis_url: str | None = None
    session_ttl_seconds: int = SESSION_TTL_SECONDS

    @field_validator("github_redirect_uri")
    @classmethod
    def blank_redirect_is_unset(cls, v: str | None) -> str | None:
        """Treat an empty redirect URI the same as a missing one."""
        if v is not None and not v.strip():
            return None
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"

    @property
    def resolved_session_backend(self) -> Literal["memory", "redis"]:
        """Session backend to use: explicit choice, else redis in production."""
        if self.session_backend is not None:
            return self.session_backend
        return "redis" if self.is_production else "memory"

    @property
    def oauth_configured(self) -> bool:
        return bool(self.github_client_id and self.github_client_secret)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
