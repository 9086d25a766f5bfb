"""
hackathon_web.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the app and its session layer.
- Hide secrets from repr/logging (session secret).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Env-driven configuration (`HACKATHON_*`), optionally read from a local `.env` file.
    Defaults are safe for local development only.
    """

    model_config = SettingsConfigDict(
        env_prefix="HACKATHON_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "hackathon-web"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 3000

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./hackathon.db"

    # Sessions
    session_secret: str = Field(default="thisshouldbeabettersecret!", repr=False)
    session_cookie_name: str = "session"
    session_cookie_secure: bool = False
    session_token_issuer: str = "hackathon-web"
    session_max_age_seconds: int = Field(default=7 * 24 * 60 * 60, ge=60)
    session_touch_after_seconds: int = Field(default=24 * 60 * 60, ge=0)
    session_purge_interval_seconds: float = Field(default=60 * 60, gt=0)
    # Health-check endpoints get a throwaway session that is never stored or sent as a cookie.
    session_exempt_paths: list[str] = Field(default_factory=lambda: ["/healthz", "/readyz"])


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Cookie lifetime and store-side expiry both derive from `session_max_age_seconds`;
# the store's sliding window is the authority (see `db.repositories.sessions`).
