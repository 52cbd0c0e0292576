"""ChronoSync Configuration - environment-driven settings.

Settings are loaded once at import time and never mutated afterwards.
Tests that need different values reload this module or call
``get_settings.cache_clear()``.
"""

from datetime import timedelta
from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from chronosync import __version__

# HS256 keys shorter than the digest size are trivially brute-forced
MIN_JWT_SECRET_LENGTH = 32


class Settings(BaseSettings):
    """Application settings, read from environment variables and ``.env``."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "ChronoSync"
    app_version: str = __version__
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Database
    database_url: str = "sqlite+aiosqlite:///./chronosync.db"
    db_pool_size: int = 20
    db_max_overflow: int = 20
    db_pool_timeout: int = 30
    db_pool_recycle: int = 1800

    # JWT
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    jwt_expiration_hours: int = 24

    # Login rate limiting (failed attempts per client IP)
    login_rate_limit_attempts: int = 5
    login_rate_limit_window_seconds: int = 60

    # HTTP
    cors_origins: str = "http://localhost:3000"
    enable_metrics: bool = False

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret_key(cls, v: str) -> str:
        if len(v) < MIN_JWT_SECRET_LENGTH:
            raise ValueError(
                f"JWT_SECRET_KEY must be at least {MIN_JWT_SECRET_LENGTH} characters. "
                'Generate one with: python -c "import secrets; print(secrets.token_urlsafe(48))"'
            )
        return v

    @field_validator("jwt_expiration_hours")
    @classmethod
    def validate_jwt_expiration_hours(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("JWT_EXPIRATION_HOURS must be positive")
        return v

    @property
    def jwt_expiration(self) -> timedelta:
        """Lifetime of a minted bearer token."""
        return timedelta(hours=self.jwt_expiration_hours)

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()


settings = get_settings()
