"""
Settings, read from STOREFRONT_* environment variables or a .env file.
"""

from __future__ import annotations

from datetime import timedelta
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from storefront.accounts import BCRYPT_ROUNDS, CANCELLATION_LIMIT
from storefront.orders import CANCELLATION_WINDOW


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=".env",
        extra="ignore",
    )

    database_url: str = "sqlite+aiosqlite:///./storefront.db"
    debug: bool = False
    log_level: str = "INFO"

    # required, there is no default secret
    jwt_secret: str = Field(min_length=8)
    jwt_lifetime: timedelta = timedelta(days=30)
    bcrypt_rounds: int = Field(default=BCRYPT_ROUNDS, ge=4, le=31)
    admin_signup_key: str | None = None

    cancellation_window: timedelta = CANCELLATION_WINDOW
    cancellation_limit: int = Field(default=CANCELLATION_LIMIT, ge=0)

    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]


@lru_cache
def get_settings() -> Settings:
    return Settings()


__all__ = ("Settings", "get_settings")
