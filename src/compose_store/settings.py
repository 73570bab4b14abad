"""
compose_store.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide env-driven settings for the pool and logging.
- Hide the connection descriptor from repr/logging (it may carry a password).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="COMPOSE_STORE_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "compose-store"
    log_level: str = "INFO"

    # Persistence
    database_url: str = Field(default="sqlite+aiosqlite:///./compose_store.db", repr=False)
    echo_sql: bool = False

    # Pool sizing; ignored for in-memory SQLite which runs on a single static connection.
    pool_size: int = Field(default=10, ge=1)
    max_overflow: int = Field(default=5, ge=0)
    pool_timeout: float = Field(default=30.0, gt=0)
    pool_recycle: int = -1
    pool_pre_ping: bool = True


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for every caller.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# The descriptor is handed to SQLAlchemy as-is; parsing and validation of the
# URL happens in `compose_store.db.pool.open_database`.
