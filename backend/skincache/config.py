"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Secrets (MineSkin API key, DB password) come from environment variables only
    - get_settings() is cached (lru_cache) — single instance per process
    - The engine never reads Settings; it receives SkinCacheConfig via to_skin_config()

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - default_skins accepts a JSON list or a comma-separated string
"""

import json
from functools import lru_cache
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from skincache.core.skin_config import SkinCacheConfig


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "postgresql+asyncpg://skins:skins@db:5432/skins"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Default skins
    default_skins: Annotated[list[str], NoDecode] = []
    default_skins_enabled: bool = False
    default_skins_premium: bool = False

    @field_validator("default_skins", mode="before")
    @classmethod
    def split_default_skins(cls, v):
        if isinstance(v, str) and v.strip().startswith("["):
            return json.loads(v)
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    # Freshness
    disallow_auto_update_skin: bool = False
    skin_expires_after: int = 20  # minutes

    # Upstream services
    mojang_api_url: str = "https://api.mojang.com"
    mojang_session_url: str = "https://sessionserver.mojang.com"
    mineskin_api_url: str = "https://api.mineskin.org"
    mineskin_api_key: str = ""
    http_timeout_seconds: float = 10.0
    http_max_retries: int = 3
    http_base_delay_ms: int = 500
    http_max_delay_ms: int = 10_000

    # Platform
    platform_version: str | None = None

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    def to_skin_config(self) -> SkinCacheConfig:
        return SkinCacheConfig(
            default_skins=tuple(self.default_skins),
            default_skins_enabled=self.default_skins_enabled,
            default_skins_premium=self.default_skins_premium,
            disallow_auto_update_skin=self.disallow_auto_update_skin,
            skin_expires_after=self.skin_expires_after,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
